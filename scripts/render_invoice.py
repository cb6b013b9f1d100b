# scripts/render_invoice.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from billing_pdf.errors import BillingPdfError
from billing_pdf.styling.invoice.styler import InvoiceStyler


def main() -> int:
    parser = argparse.ArgumentParser(description="Render a populated invoice JSON record to PDF")
    parser.add_argument("record", type=Path, help="Invoice JSON (populated memberId/organizationId/...)")
    parser.add_argument("--out", type=Path, default=None, help="Output PDF path (default: tmp/invoice-<number>.pdf)")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if not args.record.exists():
        raise FileNotFoundError(f"Invoice record not found: {args.record.resolve()}")

    record = json.loads(args.record.read_text(encoding="utf-8"))
    # API responses wrap the record: {"invoice": {...}}
    if isinstance(record, dict) and isinstance(record.get("invoice"), dict):
        record = record["invoice"]

    styler = InvoiceStyler()
    try:
        out_bytes, data = styler.style(record)
    except BillingPdfError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    out_path = args.out or Path(f"tmp/invoice-{data.invoice_number or 'draft'}.pdf")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(out_bytes)

    print("✅ Invoice rendered:", out_path.resolve())
    print("invoice_number :", data.invoice_number or "-")
    print("items          :", len(data.items))
    print("total          :", data.total)
    print("bytes          :", len(out_bytes))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
