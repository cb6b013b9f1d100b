# billing_pdf/styling/invoice/styler.py
from __future__ import annotations

from typing import Any

from billing_pdf.config import Settings, get_settings
from billing_pdf.styling.invoice.editor import json_to_invoice
from billing_pdf.styling.invoice.model import Invoice
from billing_pdf.styling.invoice.renderer import render_invoice, render_invoice_async


class InvoiceStyler:
    """
    Populated invoice record (dict) in, finished PDF out:
      pdf_bytes, invoice = InvoiceStyler().style(record)
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def style(self, record: Any) -> tuple[bytes, Invoice]:
        data = json_to_invoice(record)
        out = render_invoice(data, self.settings)
        return out, data

    async def style_async(self, record: Any) -> tuple[bytes, Invoice]:
        data = json_to_invoice(record)
        out = await render_invoice_async(data, self.settings)
        return out, data
