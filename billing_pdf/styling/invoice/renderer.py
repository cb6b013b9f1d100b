# billing_pdf/styling/invoice/renderer.py
from __future__ import annotations

import asyncio
import io
import logging
from typing import Optional, Tuple

from reportlab.lib.pagesizes import A4, letter
from reportlab.pdfgen import canvas

from billing_pdf.config import Settings, get_settings
from billing_pdf.errors import InvoiceRenderError
from billing_pdf.styling.common.brand import BrandAssets, register_brand_assets
from billing_pdf.styling.invoice.model import Invoice
from billing_pdf.styling.invoice.sections import SECTIONS, DrawContext, PageSpec

logger = logging.getLogger(__name__)

_PAGE_SIZES = {
    "A4": A4,
    "LETTER": letter,
}


def page_spec_for(settings: Settings) -> PageSpec:
    w, h = _PAGE_SIZES.get(settings.page_size.upper(), A4)
    return PageSpec(w=float(w), h=float(h))


def _draw_document(ctx: DrawContext, invoice: Invoice) -> int:
    y = ctx.top
    for emit in SECTIONS:
        y = emit(ctx, invoice, y)
    ctx.draw_page_marker()
    return ctx.page_no


def _render_once(
    invoice: Invoice,
    ps: PageSpec,
    settings: Settings,
    brand: BrandAssets,
    total_pages: Optional[int],
) -> Tuple[bytes, int]:
    buf = io.BytesIO()
    try:
        # invariant=1 pins creation date + document id, so equal input gives equal bytes
        c = canvas.Canvas(buf, pagesize=(ps.w, ps.h), invariant=1)
        c.setTitle(f"Invoice {invoice.invoice_number}".strip())
        if invoice.organization and invoice.organization.name:
            c.setAuthor(invoice.organization.name)

        ctx = DrawContext(c=c, ps=ps, settings=settings, brand=brand, total_pages=total_pages)
        pages = _draw_document(ctx, invoice)

        c.save()
        return buf.getvalue(), pages
    finally:
        buf.close()


def render_invoice(invoice: Invoice, settings: Settings | None = None) -> bytes:
    """
    Draw the invoice and return the finished PDF.

    Two passes: the first only counts pages so every page can say "Page N of M".
    Raises InvoiceRenderError on any drawing/engine failure; nothing partial is returned.
    """
    settings = settings or get_settings()
    label = invoice.invoice_number or "-"

    try:
        brand = register_brand_assets(settings.brand_dir)
        ps = page_spec_for(settings)

        _, total_pages = _render_once(invoice, ps, settings, brand, total_pages=None)
        pdf_bytes, _ = _render_once(invoice, ps, settings, brand, total_pages=total_pages)
    except Exception as e:
        logger.exception("Invoice %s: render failed", label)
        raise InvoiceRenderError(f"Could not render invoice {label}: {type(e).__name__}: {e}") from e

    logger.debug("Invoice %s: rendered %d page(s), %d bytes", label, total_pages, len(pdf_bytes))
    return pdf_bytes


async def render_invoice_async(invoice: Invoice, settings: Settings | None = None) -> bytes:
    """
    Same as render_invoice, run in a worker thread so an event loop is not blocked.
    """
    return await asyncio.to_thread(render_invoice, invoice, settings)
