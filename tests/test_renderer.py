from __future__ import annotations

import asyncio
import copy
from decimal import Decimal

import pytest

from conftest import pdf_pages, pdf_text

from billing_pdf.config import Settings
from billing_pdf.errors import BillingPdfError, InvoiceRenderError
from billing_pdf.styling.invoice import renderer
from billing_pdf.styling.invoice.model import InvoiceItem, Tax
from billing_pdf.styling.invoice.renderer import render_invoice, render_invoice_async
from billing_pdf.styling.invoice.styler import InvoiceStyler


def test_returns_pdf_bytes(minimal_invoice, settings):
    out = render_invoice(minimal_invoice, settings)
    assert out.startswith(b"%PDF-")
    assert pdf_pages(out) >= 1


def test_sections_present(sample_record, ascii_settings):
    out, _ = InvoiceStyler(ascii_settings).style(sample_record)
    text = pdf_text(out)

    assert "Airfit Indiranagar" in text
    assert "Tax Invoice" in text
    assert "JOHN DOE" in text
    assert "DESCRIPTION" in text
    assert "Base Fee: Rs.10000.00" in text
    assert "Tax (18%)" in text
    assert "Total Due" in text
    assert "TERMS AND CONDITIONS" in text
    assert "Thank You For Your Business!" in text
    assert "Customer Notes" in text
    assert "Bring ID on first visit." in text


def test_no_tax_line_without_tax(minimal_invoice, ascii_settings):
    text = pdf_text(render_invoice(minimal_invoice, ascii_settings))
    assert "Tax (" not in text
    assert "Subtotal" in text


def test_zero_tax_amount_hides_tax_line(minimal_invoice, ascii_settings):
    minimal_invoice.tax = Tax(rate=Decimal("18"), amount=Decimal("0"))
    text = pdf_text(render_invoice(minimal_invoice, ascii_settings))
    assert "Tax (" not in text


def test_customer_notes_only_when_present(minimal_invoice, ascii_settings):
    assert "Customer Notes" not in pdf_text(render_invoice(minimal_invoice, ascii_settings))

    minimal_invoice.customer_notes = "   "
    assert "Customer Notes" not in pdf_text(render_invoice(minimal_invoice, ascii_settings))

    minimal_invoice.customer_notes = "Paid via reception desk"
    assert "Customer Notes" in pdf_text(render_invoice(minimal_invoice, ascii_settings))


def test_fallback_company_name(minimal_invoice, ascii_settings):
    minimal_invoice.organization = None
    text = pdf_text(render_invoice(minimal_invoice, ascii_settings))
    assert "Company Name" in text
    assert "AIRFIT" in text


def test_empty_items(minimal_invoice, ascii_settings):
    minimal_invoice.items = []
    text = pdf_text(render_invoice(minimal_invoice, ascii_settings))
    assert "No items found" in text


def test_output_is_deterministic(sample_record, settings):
    styler = InvoiceStyler(settings)
    first, _ = styler.style(sample_record)
    second, _ = styler.style(sample_record)
    assert first == second


def test_long_item_list_paginates(minimal_invoice, ascii_settings):
    minimal_invoice.items = [
        InvoiceItem(description=f"Session pack {i}", amount=Decimal("500"), total=Decimal("500"))
        for i in range(40)
    ]
    out = render_invoice(minimal_invoice, ascii_settings)
    pages = pdf_pages(out)
    text = pdf_text(out)

    assert pages > 1
    assert f"Page 1 of {pages}" in text
    assert f"Page {pages} of {pages}" in text
    # header row repeats on continuation pages
    assert text.count("SERVICE FEE") >= 2


def test_letter_page_size(minimal_invoice):
    out = render_invoice(minimal_invoice, Settings(page_size="LETTER"))
    assert out.startswith(b"%PDF-")


def test_engine_failure_is_wrapped(minimal_invoice, settings, monkeypatch):
    def broken(ctx, invoice, y):
        raise ZeroDivisionError("boom")

    monkeypatch.setattr(renderer, "SECTIONS", [broken])

    with pytest.raises(InvoiceRenderError) as ei:
        render_invoice(minimal_invoice, settings)

    assert isinstance(ei.value.__cause__, ZeroDivisionError)
    assert isinstance(ei.value, BillingPdfError)
    assert "INV-1" in str(ei.value)


def test_async_render_matches_sync(minimal_invoice, settings):
    sync_bytes = render_invoice(minimal_invoice, settings)
    async_bytes = asyncio.run(render_invoice_async(minimal_invoice, settings))
    assert async_bytes == sync_bytes


def test_styler_async(sample_record, settings):
    out, data = asyncio.run(InvoiceStyler(settings).style_async(sample_record))
    assert out.startswith(b"%PDF-")
    assert data.invoice_number == "INV-2024-0042"


def test_render_leaves_invoice_untouched(sample_record, settings):
    invoice = InvoiceStyler(settings).style(sample_record)[1]
    before = copy.deepcopy(invoice)

    render_invoice(invoice, settings)

    assert invoice == before


def test_styler_leaves_record_untouched(sample_record, settings):
    before = copy.deepcopy(sample_record)
    InvoiceStyler(settings).style(sample_record)
    assert sample_record == before


def test_long_email_is_clipped_to_its_column(minimal_invoice, ascii_settings):
    minimal_invoice.member.email = "x" * 400 + "@example.com"

    text = pdf_text(render_invoice(minimal_invoice, ascii_settings))

    assert "xxxxx" in text
    assert "@example.com" not in text


def test_huge_item_description_spans_pages(minimal_invoice, ascii_settings):
    minimal_invoice.items = [InvoiceItem(description="word " * 3000, amount=Decimal("100"))]

    out = render_invoice(minimal_invoice, ascii_settings)
    pages = pdf_pages(out)

    assert pages > 2
    assert f"Page {pages} of {pages}" in pdf_text(out)
