# billing_pdf/errors.py
from __future__ import annotations


class BillingPdfError(Exception):
    pass


class InvoiceDataError(BillingPdfError, ValueError):
    """The invoice record could not be converted (bad number, bad date, not a mapping)."""


class InvoiceRenderError(BillingPdfError):
    """Drawing or writing the PDF failed. The engine error is chained as __cause__."""
