from __future__ import annotations

import copy
import io
from decimal import Decimal

import pytest
from pypdf import PdfReader

from billing_pdf.config import Settings
from billing_pdf.styling.invoice.model import (
    Invoice,
    InvoiceItem,
    Member,
    Organization,
)


SAMPLE_RECORD = {
    "_id": "665f1c2e8b1e4a0012a0b001",
    "invoiceNumber": "INV-2024-0042",
    "type": "new-booking",
    "isProForma": False,
    "status": "partial",
    "dateOfInvoice": "2024-01-15T00:00:00.000Z",
    "createdAt": "2024-01-15T10:00:00.000Z",
    "organizationId": {
        "_id": "org1",
        "name": "Airfit Indiranagar",
        "address": {"street": "12 MG Road", "city": "Bengaluru", "state": "Karnataka", "zipCode": "560001"},
        "email": "hello@airfit.example",
        "phone": "+91 98450 00000",
    },
    "memberId": {
        "_id": "mem1",
        "firstName": "john",
        "lastName": "Doe",
        "email": "john@example.com",
        "phone": "9876543210",
        "memberId": "AF-1001",
        "salesRep": {"firstName": "Priya", "lastName": "Rao"},
    },
    "branchId": {"_id": "br1", "address": {"state": "Kerala"}},
    "createdBy": {"firstName": "Asha", "lastName": "Menon"},
    "items": [
        {
            "description": "Gym Membership - 12 Months",
            "serviceId": {"name": "Gym", "duration": {"value": 12, "unit": "months"}},
            "quantity": 1,
            "amount": 12000,
            "discount": {"type": "flat", "value": 2000, "amount": 2000},
            "startDate": "2024-01-15T00:00:00.000Z",
            "expiryDate": "2025-01-14T00:00:00.000Z",
        },
        {
            "serviceId": {"name": "Personal Training"},
            "quantity": 2,
            "amount": 3000,
            "total": 3000,
        },
    ],
    "subtotal": 13000,
    "tax": {"rate": 18, "amount": 2340},
    "total": 15340,
    "pending": 5340,
    "paymentModes": [{"method": "upi", "amount": 10000}],
    "customerNotes": "Locker included.\nBring ID on first visit.",
}


@pytest.fixture
def sample_record() -> dict:
    return copy.deepcopy(SAMPLE_RECORD)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def ascii_settings() -> Settings:
    # core Helvetica has no rupee glyph; keep extracted text exact
    return Settings(currency_symbol="Rs.")


@pytest.fixture
def minimal_invoice() -> Invoice:
    return Invoice(
        invoice_number="INV-1",
        type="renewal",
        organization=Organization(name="Airfit"),
        member=Member(first_name="Jane", last_name="Roe"),
        items=[InvoiceItem(description="Monthly Pass", amount=Decimal("1500"), total=Decimal("1500"))],
        subtotal=Decimal("1500"),
        total=Decimal("1500"),
    )


def pdf_text(pdf_bytes: bytes) -> str:
    reader = PdfReader(io.BytesIO(pdf_bytes))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def pdf_pages(pdf_bytes: bytes) -> int:
    return len(PdfReader(io.BytesIO(pdf_bytes)).pages)
