from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from reportlab.pdfbase.pdfmetrics import stringWidth

from billing_pdf.styling.invoice.formatting import (
    clip_line,
    customer_name,
    format_date,
    format_datetime,
    invoice_type_label,
    item_base_fee,
    item_date_range,
    item_description,
    item_duration,
    item_fee,
    money,
    organization_address,
    payment_modes_text,
    percent,
    place_of_supply,
    sales_rep_name,
    summary_subtotal,
    wrap_paragraphs,
    wrap_text,
)
from billing_pdf.styling.invoice.model import (
    Address,
    Branch,
    Duration,
    Invoice,
    InvoiceItem,
    Member,
    Organization,
    PaymentMode,
    Person,
    Service,
    Tax,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("1234.56"), "₹1234.56"),
        (Decimal("1234.5"), "₹1234.50"),
        (Decimal("0.005"), "₹0.01"),
        (Decimal("-5"), "₹-5.00"),
        (None, "₹0.00"),
    ],
)
def test_money(value, expected):
    assert money(value) == expected


def test_money_custom_symbol():
    assert money(Decimal("99"), "Rs.") == "Rs.99.00"


def test_percent_drops_trailing_zeros():
    assert percent(Decimal("18.00")) == "18"
    assert percent(Decimal("12.5")) == "12.5"
    assert percent(None) == "0"


def test_format_date_leading_zeros():
    assert format_date(date(2024, 3, 5)) == "05/03/2024"
    assert format_date(None) == "-"


def test_format_datetime_twelve_hour():
    assert format_datetime(datetime(2024, 3, 5, 14, 7)) == "05/03/2024, 02:07 pm"
    assert format_datetime(datetime(2024, 3, 5, 0, 30)) == "05/03/2024, 12:30 am"
    assert format_datetime(datetime(2024, 3, 5, 12, 0)) == "05/03/2024, 12:00 pm"
    assert format_datetime(None) == "-"


def test_format_datetime_converts_aware_values():
    utc = datetime(2024, 1, 15, 20, 0, tzinfo=timezone.utc)
    # +05:30 crosses midnight
    assert format_datetime(utc, "Asia/Kolkata") == "16/01/2024, 01:30 am"
    assert format_date(utc, "Asia/Kolkata") == "16/01/2024"


def test_format_datetime_leaves_naive_values_alone():
    naive = datetime(2024, 1, 15, 20, 0)
    assert format_datetime(naive, "Asia/Kolkata") == "15/01/2024, 08:00 pm"


def test_organization_address_string_verbatim():
    org = Organization(address="  12 MG Road, Bengaluru ")
    assert organization_address(org) == "  12 MG Road, Bengaluru "


def test_organization_address_skips_empty_parts():
    org = Organization(address=Address(street="X", city="", state="Y", zip_code=""))
    assert organization_address(org) == "X, Y"


def test_organization_address_missing():
    assert organization_address(None) == ""
    assert organization_address(Organization()) == ""


def test_invoice_type_label():
    assert invoice_type_label("new-booking") == "New booking"
    assert invoice_type_label("pro-forma-renewal") == "Pro forma renewal"
    assert invoice_type_label("membership") == "Membership"
    assert invoice_type_label("") == "New Booking"


def test_customer_name_is_uppercase():
    assert customer_name(Member(first_name="john", last_name="Doe")) == "JOHN DOE"
    assert customer_name(Member(last_name="doe")) == "DOE"
    assert customer_name(None) == ""


def test_place_of_supply_fallback_chain():
    inv = Invoice(
        branch=Branch(address=Address(state="Kerala")),
        organization=Organization(address=Address(state="Goa")),
    )
    assert place_of_supply(inv, "Karnataka") == "Kerala"

    inv.branch = None
    assert place_of_supply(inv, "Karnataka") == "Goa"

    inv.organization = Organization(address="some street")
    assert place_of_supply(inv, "Karnataka") == "Karnataka"


def test_sales_rep_prefers_member_rep():
    inv = Invoice(
        member=Member(sales_rep=Person("Priya", "Rao")),
        created_by=Person("Asha", "Menon"),
    )
    assert sales_rep_name(inv) == "Priya Rao"

    inv.member.sales_rep = None
    assert sales_rep_name(inv) == "Asha Menon"

    inv.created_by = None
    assert sales_rep_name(inv) == ""


def test_item_description_fallbacks():
    assert item_description(InvoiceItem(description="Yoga")) == "Yoga"
    assert item_description(InvoiceItem(service=Service(name="Gym"))) == "Gym"
    assert item_description(InvoiceItem()) == "Service"


def test_base_fee_uses_total_when_present():
    item = InvoiceItem(amount=Decimal("1200"), total=Decimal("1000"), discount=Decimal("200"))
    assert item_base_fee(item) == Decimal("1000")


def test_base_fee_falls_back_to_amount_minus_discount():
    item = InvoiceItem(amount=Decimal("1199.99"), discount=Decimal("200.49"))
    assert item_base_fee(item) == Decimal("999.50")
    assert money(item_base_fee(item)) == "₹999.50"


def test_item_fee_falls_back_to_total():
    assert item_fee(InvoiceItem(total=Decimal("700"))) == Decimal("700")
    assert item_fee(InvoiceItem()) == Decimal("0.00")


@pytest.mark.parametrize(
    "duration, expected",
    [
        (Duration(12, "months"), "12 Days Per week. Valid for 12 month(s)."),
        (Duration(1, "years"), "1 Days Per week. Valid for 12 month(s)."),
        (Duration(90, "days"), "90 Days Per week. Valid for 3 month(s)."),
        (Duration(10, "days"), "10 Days Per week. Valid for 10 day(s)."),
        (Duration(1, "weeks"), "1 Day Per week. Valid for 1 week(s)."),
        (Duration(3, "fortnights"), "-"),
        (None, "-"),
    ],
)
def test_item_duration(duration, expected):
    item = InvoiceItem(service=Service(name="Gym", duration=duration))
    assert item_duration(item) == expected


def test_item_date_range_needs_both_dates():
    both = InvoiceItem(start_date=date(2024, 1, 15), expiry_date=date(2025, 1, 14))
    assert item_date_range(both) == "Start date: 15/01/2024, Expiry date: 14/01/2025"
    assert item_date_range(InvoiceItem(start_date=date(2024, 1, 15))) == ""


def test_summary_subtotal_falls_back_to_total_minus_tax():
    inv = Invoice(total=Decimal("1180"), tax=Tax(rate=Decimal("18"), amount=Decimal("180")))
    assert summary_subtotal(inv) == Decimal("1000")


def test_payment_modes_text():
    inv = Invoice(payment_modes=[PaymentMode("upi", Decimal("1000")), PaymentMode("cash", Decimal("250.50"))])
    assert payment_modes_text(inv) == "1000(UPI), 250.5(Cash)"


def test_wrap_text_respects_width():
    lines = wrap_text("alpha beta gamma delta epsilon", "Helvetica", 10, 60)
    assert len(lines) > 1
    assert " ".join(lines) == "alpha beta gamma delta epsilon"


def test_wrap_paragraphs_keeps_line_breaks():
    lines = wrap_paragraphs("first\n\nsecond", "Helvetica", 10, 500)
    assert lines == ["first", "", "second"]


def test_clip_line_stays_within_width():
    email = "a" * 200 + "@example.com"
    clipped = clip_line(email, "Helvetica-Bold", 9, 150)

    assert clipped
    assert email.startswith(clipped)
    assert stringWidth(clipped, "Helvetica-Bold", 9) <= 150
    assert clip_line("Short", "Helvetica-Bold", 9, 150) == "Short"
    assert clip_line("", "Helvetica-Bold", 9, 150) == ""
