# billing_pdf/styling/invoice/formatting.py
from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
from zoneinfo import ZoneInfo

from reportlab.pdfbase.pdfmetrics import stringWidth

from billing_pdf.styling.invoice.model import (
    ZERO,
    Address,
    DateLike,
    Invoice,
    InvoiceItem,
    Member,
    Organization,
)
from billing_pdf.styling.invoice.terms import (
    FALLBACK_INVOICE_TYPE,
    FALLBACK_ITEM_LABEL,
    PAYMENT_METHOD_LABELS,
)

CENTS = Decimal("0.01")


def clean(s: Optional[str]) -> str:
    return (s or "").replace("\u00a0", " ").replace("\x00", "").strip()


# =========================
# Money / dates
# =========================

def money(x: Optional[Decimal], symbol: str = "₹") -> str:
    """
    ₹1234.56 style: fixed symbol prefix, two decimals, no grouping.
    """
    value = Decimal(x) if x is not None else ZERO
    return f"{symbol}{value.quantize(CENTS, rounding=ROUND_HALF_UP)}"


def percent(rate: Optional[Decimal]) -> str:
    value = Decimal(rate) if rate is not None else ZERO
    # 18.00 -> "18", 12.5 -> "12.5"
    return format(value.normalize(), "f")


def _local(d: DateLike, tz: Optional[str]) -> DateLike:
    if isinstance(d, datetime) and d.tzinfo is not None and tz:
        return d.astimezone(ZoneInfo(tz))
    return d


def format_date(d: DateLike, tz: Optional[str] = None) -> str:
    if d is None:
        return "-"
    d = _local(d, tz)
    return f"{d.day:02d}/{d.month:02d}/{d.year:04d}"


def format_datetime(d: DateLike, tz: Optional[str] = None) -> str:
    """
    dd/mm/yyyy, hh:mm am|pm
    """
    if d is None:
        return "-"
    d = _local(d, tz)
    if not isinstance(d, datetime):
        d = datetime(d.year, d.month, d.day)

    hour12 = d.hour % 12 or 12
    meridiem = "am" if d.hour < 12 else "pm"
    return f"{format_date(d)}, {hour12:02d}:{d.minute:02d} {meridiem}"


# =========================
# Parties
# =========================

def organization_address(org: Optional[Organization]) -> str:
    if org is None or org.address is None:
        return ""
    if isinstance(org.address, str):
        return org.address
    a: Address = org.address
    parts = [a.street, a.city, a.state, a.zip_code]
    return ", ".join(p for p in parts if p)


def customer_name(member: Optional[Member]) -> str:
    if member is None:
        return ""
    return f"{member.first_name.upper()} {member.last_name.upper()}".strip()


def attendance_id(member: Optional[Member]) -> str:
    if member is None:
        return "-"
    return member.member_id or member.attendance_id or "-"


def place_of_supply(invoice: Invoice, fallback_region: str) -> str:
    if invoice.branch and invoice.branch.address and invoice.branch.address.state:
        return invoice.branch.address.state
    org = invoice.organization
    if org and isinstance(org.address, Address) and org.address.state:
        return org.address.state
    return fallback_region


def invoice_type_label(kind: Optional[str]) -> str:
    k = (kind or "").replace("-", " ")
    if not k:
        return FALLBACK_INVOICE_TYPE
    return k[0].upper() + k[1:]


def created_by_name(invoice: Invoice) -> str:
    return invoice.created_by.full_name if invoice.created_by else ""


def sales_rep_name(invoice: Invoice) -> str:
    """
    Member's assigned rep wins over whoever created the invoice.
    """
    if invoice.member and invoice.member.sales_rep:
        return invoice.member.sales_rep.full_name
    return created_by_name(invoice)


# =========================
# Items
# =========================

def item_description(item: InvoiceItem) -> str:
    if item.description:
        return item.description
    if item.service and item.service.name:
        return item.service.name
    return FALLBACK_ITEM_LABEL


def item_fee(item: InvoiceItem) -> Decimal:
    if item.amount:
        return item.amount
    return item.total or ZERO


def item_base_fee(item: InvoiceItem) -> Decimal:
    if item.total:
        return item.total
    return item_fee(item) - (item.discount or ZERO)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def item_duration(item: InvoiceItem) -> str:
    dur = item.service.duration if item.service else None
    if dur is None or not dur.value or not dur.unit:
        return "-"

    value = dur.value
    unit = dur.unit
    if unit == "months":
        months = value
    elif unit == "weeks":
        months = _round_half_up(value / 4.33)
    elif unit == "days":
        months = _round_half_up(value / 30)
    elif unit == "years":
        months = value * 12
    else:
        return "-"

    if months > 0:
        return f"{value} Days Per week. Valid for {months} month(s)."

    # only days/weeks can land here
    plural = "s" if value != 1 else ""
    label = unit[:-1]
    return f"{value} Day{plural} Per week. Valid for {value} {label}(s)."


def item_date_range(item: InvoiceItem, tz: Optional[str] = None) -> str:
    if not (item.start_date and item.expiry_date):
        return ""
    return f"Start date: {format_date(item.start_date, tz)}, Expiry date: {format_date(item.expiry_date, tz)}"


# =========================
# Summary
# =========================

def summary_subtotal(invoice: Invoice) -> Decimal:
    if invoice.subtotal:
        return invoice.subtotal
    tax_amount = invoice.tax.amount if invoice.tax else ZERO
    return invoice.total - tax_amount


def payment_modes_text(invoice: Invoice) -> str:
    parts = []
    for pm in invoice.payment_modes:
        label = PAYMENT_METHOD_LABELS.get(pm.method, pm.method)
        parts.append(f"{format(pm.amount.normalize(), 'f')}({label})")
    return ", ".join(parts)


def contact_line(org: Optional[Organization]) -> str:
    if org is None:
        return ""
    parts = []
    if org.email:
        parts.append(f"Mail: {org.email}")
    if org.phone:
        parts.append(f"Phone: {org.phone}")
    return ", ".join(parts)


# =========================
# Text layout
# =========================

def wrap_text(text: str, font: str, size: float, max_w: float) -> List[str]:
    text = clean(text)
    if not text:
        return []

    words = text.split()
    lines: List[str] = []
    cur = ""

    for w in words:
        test = (cur + " " + w).strip()
        if stringWidth(test, font, size) <= max_w:
            cur = test
        else:
            if cur:
                lines.append(cur)
            if stringWidth(w, font, size) <= max_w:
                cur = w
            else:
                chunk = ""
                for ch in w:
                    t2 = chunk + ch
                    if stringWidth(t2, font, size) <= max_w:
                        chunk = t2
                    else:
                        if chunk:
                            lines.append(chunk)
                        chunk = ch
                cur = chunk

    if cur:
        lines.append(cur)
    return lines


def clip_line(text: str, font: str, size: float, max_w: float) -> str:
    """
    First line wrap_text would produce; anything past max_w is dropped.
    """
    lines = wrap_text(text, font, size, max_w)
    return lines[0] if lines else ""


def wrap_paragraphs(text: str, font: str, size: float, max_w: float) -> List[str]:
    """
    Like wrap_text, but keeps the caller's line breaks (blank lines survive as "").
    """
    out: List[str] = []
    for raw in (text or "").replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        wrapped = wrap_text(raw, font, size, max_w)
        out.extend(wrapped or [""])
    return out
