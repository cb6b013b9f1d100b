# billing_pdf/styling/invoice/editor.py
"""
Convert a populated invoice record (camelCase JSON as the billing API returns it,
Mongo extended-JSON wrappers allowed) into the Invoice dataclasses.

References that were not populated arrive as bare id strings and are treated
as absent; nothing is looked up here.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from billing_pdf.errors import InvoiceDataError
from billing_pdf.styling.invoice.model import (
    ZERO,
    Address,
    Branch,
    DateLike,
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

_NUMBER_WRAPPERS = ("$numberDecimal", "$numberDouble", "$numberInt", "$numberLong")


def _obj(v: Any) -> Optional[dict]:
    # populated sub-document, or None for an id / missing value
    return v if isinstance(v, dict) else None


def _str(v: Any) -> str:
    if v is None:
        return ""
    return str(v).strip()


def _unwrap_number(v: Any) -> Any:
    if isinstance(v, dict):
        for k in _NUMBER_WRAPPERS:
            if k in v:
                return v[k]
    return v


def _dec(v: Any, where: str) -> Decimal:
    v = _unwrap_number(v)
    if v is None or isinstance(v, bool):
        return ZERO
    if isinstance(v, Decimal):
        d = v
    else:
        t = str(v).replace("₹", "").replace(",", "").strip()
        if not t:
            return ZERO
        try:
            d = Decimal(t)
        except InvalidOperation as e:
            raise InvoiceDataError(f"{where}: not a number: {v!r}") from e
    # NaN / Infinity parse fine but cannot be printed or counted
    if not d.is_finite():
        raise InvoiceDataError(f"{where}: not a number: {v!r}")
    return d


def _dec_or_none(v: Any, where: str) -> Optional[Decimal]:
    v = _unwrap_number(v)
    if v is None or (isinstance(v, str) and not v.strip()):
        return None
    return _dec(v, where)


def _int(v: Any, where: str, default: int = 0) -> int:
    d = _dec_or_none(v, where)
    if d is None:
        return default
    return int(d)


def _date(v: Any, where: str) -> DateLike:
    if isinstance(v, dict) and "$date" in v:
        v = _unwrap_number(v["$date"])
    if v is None or v == "":
        return None
    if isinstance(v, (datetime, date)):
        return v
    if isinstance(v, (int, float)):
        # epoch milliseconds
        return datetime.fromtimestamp(v / 1000.0, tz=timezone.utc)

    s = str(v).strip()
    if s.isdigit():
        return datetime.fromtimestamp(int(s) / 1000.0, tz=timezone.utc)
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        if len(s) == 10:
            return date.fromisoformat(s)
        return datetime.fromisoformat(s)
    except ValueError as e:
        raise InvoiceDataError(f"{where}: not an ISO date: {v!r}") from e


def _person(j: Optional[dict]) -> Optional[Person]:
    if not j:
        return None
    return Person(first_name=_str(j.get("firstName")), last_name=_str(j.get("lastName")))


def _address(j: Any) -> Optional[Address]:
    j = _obj(j)
    if not j:
        return None
    return Address(
        street=_str(j.get("street")),
        city=_str(j.get("city")),
        state=_str(j.get("state")),
        zip_code=_str(j.get("zipCode")),
    )


def _organization(j: Optional[dict]) -> Optional[Organization]:
    if not j:
        return None
    raw = j.get("address")
    address = raw.strip() if isinstance(raw, str) else _address(raw)
    return Organization(
        name=_str(j.get("name")),
        address=address or None,
        email=_str(j.get("email")),
        phone=_str(j.get("phone")),
    )


def _member(j: Optional[dict]) -> Optional[Member]:
    if not j:
        return None
    return Member(
        first_name=_str(j.get("firstName")),
        last_name=_str(j.get("lastName")),
        email=_str(j.get("email")),
        phone=_str(j.get("phone")),
        member_id=_str(j.get("memberId")),
        attendance_id=_str(j.get("attendanceId")),
        sales_rep=_person(_obj(j.get("salesRep"))),
    )


def _service(j: Optional[dict]) -> Optional[Service]:
    if not j:
        return None
    dur = _obj(j.get("duration"))
    duration = None
    if dur:
        duration = Duration(value=_int(dur.get("value"), "serviceId.duration.value"), unit=_str(dur.get("unit")))
    return Service(name=_str(j.get("name")), duration=duration)


def _item(j: Any, idx: int) -> InvoiceItem:
    if not isinstance(j, dict):
        raise InvoiceDataError(f"items[{idx}]: expected an object, got {type(j).__name__}")
    where = f"items[{idx}]"
    discount = _obj(j.get("discount")) or {}
    return InvoiceItem(
        description=_str(j.get("description")),
        service=_service(_obj(j.get("serviceId"))),
        quantity=_int(j.get("quantity"), f"{where}.quantity", default=1) or 1,
        amount=_dec_or_none(j.get("amount"), f"{where}.amount"),
        total=_dec_or_none(j.get("total"), f"{where}.total"),
        discount=_dec(discount.get("amount"), f"{where}.discount.amount"),
        start_date=_date(j.get("startDate"), f"{where}.startDate"),
        expiry_date=_date(j.get("expiryDate"), f"{where}.expiryDate"),
    )


def json_to_invoice(j: Any) -> Invoice:
    if not isinstance(j, dict):
        raise InvoiceDataError(f"invoice record must be an object, got {type(j).__name__}")

    tax_j = _obj(j.get("tax"))
    tax = None
    if tax_j:
        tax = Tax(rate=_dec(tax_j.get("rate"), "tax.rate"), amount=_dec(tax_j.get("amount"), "tax.amount"))

    discount_j = _obj(j.get("discount")) or {}

    branch_j = _obj(j.get("branchId"))
    branch = Branch(address=_address(branch_j.get("address"))) if branch_j else None

    payment_modes: List[PaymentMode] = []
    for i, pm in enumerate(j.get("paymentModes") or []):
        if not isinstance(pm, dict):
            continue
        payment_modes.append(
            PaymentMode(method=_str(pm.get("method")), amount=_dec(pm.get("amount"), f"paymentModes[{i}].amount"))
        )

    return Invoice(
        invoice_number=_str(j.get("invoiceNumber")),
        type=_str(j.get("type")),
        is_pro_forma=bool(j.get("isProForma")),
        status=_str(j.get("status")),
        date_of_invoice=_date(j.get("dateOfInvoice"), "dateOfInvoice"),
        created_at=_date(j.get("createdAt"), "createdAt"),
        due_date=_date(j.get("dueDate"), "dueDate"),
        organization=_organization(_obj(j.get("organizationId"))),
        member=_member(_obj(j.get("memberId"))),
        branch=branch,
        created_by=_person(_obj(j.get("createdBy"))),
        items=[_item(x, i) for i, x in enumerate(j.get("items") or [])],
        subtotal=_dec(j.get("subtotal"), "subtotal"),
        discount=_dec(discount_j.get("amount"), "discount.amount"),
        tax=tax,
        rounding=_dec(j.get("rounding"), "rounding"),
        total=_dec(j.get("total"), "total"),
        pending=_dec(j.get("pending"), "pending"),
        payment_modes=payment_modes,
        customer_notes=str(j.get("customerNotes") or ""),
    )
