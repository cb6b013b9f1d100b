# billing_pdf/styling/invoice/model.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union

DateLike = Union[datetime, date, None]

ZERO = Decimal("0.00")


@dataclass
class Person:
    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class Address:
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


@dataclass
class Organization:
    name: str = ""
    # plain string, or structured street/city/state/zip
    address: Union[str, Address, None] = None
    email: str = ""
    phone: str = ""


@dataclass
class Member:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    member_id: str = ""
    attendance_id: str = ""
    sales_rep: Optional[Person] = None


@dataclass
class Branch:
    address: Optional[Address] = None


@dataclass
class Duration:
    value: int = 0
    unit: str = ""  # days | weeks | months | years


@dataclass
class Service:
    name: str = ""
    duration: Optional[Duration] = None


@dataclass
class Tax:
    rate: Decimal = ZERO
    amount: Decimal = ZERO


@dataclass
class PaymentMode:
    method: str = ""
    amount: Decimal = ZERO


@dataclass
class InvoiceItem:
    description: str = ""
    service: Optional[Service] = None
    quantity: int = 1
    amount: Optional[Decimal] = None
    total: Optional[Decimal] = None
    discount: Decimal = ZERO
    start_date: DateLike = None
    expiry_date: DateLike = None


@dataclass
class Invoice:
    invoice_number: str = ""
    type: str = ""
    is_pro_forma: bool = False
    status: str = ""
    date_of_invoice: DateLike = None
    created_at: DateLike = None
    due_date: DateLike = None

    organization: Optional[Organization] = None
    member: Optional[Member] = None
    branch: Optional[Branch] = None
    created_by: Optional[Person] = None

    items: List[InvoiceItem] = field(default_factory=list)

    subtotal: Decimal = ZERO
    discount: Decimal = ZERO
    tax: Optional[Tax] = None
    rounding: Decimal = ZERO
    total: Decimal = ZERO
    pending: Decimal = ZERO
    payment_modes: List[PaymentMode] = field(default_factory=list)

    customer_notes: str = ""
