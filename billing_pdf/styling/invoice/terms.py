# billing_pdf/styling/invoice/terms.py
"""
Policy copy printed on every invoice.

Layout code only reads these names; edit the wording here.
"""
from __future__ import annotations

from typing import List, Tuple

DOCUMENT_TITLE = "Tax Invoice"
PRO_FORMA_TITLE = "Tax Invoice"  # same as DOCUMENT_TITLE until product decides otherwise

FALLBACK_COMPANY_NAME = "Company Name"
FALLBACK_LOGO_LETTER = "A"
FALLBACK_INVOICE_TYPE = "New Booking"
FALLBACK_ITEM_LABEL = "Service"
EMPTY_ITEMS_LABEL = "No items found"

TABLE_HEADERS = ("DESCRIPTION", "DURATION", "QUANTITY", "SERVICE FEE")

TERMS_HEADING = "TERMS AND CONDITIONS"
TERMS_SUBHEADING = "Membership Privileges, Notices, Disclosure & Agreement"

# (title, body); {org_name} is filled in at render time
TERMS_PARAGRAPHS: List[Tuple[str, str]] = [
    (
        "Upgradation/Renewal:",
        "Any change in membership program/upgradation has to be done within 15 days of joining",
    ),
    (
        "Fresh Membership:",
        "A fresh membership can be taken on completion of earlier package.",
    ),
    (
        "Transfer:",
        "Transfer of a membership is permitted to a non-member i.e. to a person who has not been "
        "a member with the same branch of {org_name} before, at a transfer fee of Rs.3500+tax per transfer.",
    ),
    (
        "Cancellation/Refunds:",
        "No refunds shall be made for all the services.",
    ),
]

ACKNOWLEDGMENT_TITLE = "Membership Agreement Acknowledgment:"
ACKNOWLEDGMENT_TEXT = (
    'This membership agreement contains a waiver and release of liability and indemnity agreement in '
    'section "VI" on the document to which you will be bound. Do not sign this agreement before you read it. '
    "By signing the below, you acknowledge receipt of a fully completed copy of this membership agreement "
    "executed by you and the club and a copy of the rules and regulations printed overleaf, you agree to be "
    "bound by the terms and conditions contained herein."
)

THANK_YOU_LINE = "Thank You For Your Business!"
DISCLAIMER_LINE = "This is a computer generated invoice. No signature is required."
CUSTOMER_NOTES_HEADING = "Customer Notes"

PAYMENT_METHOD_LABELS = {
    "cash": "Cash",
    "card": "Card",
    "upi": "UPI",
    "bank_transfer": "Bank Transfer",
    "cheque": "Cheque",
    "razorpay": "Online Payment",
    "other": "Other",
}
