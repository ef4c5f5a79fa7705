from __future__ import annotations

from enum import Enum

"""LEDES98BI field catalogue.

The canonical column identifiers in wire order, plus the handful of
non-canonical column names that the cross-field rules refer to. Files may
carry their own header line, so any other name is treated as an opaque
text column.
"""

__all__ = [
    "LedesField",
    "CANONICAL_HEADERS",
    "TIMEKEEPER_ID",
    "LINE_ITEM_EXPENSE_CODE",
    "LAW_FIRM_ID",
    "CLIENT_TAX_ID",
    "lookup_field",
]


class LedesField(str, Enum):
    """Canonical LEDES98BI fields. Declaration order is column order."""
    INVOICE_DATE = "INVOICE_DATE"
    INVOICE_NUMBER = "INVOICE_NUMBER"
    CLIENT_MATTER_ID = "CLIENT_MATTER_ID"
    INVOICE_TOTAL = "INVOICE_TOTAL"
    INVOICE_DESCRIPTION = "INVOICE_DESCRIPTION"
    LAW_FIRM_MATTER_ID = "LAW_FIRM_MATTER_ID"
    BILLING_START_DATE = "BILLING_START_DATE"
    BILLING_END_DATE = "BILLING_END_DATE"
    INVOICE_TAX_TOTAL = "INVOICE_TAX_TOTAL"
    INVOICE_NET_TOTAL = "INVOICE_NET_TOTAL"
    INVOICE_CURRENCY = "INVOICE_CURRENCY"
    INVOICE_TAX_CURRENCY = "INVOICE_TAX_CURRENCY"
    INVOICE_REPORTED_TAX_TOTAL = "INVOICE_REPORTED_TAX_TOTAL"
    LINE_ITEM_NUMBER = "LINE_ITEM_NUMBER"
    LINE_ITEM_NUMBER_OF_UNITS = "LINE_ITEM_NUMBER_OF_UNITS"
    LINE_ITEM_DATE = "LINE_ITEM_DATE"
    LINE_ITEM_UNIT_COST = "LINE_ITEM_UNIT_COST"
    LINE_ITEM_ADJUSTMENT_AMOUNT = "LINE_ITEM_ADJUSTMENT_AMOUNT"
    LINE_ITEM_TOTAL = "LINE_ITEM_TOTAL"
    LINE_ITEM_TAX_TOTAL = "LINE_ITEM_TAX_TOTAL"
    LINE_ITEM_TAX_RATE = "LINE_ITEM_TAX_RATE"
    LINE_ITEM_DESCRIPTION = "LINE_ITEM_DESCRIPTION"
    LINE_ITEM_TYPE = "LINE_ITEM_TYPE"
    LINE_ITEM_EXPENSE_TYPE = "LINE_ITEM_EXPENSE_TYPE"
    LINE_ITEM_TASK_CODE = "LINE_ITEM_TASK_CODE"
    LINE_ITEM_ACTIVITY_CODE = "LINE_ITEM_ACTIVITY_CODE"
    LINE_ITEM_LAWYER_ID = "LINE_ITEM_LAWYER_ID"
    LINE_ITEM_EXP_DESCRIPTION = "LINE_ITEM_EXP_DESCRIPTION"
    LAW_FIRM_NAME = "LAW_FIRM_NAME"
    LAW_FIRM_ADDRESS_1 = "LAW_FIRM_ADDRESS_1"
    LAW_FIRM_ADDRESS_2 = "LAW_FIRM_ADDRESS_2"
    LAW_FIRM_CITY = "LAW_FIRM_CITY"
    LAW_FIRM_STATEorREGION = "LAW_FIRM_STATEorREGION"
    LAW_FIRM_POSTCODE = "LAW_FIRM_POSTCODE"
    LAW_FIRM_COUNTRY = "LAW_FIRM_COUNTRY"
    LAW_FIRM_PHONE = "LAW_FIRM_PHONE"
    LAW_FIRM_FAX = "LAW_FIRM_FAX"
    LAW_FIRM_EMAIL = "LAW_FIRM_EMAIL"
    LAW_FIRM_REGISTRATION_ID = "LAW_FIRM_REGISTRATION_ID"
    CLIENT_NAME = "CLIENT_NAME"
    CLIENT_ADDRESS_1 = "CLIENT_ADDRESS_1"
    CLIENT_ADDRESS_2 = "CLIENT_ADDRESS_2"
    CLIENT_CITY = "CLIENT_CITY"
    CLIENT_STATEorREGION = "CLIENT_STATEorREGION"
    CLIENT_POSTCODE = "CLIENT_POSTCODE"
    CLIENT_COUNTRY = "CLIENT_COUNTRY"
    CLIENT_PHONE = "CLIENT_PHONE"
    CLIENT_FAX = "CLIENT_FAX"
    CLIENT_EMAIL = "CLIENT_EMAIL"
    CLIENT_REGISTRATION_ID = "CLIENT_REGISTRATION_ID"
    RESERVED1 = "RESERVED1"
    RESERVED2 = "RESERVED2"
    RESERVED3 = "RESERVED3"


CANONICAL_HEADERS: tuple[str, ...] = tuple(f.value for f in LedesField)

# Columns seen in LEDES 1998B-style exports that are not canonical.
# They only show up when a file supplies its own header line.
TIMEKEEPER_ID = "TIMEKEEPER_ID"
LINE_ITEM_EXPENSE_CODE = "LINE_ITEM_EXPENSE_CODE"
LAW_FIRM_ID = "LAW_FIRM_ID"
CLIENT_TAX_ID = "CLIENT_TAX_ID"


def lookup_field(name: str) -> LedesField | None:
    """Return the canonical field for a header name, or None if it is not canonical."""
    try:
        return LedesField(name)
    except ValueError:
        return None
