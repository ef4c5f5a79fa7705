from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date
from enum import Enum

from ..models.fields import CLIENT_TAX_ID, LAW_FIRM_ID, LedesField, lookup_field
from .numbers import leading_float

"""Field rule table.

Each column maps to exactly one RuleKind; each RuleKind maps to a free
function ``(value) -> (ok, message)``. Header names outside the table fall
through to the generic text rule, so reordered or unknown headers still
validate.
"""

__all__ = [
    "RuleKind",
    "FieldCheck",
    "FIELD_RULES",
    "SUPPLEMENTARY_RULES",
    "rule_for",
    "validate_field",
    "check_date",
    "parse_ledes_date",
    "VALID_STATE_CODES",
    "LINE_ITEM_TYPES",
    "MAX_TEXT_LENGTH",
]

FieldCheck = tuple[bool, str]

MAX_TEXT_LENGTH = 1000

VALID_STATE_CODES = frozenset({
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    "DC",
})

LINE_ITEM_TYPES = ("F", "E", "IF", "IE")

_DATE_RE = re.compile(r"\d{8}")
_CURRENCY_RE = re.compile(r"[A-Za-z]{3}")
_POSTCODE_RE = re.compile(r"[A-Za-z0-9\-\s]{3,10}")
_REGION_RE = re.compile(r"[A-Za-z\s]{2,50}")
_ASCII_DIGITS = re.compile(r"[0-9]+")


class RuleKind(Enum):
    DATE = "date"
    REQUIRED_DATE = "required_date"
    DECIMAL = "decimal"
    REQUIRED_DECIMAL = "required_decimal"
    INTEGER = "integer"
    CURRENCY = "currency"
    POSTCODE = "postcode"
    STATE_OR_REGION = "state_or_region"
    LINE_ITEM_TYPE = "line_item_type"
    REQUIRED_TEXT = "required_text"
    TEXT = "text"


FIELD_RULES: dict[LedesField, RuleKind] = {
    LedesField.INVOICE_DATE: RuleKind.DATE,
    LedesField.BILLING_START_DATE: RuleKind.DATE,
    LedesField.BILLING_END_DATE: RuleKind.DATE,
    LedesField.LINE_ITEM_DATE: RuleKind.REQUIRED_DATE,
    LedesField.LINE_ITEM_TAX_RATE: RuleKind.DECIMAL,
    LedesField.LINE_ITEM_NUMBER_OF_UNITS: RuleKind.DECIMAL,
    LedesField.LINE_ITEM_NUMBER: RuleKind.INTEGER,
    LedesField.LINE_ITEM_TYPE: RuleKind.LINE_ITEM_TYPE,
    LedesField.LINE_ITEM_TOTAL: RuleKind.REQUIRED_DECIMAL,
    LedesField.INVOICE_NET_TOTAL: RuleKind.REQUIRED_DECIMAL,
    LedesField.LAW_FIRM_POSTCODE: RuleKind.POSTCODE,
    LedesField.CLIENT_POSTCODE: RuleKind.POSTCODE,
    LedesField.LAW_FIRM_STATEorREGION: RuleKind.STATE_OR_REGION,
    LedesField.CLIENT_STATEorREGION: RuleKind.STATE_OR_REGION,
    LedesField.INVOICE_CURRENCY: RuleKind.CURRENCY,
}

# Non-canonical columns that still carry a rule when a file's header names them
SUPPLEMENTARY_RULES: dict[str, RuleKind] = {
    LAW_FIRM_ID: RuleKind.REQUIRED_TEXT,
    CLIENT_TAX_ID: RuleKind.REQUIRED_TEXT,
}

_REQUIRED_KINDS = frozenset({
    RuleKind.REQUIRED_DATE,
    RuleKind.REQUIRED_DECIMAL,
    RuleKind.REQUIRED_TEXT,
})


def parse_ledes_date(value: str) -> date | None:
    """YYYYMMDD -> date, or None when the shape or the calendar date is invalid."""
    if not _DATE_RE.fullmatch(value):
        return None
    try:
        return date(int(value[0:4]), int(value[4:6]), int(value[6:8]))
    except ValueError:
        return None


def check_date(value: str) -> FieldCheck:
    if not _DATE_RE.fullmatch(value):
        return False, "Date must be in YYYYMMDD format"
    if parse_ledes_date(value) is None:
        return False, "Invalid date"
    return True, ""


def check_required_date(value: str) -> FieldCheck:
    if not value.strip():
        return False, "Date is required"
    return check_date(value)


def check_decimal(value: str) -> FieldCheck:
    # A numeric prefix is enough: "1,000.00" and "2 hrs" pass
    if leading_float(value.strip()) is None:
        return False, "Invalid decimal number"
    return True, ""


def check_required_decimal(value: str) -> FieldCheck:
    if not value.strip():
        return False, "Value is required"
    return check_decimal(value)


def check_integer(value: str) -> FieldCheck:
    # int() alone would accept ' 7', '+7' and '1_000'; the round trip rejects them
    candidate = value[1:] if value.startswith("-") else value
    if not _ASCII_DIGITS.fullmatch(candidate) or str(int(value)) != value:
        return False, "Must be a whole number"
    return True, ""


def check_currency(value: str) -> FieldCheck:
    if not _CURRENCY_RE.fullmatch(value):
        return False, "Currency must be a 3-letter code (e.g., USD, EUR, GBP)"
    return True, ""


def check_postcode(value: str) -> FieldCheck:
    if not _POSTCODE_RE.fullmatch(value):
        return False, "Invalid postcode format"
    return True, ""


def check_state_or_region(value: str) -> FieldCheck:
    if value.upper() in VALID_STATE_CODES or _REGION_RE.fullmatch(value):
        return True, ""
    return False, "Invalid state or region format"


def check_line_item_type(value: str) -> FieldCheck:
    if value.upper() not in LINE_ITEM_TYPES:
        return False, "Line item type must be F, E, IF, or IE"
    return True, ""


def check_text(value: str) -> FieldCheck:
    if "|" in value:
        return False, "Pipe character (|) not allowed"
    if len(value) > MAX_TEXT_LENGTH:
        return False, f"Text too long (maximum {MAX_TEXT_LENGTH} characters)"
    return True, ""


def check_required_text(value: str) -> FieldCheck:
    if not value.strip():
        return False, "Field is required"
    return check_text(value)


_CHECKS: dict[RuleKind, Callable[[str], FieldCheck]] = {
    RuleKind.DATE: check_date,
    RuleKind.REQUIRED_DATE: check_required_date,
    RuleKind.DECIMAL: check_decimal,
    RuleKind.REQUIRED_DECIMAL: check_required_decimal,
    RuleKind.INTEGER: check_integer,
    RuleKind.CURRENCY: check_currency,
    RuleKind.POSTCODE: check_postcode,
    RuleKind.STATE_OR_REGION: check_state_or_region,
    RuleKind.LINE_ITEM_TYPE: check_line_item_type,
    RuleKind.REQUIRED_TEXT: check_required_text,
    RuleKind.TEXT: check_text,
}


def rule_for(field: str | LedesField) -> RuleKind:
    """Rule kind for a header name; unknown names get the generic text rule."""
    fid = field if isinstance(field, LedesField) else lookup_field(field)
    if fid is not None:
        return FIELD_RULES.get(fid, RuleKind.TEXT)
    return SUPPLEMENTARY_RULES.get(field, RuleKind.TEXT)


def validate_field(field: str | LedesField, value: str) -> FieldCheck:
    """Validate one value for one column.

    Empty or whitespace-only values pass unless the column's rule is one of
    the required variants.

    Returns:
        (True, "") on success, (False, message) otherwise
    """
    kind = rule_for(field)
    if not value.strip() and kind not in _REQUIRED_KINDS:
        return True, ""
    return _CHECKS[kind](value)
