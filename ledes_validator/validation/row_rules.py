from __future__ import annotations

from collections.abc import Sequence

from ..models.fields import LINE_ITEM_EXPENSE_CODE, TIMEKEEPER_ID, LedesField
from ..models.validation_result import ValidationError
from .field_rules import parse_ledes_date, validate_field
from .numbers import amount, format_number, leading_float, strip_non_numeric

"""Row validator: per-column field rules and intra-row cross-field rules.

Errors produced here carry no row number; the orchestrator stamps it.
"""

__all__ = [
    "validate_row",
    "validate_cross_field_row",
    "LINE_TOTAL_TOLERANCE",
]

LINE_TOTAL_TOLERANCE = 0.01

_NON_ADJUSTMENT_TYPES = ("F", "E")

_FEE_REQUIRED: tuple[tuple[str, str], ...] = (
    (LedesField.LINE_ITEM_TASK_CODE.value, "Task code is required for fee line items (F)"),
    (TIMEKEEPER_ID, "Timekeeper ID is required for fee line items (F)"),
    (LedesField.LINE_ITEM_DESCRIPTION.value, "Description is required for fee line items (F)"),
)
_EXPENSE_REQUIRED: tuple[tuple[str, str], ...] = (
    (LINE_ITEM_EXPENSE_CODE, "Expense code is required for expense line items (E)"),
)


class _Row:
    """Name-based view over one row's values (first occurrence of a header wins)."""

    def __init__(self, values: Sequence[str], headers: Sequence[str]) -> None:
        self._values: dict[str, str] = {}
        self._columns: dict[str, int] = {}
        for i, name in enumerate(headers):
            if name in self._columns:
                continue
            self._columns[name] = i + 1
            self._values[name] = values[i] if i < len(values) else ""

    def has(self, name: str) -> bool:
        return name in self._columns

    def value(self, name: str) -> str:
        return self._values.get(name, "")

    def column(self, name: str) -> int:
        """1-based position, 0 when the header list lacks the column."""
        return self._columns.get(name, 0)

    def error(self, name: str, message: str) -> ValidationError:
        return ValidationError(field=name, column=self.column(name), value=self.value(name), message=message)


def validate_row(values: Sequence[str], headers: Sequence[str]) -> list[ValidationError]:
    """Apply the field rule table to each (header, value) pair by index."""
    errors: list[ValidationError] = []
    for i, (name, value) in enumerate(zip(headers, values)):
        ok, message = validate_field(name, value)
        if not ok:
            errors.append(ValidationError(field=name, column=i + 1, value=value, message=message))
    return errors


def validate_cross_field_row(values: Sequence[str], headers: Sequence[str]) -> list[ValidationError]:
    """Intra-row rules, in order: billing range, F/E amounts, F/E required fields, line total."""
    row = _Row(values, headers)
    errors: list[ValidationError] = []
    errors.extend(_check_billing_range(row))
    errors.extend(_check_non_adjustment_amounts(row))
    errors.extend(_check_type_requirements(row))
    errors.extend(_check_line_total(row))
    return errors


def _check_billing_range(row: _Row) -> list[ValidationError]:
    start_name = LedesField.BILLING_START_DATE.value
    end_name = LedesField.BILLING_END_DATE.value
    start = parse_ledes_date(row.value(start_name))
    end = parse_ledes_date(row.value(end_name))
    if start is None or end is None or end >= start:
        return []
    return [
        row.error(start_name, "Billing start date must be on or before billing end date"),
        row.error(end_name, "Billing end date must be on or after billing start date"),
    ]


def _line_item_type(row: _Row) -> str:
    return row.value(LedesField.LINE_ITEM_TYPE.value).strip().upper()


def _check_non_adjustment_amounts(row: _Row) -> list[ValidationError]:
    if _line_item_type(row) not in _NON_ADJUSTMENT_TYPES:
        return []

    errors: list[ValidationError] = []
    units_name = LedesField.LINE_ITEM_NUMBER_OF_UNITS.value
    if row.has(units_name):
        units = row.value(units_name)
        if not units.strip() or leading_float(units) == 0:
            errors.append(row.error(units_name, "Units cannot be 0 or null for non-adjustment line items (F, E)"))

    cost_name = LedesField.LINE_ITEM_UNIT_COST.value
    if row.has(cost_name):
        cost = row.value(cost_name)
        if not cost.strip() or leading_float(strip_non_numeric(cost)) == 0:
            errors.append(row.error(cost_name, "Unit cost cannot be 0 or null for non-adjustment line items (F, E)"))
    return errors


def _check_type_requirements(row: _Row) -> list[ValidationError]:
    line_type = _line_item_type(row)
    if line_type == "F":
        required = _FEE_REQUIRED
    elif line_type == "E":
        required = _EXPENSE_REQUIRED
    else:
        return []
    return [row.error(name, message) for name, message in required if not row.value(name).strip()]


def _check_line_total(row: _Row) -> list[ValidationError]:
    units_name = LedesField.LINE_ITEM_NUMBER_OF_UNITS.value
    cost_name = LedesField.LINE_ITEM_UNIT_COST.value
    adjustment_name = LedesField.LINE_ITEM_ADJUSTMENT_AMOUNT.value
    tax_name = LedesField.LINE_ITEM_TAX_TOTAL.value
    total_name = LedesField.LINE_ITEM_TOTAL.value

    units = row.value(units_name)
    cost = row.value(cost_name)
    total = row.value(total_name)
    if not (units and cost and total):
        return []
    adjustment = row.value(adjustment_name)
    tax = row.value(tax_name)

    units_value = amount(units, strip=False)
    cost_value = amount(cost)
    adjustment_value = amount(adjustment)
    tax_value = amount(tax)
    total_value = amount(total)

    expected = units_value * cost_value + adjustment_value + tax_value
    if abs(expected - total_value) <= LINE_TOTAL_TOLERANCE:
        return []

    message = (
        f"Line item calculation error: {format_number(units_value)} × {format_number(cost_value)}"
        f" + {format_number(adjustment_value)} + {format_number(tax_value)}"
        f" should equal {expected:.2f}, but total shows {format_number(total_value)}"
    )
    involved = [units_name, cost_name]
    if adjustment:
        involved.append(adjustment_name)
    if tax:
        involved.append(tax_name)
    involved.append(total_name)
    return [row.error(name, message) for name in involved]
