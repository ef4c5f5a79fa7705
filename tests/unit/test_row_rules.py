from __future__ import annotations

from ledes_validator.models.fields import CANONICAL_HEADERS
from ledes_validator.validation.row_rules import validate_cross_field_row, validate_row

from tests.conftest import LEDES_HEADERS, canonical_values, ledes_values

HEADERS = list(LEDES_HEADERS)


def _cross(values: dict[str, str]):
    return validate_cross_field_row(ledes_values(**values), HEADERS)


def test_clean_row_has_no_findings(clean_fee_values):
    values = ledes_values(**clean_fee_values)
    assert validate_row(values, HEADERS) == []
    assert validate_cross_field_row(values, HEADERS) == []


def test_validate_row_reports_column_position_and_value(clean_fee_values):
    clean_fee_values.update(INVOICE_DATE="20240230", INVOICE_CURRENCY="US")
    errors = validate_row(ledes_values(**clean_fee_values), HEADERS)

    assert [(e.field, e.column, e.value) for e in errors] == [
        ("INVOICE_DATE", 1, "20240230"),
        ("INVOICE_CURRENCY", 11, "US"),
    ]
    assert errors[0].message == "Invalid date"
    assert all(e.row is None for e in errors)


def test_validate_row_pairs_by_index_for_custom_headers():
    headers = ["LINE_ITEM_TYPE", "NOTE", "INVOICE_DATE"]
    errors = validate_row(["Z", "free text", "2024"], headers)
    assert [(e.field, e.column) for e in errors] == [("LINE_ITEM_TYPE", 1), ("INVOICE_DATE", 3)]


def test_billing_range_reversed_flags_both_dates(clean_fee_values):
    clean_fee_values.update(BILLING_START_DATE="20240201", BILLING_END_DATE="20240131")
    errors = _cross(clean_fee_values)

    assert [(e.field, e.column) for e in errors] == [("BILLING_START_DATE", 7), ("BILLING_END_DATE", 8)]
    assert errors[0].message == "Billing start date must be on or before billing end date"
    assert errors[1].message == "Billing end date must be on or after billing start date"


def test_billing_range_same_day_or_unparsable_is_not_checked(clean_fee_values):
    clean_fee_values.update(BILLING_START_DATE="20240131", BILLING_END_DATE="20240131")
    assert _cross(clean_fee_values) == []
    clean_fee_values.update(BILLING_START_DATE="20240231", BILLING_END_DATE="20240101")
    assert _cross(clean_fee_values) == []


def test_zero_units_on_fee_line(clean_fee_values):
    clean_fee_values.update(LINE_ITEM_NUMBER_OF_UNITS="0")
    messages = [e.message for e in _cross(clean_fee_values) if e.field == "LINE_ITEM_NUMBER_OF_UNITS"]
    assert "Units cannot be 0 or null for non-adjustment line items (F, E)" in messages


def test_empty_or_zero_cost_on_expense_line(clean_fee_values):
    clean_fee_values.update(LINE_ITEM_TYPE="E", LINE_ITEM_UNIT_COST="")
    errors = [e for e in _cross(clean_fee_values) if e.field == "LINE_ITEM_UNIT_COST"]
    assert [e.message for e in errors] == ["Unit cost cannot be 0 or null for non-adjustment line items (F, E)"]

    clean_fee_values.update(LINE_ITEM_UNIT_COST="$0.00")
    errors = [e for e in _cross(clean_fee_values) if e.field == "LINE_ITEM_UNIT_COST"]
    assert errors and errors[0].column == 17


def test_adjustment_lines_may_have_zero_units(clean_fee_values):
    clean_fee_values.update(
        LINE_ITEM_TYPE="IF",
        LINE_ITEM_NUMBER_OF_UNITS="0",
        LINE_ITEM_UNIT_COST="0",
        LINE_ITEM_ADJUSTMENT_AMOUNT="-50",
        LINE_ITEM_TOTAL="-50",
    )
    assert _cross(clean_fee_values) == []


def test_fee_line_required_fields_when_columns_present():
    headers = ["LINE_ITEM_TYPE", "LINE_ITEM_TASK_CODE", "TIMEKEEPER_ID", "LINE_ITEM_DESCRIPTION"]
    errors = validate_cross_field_row(["F", "", " ", ""], headers)

    assert [(e.field, e.column) for e in errors] == [
        ("LINE_ITEM_TASK_CODE", 2),
        ("TIMEKEEPER_ID", 3),
        ("LINE_ITEM_DESCRIPTION", 4),
    ]
    assert errors[0].message == "Task code is required for fee line items (F)"
    assert errors[1].message == "Timekeeper ID is required for fee line items (F)"
    assert errors[2].message == "Description is required for fee line items (F)"


def test_fee_line_required_fields_without_their_columns():
    # Canonical headers carry no TIMEKEEPER_ID column; it still counts as missing
    values = canonical_values(LINE_ITEM_TYPE="F")
    errors = validate_cross_field_row(values, list(CANONICAL_HEADERS))

    required = [e for e in errors if e.message.endswith("required for fee line items (F)")]
    assert [(e.field, e.column, e.value) for e in required] == [
        ("LINE_ITEM_TASK_CODE", 25, ""),
        ("TIMEKEEPER_ID", 0, ""),
        ("LINE_ITEM_DESCRIPTION", 22, ""),
    ]


def test_canonical_fee_line_flags_missing_timekeeper(clean_fee_values):
    errors = validate_cross_field_row(canonical_values(**clean_fee_values), list(CANONICAL_HEADERS))
    assert [(e.field, e.column) for e in errors] == [("TIMEKEEPER_ID", 0)]
    assert errors[0].message == "Timekeeper ID is required for fee line items (F)"


def test_expense_line_requires_expense_code():
    headers = ["LINE_ITEM_TYPE", "LINE_ITEM_EXPENSE_CODE", "LINE_ITEM_TASK_CODE"]
    errors = validate_cross_field_row(["e", "", ""], headers)
    assert [(e.field, e.column, e.message) for e in errors] == [
        ("LINE_ITEM_EXPENSE_CODE", 2, "Expense code is required for expense line items (E)"),
    ]

    errors = validate_cross_field_row(["E"], ["LINE_ITEM_TYPE"])
    assert [(e.field, e.column) for e in errors] == [("LINE_ITEM_EXPENSE_CODE", 0)]


def test_line_total_mismatch_flags_every_involved_field(clean_fee_values):
    clean_fee_values.update(LINE_ITEM_TOTAL="199")
    errors = _cross(clean_fee_values)

    expected = "Line item calculation error: 2 × 100 + 0 + 0 should equal 200.00, but total shows 199"
    assert [(e.field, e.column) for e in errors] == [
        ("LINE_ITEM_NUMBER_OF_UNITS", 15),
        ("LINE_ITEM_UNIT_COST", 17),
        ("LINE_ITEM_TOTAL", 19),
    ]
    assert {e.message for e in errors} == {expected}


def test_line_total_includes_adjustment_and_tax(clean_fee_values):
    clean_fee_values.update(LINE_ITEM_ADJUSTMENT_AMOUNT="-20", LINE_ITEM_TAX_TOTAL="5", LINE_ITEM_TOTAL="185")
    assert _cross(clean_fee_values) == []

    clean_fee_values.update(LINE_ITEM_TOTAL="200")
    errors = _cross(clean_fee_values)
    assert [e.field for e in errors] == [
        "LINE_ITEM_NUMBER_OF_UNITS",
        "LINE_ITEM_UNIT_COST",
        "LINE_ITEM_ADJUSTMENT_AMOUNT",
        "LINE_ITEM_TAX_TOTAL",
        "LINE_ITEM_TOTAL",
    ]
    assert errors[0].message == (
        "Line item calculation error: 2 × 100 + -20 + 5 should equal 185.00, but total shows 200"
    )


def test_line_total_tolerates_rounding_and_currency_formatting(clean_fee_values):
    clean_fee_values.update(LINE_ITEM_UNIT_COST="$100.00", LINE_ITEM_TOTAL="200.005")
    assert _cross(clean_fee_values) == []


def test_line_total_skipped_when_an_operand_is_empty(clean_fee_values):
    clean_fee_values.update(LINE_ITEM_TYPE="IE", LINE_ITEM_UNIT_COST="", LINE_ITEM_TOTAL="999")
    assert _cross(clean_fee_values) == []


def test_explicit_zero_adjustment_and_tax(clean_fee_values):
    clean_fee_values.update(LINE_ITEM_ADJUSTMENT_AMOUNT="0", LINE_ITEM_TAX_TOTAL="0", LINE_ITEM_TOTAL="200")
    assert _cross(clean_fee_values) == []

    clean_fee_values.update(LINE_ITEM_TOTAL="199")
    errors = _cross(clean_fee_values)
    assert len(errors) == 5
    assert "should equal 200.00" in errors[0].message
