from __future__ import annotations

from ledes_validator import parse, validate_dataset
from ledes_validator.models.validation_result import INVOICE_CONSISTENCY


def _two_line_invoice(clean_fee_values: dict[str, str]) -> tuple[dict[str, str], dict[str, str]]:
    first = dict(clean_fee_values, INVOICE_TOTAL="300.00", INVOICE_NET_TOTAL="300.00")
    second = dict(
        first,
        LINE_ITEM_NUMBER="2",
        LINE_ITEM_NUMBER_OF_UNITS="1",
        LINE_ITEM_TOTAL="100.00",
        LINE_ITEM_DESCRIPTION="Call with client",
    )
    return first, second


def test_clean_invoice_is_valid(ledes_text, clean_fee_values):
    first, second = _two_line_invoice(clean_fee_values)
    result = validate_dataset(parse(ledes_text(first, second)))

    assert result.row_errors == []
    assert result.dataset_errors == []
    assert result.is_valid
    assert result.total_errors == 0


def test_row_errors_are_stamped_and_ordered(ledes_text, clean_fee_values):
    first, second = _two_line_invoice(clean_fee_values)
    second.update(LINE_ITEM_TYPE="X")
    first.update(INVOICE_CURRENCY="DOLLARS", LINE_ITEM_TOTAL="201.00")

    result = validate_dataset(parse(ledes_text(first, second)))

    assert [(e.row, e.field) for e in result.row_errors] == [
        # field-rule errors come before cross-field errors within a row
        (1, "INVOICE_CURRENCY"),
        (1, "LINE_ITEM_NUMBER_OF_UNITS"),
        (1, "LINE_ITEM_UNIT_COST"),
        (1, "LINE_ITEM_TOTAL"),
        (2, "LINE_ITEM_TYPE"),
    ]


def test_dataset_errors_reference_row_numbers(ledes_text, clean_fee_values):
    first, second = _two_line_invoice(clean_fee_values)
    second.update(INVOICE_TOTAL="350.00")

    result = validate_dataset(parse(ledes_text(first, second)))

    assert result.row_errors == []
    assert [(e.check_type, e.affected_rows) for e in result.dataset_errors] == [(INVOICE_CONSISTENCY, [1, 2])]
    assert not result.is_valid


def test_validation_is_repeatable(ledes_text, clean_fee_values):
    clean_fee_values.update(LINE_ITEM_DATE="")
    dataset = parse(ledes_text(clean_fee_values))
    assert validate_dataset(dataset) == validate_dataset(dataset)
    assert validate_dataset(dataset).row_errors[0].message == "Date is required"
