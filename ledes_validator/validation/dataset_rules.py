from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..models.dataset import LedesDataset
from ..models.fields import LedesField
from ..models.validation_result import (
    INVOICE_CONSISTENCY,
    INVOICE_NET_TOTAL_CALCULATION,
    LINE_ITEM_UNIQUENESS,
    DatasetValidationError,
)
from .numbers import format_number, leading_float, strip_non_numeric

"""Cross-row dataset checks.

Line items belong to the same invoice when they agree on whichever of the
invoice identity fields the header list carries. Groups are keyed by a tuple
of those values and reported in first-seen order.
"""

__all__ = [
    "INVOICE_IDENTIFIER_FIELDS",
    "NET_TOTAL_TOLERANCE",
    "InvoiceGroup",
    "group_invoices",
    "check_invoice_totals_consistency",
    "check_unique_line_item_numbers",
    "check_invoice_net_totals",
    "validate_cross_row",
]

INVOICE_IDENTIFIER_FIELDS: tuple[LedesField, ...] = (
    LedesField.INVOICE_DATE,
    LedesField.LAW_FIRM_NAME,
    LedesField.CLIENT_NAME,
    LedesField.INVOICE_NUMBER,
)

NET_TOTAL_TOLERANCE = 0.01


@dataclass
class InvoiceGroup:
    """Rows sharing one invoice key. ``rows`` are 1-based, ascending."""
    key: tuple[str, ...]
    identifier: str
    rows: list[int] = field(default_factory=list)


def _available_identifiers(headers: Sequence[str]) -> list[LedesField]:
    return [f for f in INVOICE_IDENTIFIER_FIELDS if f.value in headers]


def _identifier_string(fields: Sequence[LedesField], key: tuple[str, ...]) -> str:
    return ", ".join(f"{f.value}={v}" for f, v in zip(fields, key) if v)


def _numeric(text: str) -> float | None:
    if not text.strip():
        return None
    return leading_float(strip_non_numeric(text))


def group_invoices(dataset: LedesDataset) -> list[InvoiceGroup]:
    """Group rows by invoice key. Empty when no identity field is in the headers."""
    fields = _available_identifiers(dataset.headers)
    if not fields:
        return []
    groups: dict[tuple[str, ...], InvoiceGroup] = {}
    for row_number, record in enumerate(dataset.rows, start=1):
        key = tuple(record.get(f) for f in fields)
        group = groups.get(key)
        if group is None:
            group = groups[key] = InvoiceGroup(key=key, identifier=_identifier_string(fields, key))
        group.rows.append(row_number)
    return list(groups.values())


def check_invoice_totals_consistency(
    dataset: LedesDataset, groups: list[InvoiceGroup] | None = None
) -> list[DatasetValidationError]:
    """Every row of an invoice must repeat the same INVOICE_TOTAL."""
    if LedesField.INVOICE_TOTAL.value not in dataset.headers:
        return []
    if groups is None:
        groups = group_invoices(dataset)

    errors: list[DatasetValidationError] = []
    for group in groups:
        if len(group.rows) <= 1:
            continue
        totals: set[float] = set()
        for row_number in group.rows:
            value = _numeric(dataset.rows[row_number - 1].get(LedesField.INVOICE_TOTAL))
            if value is not None:
                totals.add(value)
        if len(totals) > 1:
            listed = ", ".join(format_number(v) for v in sorted(totals))
            errors.append(
                DatasetValidationError(
                    check_type=INVOICE_CONSISTENCY,
                    invoice_identifier=group.identifier,
                    message=f"Invoice has inconsistent totals: {listed}",
                    affected_rows=list(group.rows),
                )
            )
    return errors


def check_unique_line_item_numbers(dataset: LedesDataset) -> list[DatasetValidationError]:
    """LINE_ITEM_NUMBER must be unique across the whole dataset, not per invoice."""
    if LedesField.LINE_ITEM_NUMBER.value not in dataset.headers:
        return []
    seen: dict[str, list[int]] = {}
    for row_number, record in enumerate(dataset.rows, start=1):
        number = record.get(LedesField.LINE_ITEM_NUMBER)
        if number.strip():
            seen.setdefault(number, []).append(row_number)

    return [
        DatasetValidationError(
            check_type=LINE_ITEM_UNIQUENESS,
            invoice_identifier=f"{LedesField.LINE_ITEM_NUMBER.value}={number}",
            message=f"Line item number {number} is not unique",
            affected_rows=rows,
        )
        for number, rows in seen.items()
        if len(rows) > 1
    ]


def check_invoice_net_totals(
    dataset: LedesDataset, groups: list[InvoiceGroup] | None = None
) -> list[DatasetValidationError]:
    """INVOICE_NET_TOTAL (taken from the first row) must equal the sum of LINE_ITEM_TOTAL."""
    headers = dataset.headers
    if LedesField.INVOICE_NET_TOTAL.value not in headers or LedesField.LINE_ITEM_TOTAL.value not in headers:
        return []
    if groups is None:
        groups = group_invoices(dataset)

    errors: list[DatasetValidationError] = []
    for group in groups:
        if len(group.rows) <= 1:
            continue
        records = [dataset.rows[n - 1] for n in group.rows]
        expected = _numeric(records[0].get(LedesField.INVOICE_NET_TOTAL))
        if expected is None:
            continue

        actual = 0.0
        contributed = 0
        for record in records:
            value = _numeric(record.get(LedesField.LINE_ITEM_TOTAL))
            if value is not None:
                actual += value
                contributed += 1

        if contributed and abs(actual - expected) > NET_TOTAL_TOLERANCE:
            errors.append(
                DatasetValidationError(
                    check_type=INVOICE_NET_TOTAL_CALCULATION,
                    invoice_identifier=group.identifier,
                    message=(
                        f"Invoice net total ({format_number(expected)}) does not equal "
                        f"sum of line item totals ({actual:.2f})"
                    ),
                    affected_rows=list(group.rows),
                )
            )
    return errors


def validate_cross_row(dataset: LedesDataset) -> list[DatasetValidationError]:
    """Run the three dataset checks; invoice grouping is computed once and shared."""
    groups = group_invoices(dataset)
    errors: list[DatasetValidationError] = []
    errors.extend(check_invoice_totals_consistency(dataset, groups))
    errors.extend(check_unique_line_item_numbers(dataset))
    errors.extend(check_invoice_net_totals(dataset, groups))
    return errors
