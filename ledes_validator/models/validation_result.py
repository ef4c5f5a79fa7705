from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace

"""Validation result models.

Row errors are localized to one field in one row; dataset errors come from
comparing several rows and carry the list of affected row numbers. Both are
plain data: findings are returned, never raised.
"""

__all__ = [
    "ValidationError",
    "DatasetValidationError",
    "ValidationResult",
    "ValidationSummary",
    "summarize",
    "cell_validation",
    "group_row_errors",
    "INVOICE_CONSISTENCY",
    "LINE_ITEM_UNIQUENESS",
    "INVOICE_NET_TOTAL_CALCULATION",
]

# Dataset check type tags
INVOICE_CONSISTENCY = "invoice_consistency"
LINE_ITEM_UNIQUENESS = "line_item_uniqueness"
INVOICE_NET_TOTAL_CALCULATION = "invoice_net_total_calculation"

# Columns that surface dataset-level findings in a cell lookup
_INVOICE_CELL_FIELDS = frozenset({"INVOICE_TOTAL", "INVOICE_NUMBER", "INVOICE_DATE"})


@dataclass(frozen=True)
class ValidationError:
    """Row-scoped finding.

    Attributes:
        field: Header name of the offending column
        column: 1-based column position, 0 when the header list lacks the
            column, -1 for a pseudo error derived from a dataset finding
        value: Offending raw value
        message: Human readable reason
        row: 1-based row number, None until stamped by the orchestrator
    """
    field: str
    column: int
    value: str
    message: str
    row: int | None = None

    def with_row(self, row: int) -> ValidationError:
        return replace(self, row=row)

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class DatasetValidationError:
    """Cross-row finding."""
    check_type: str
    invoice_identifier: str
    message: str
    affected_rows: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class ValidationResult:
    row_errors: list[ValidationError] = field(default_factory=list)
    dataset_errors: list[DatasetValidationError] = field(default_factory=list)

    @property
    def total_errors(self) -> int:
        return len(self.row_errors) + len(self.dataset_errors)

    @property
    def is_valid(self) -> bool:
        return self.total_errors == 0

    def to_dict(self) -> dict[str, object]:
        return {
            "row_errors": [e.to_dict() for e in self.row_errors],
            "dataset_errors": [e.to_dict() for e in self.dataset_errors],
        }


@dataclass(frozen=True)
class ValidationSummary:
    total_errors: int
    fields_with_errors: int
    rows_with_errors: int
    has_errors: bool


def summarize(result: ValidationResult) -> ValidationSummary:
    """Counts for a status banner. Field/row counts consider row errors only."""
    total = result.total_errors
    return ValidationSummary(
        total_errors=total,
        fields_with_errors=len({e.field for e in result.row_errors}),
        rows_with_errors=len({e.row for e in result.row_errors}),
        has_errors=total > 0,
    )


def cell_validation(result: ValidationResult, row_index: int, column: str) -> ValidationError | None:
    """Finding to show on one cell (``row_index`` is 0-based).

    A row error on that exact cell wins. Otherwise the invoice identity cells
    borrow the message of the first dataset error that covers the row, as a
    pseudo error with column -1.
    """
    row = row_index + 1
    for err in result.row_errors:
        if err.row == row and err.field == column:
            return err

    if column not in _INVOICE_CELL_FIELDS:
        return None
    for ds_err in result.dataset_errors:
        if row in ds_err.affected_rows:
            return ValidationError(field=column, column=-1, value="", message=ds_err.message, row=row)
    return None


def group_row_errors(result: ValidationResult) -> dict[int, list[ValidationError]]:
    """Row errors keyed by row number, rows in first-seen order (unstamped errors under 0)."""
    grouped: dict[int, list[ValidationError]] = {}
    for err in result.row_errors:
        grouped.setdefault(err.row or 0, []).append(err)
    return grouped
