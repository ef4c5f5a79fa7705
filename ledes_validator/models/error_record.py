from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .validation_result import DatasetValidationError, ValidationError

"""ErrorRecord model for the JSON Lines findings log.

One record per finding. Keys are fixed; ``rows`` is empty for file-level
problems (unreadable file, not pipe-delimited) where no row applies.
"""

__all__ = [
    "ErrorRecord",
    "FORMAT_ERROR",
    "READ_ERROR",
    "FIELD_VALIDATION",
]

# error_type values for records that are not dataset checks
FORMAT_ERROR = "FORMAT_ERROR"
READ_ERROR = "READ_ERROR"
FIELD_VALIDATION = "FIELD_VALIDATION"


def _utc_now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ErrorRecord:
    """Structured finding for the error log.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Source file name
        rows: 1-based row numbers the finding refers to (empty for file-level)
        field: Column name for row findings, None otherwise
        error_type: UPPER_SNAKE classification
        message: Human readable description
    """
    timestamp: str
    file: str
    rows: list[int]
    field: str | None
    error_type: str
    message: str

    @staticmethod
    def create(
        file: str,
        rows: list[int],
        error_type: str,
        message: str,
        field: str | None = None,
    ) -> ErrorRecord:
        return ErrorRecord(
            timestamp=_utc_now(),
            file=file,
            rows=list(rows),
            field=field,
            error_type=error_type,
            message=message,
        )

    @staticmethod
    def from_row_error(file: str, err: ValidationError) -> ErrorRecord:
        rows = [err.row] if err.row is not None else []
        return ErrorRecord.create(file, rows, FIELD_VALIDATION, err.message, field=err.field)

    @staticmethod
    def from_dataset_error(file: str, err: DatasetValidationError) -> ErrorRecord:
        return ErrorRecord.create(
            file,
            err.affected_rows,
            err.check_type.upper(),
            f"{err.invoice_identifier}: {err.message}" if err.invoice_identifier else err.message,
        )

    def to_json_line(self) -> str:
        # asdict keeps the key set fixed to the dataclass fields
        return json.dumps(asdict(self), ensure_ascii=False)
