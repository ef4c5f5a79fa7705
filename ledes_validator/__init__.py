"""LEDES98BI invoice file parser, serializer and validator.

Core surface:

- ``parse(text)`` / ``serialize(dataset)`` / ``validate_format(text)``
- ``validate_field(field, value)``
- ``validate_dataset(dataset)``
- ``create_empty_record(headers)`` / ``create_empty_dataset(row_count)``
"""

from .codec.ledes98bi import EmptyInputError, FormatCheck, LedesFormatError, parse, serialize, validate_format
from .models.dataset import (
    LedesDataset,
    LedesRecord,
    add_row,
    create_empty_dataset,
    create_empty_record,
    delete_row,
    insert_row,
    update_cell,
)
from .models.fields import CANONICAL_HEADERS, LedesField
from .models.validation_result import (
    DatasetValidationError,
    ValidationError,
    ValidationResult,
    ValidationSummary,
    cell_validation,
    group_row_errors,
    summarize,
)
from .validation.engine import validate_dataset
from .validation.field_rules import validate_field

__version__ = "0.1.0"

__all__ = [
    "CANONICAL_HEADERS",
    "DatasetValidationError",
    "EmptyInputError",
    "FormatCheck",
    "LedesDataset",
    "LedesField",
    "LedesFormatError",
    "LedesRecord",
    "ValidationError",
    "ValidationResult",
    "ValidationSummary",
    "add_row",
    "cell_validation",
    "create_empty_dataset",
    "create_empty_record",
    "delete_row",
    "group_row_errors",
    "insert_row",
    "parse",
    "serialize",
    "summarize",
    "update_cell",
    "validate_dataset",
    "validate_field",
    "validate_format",
]
