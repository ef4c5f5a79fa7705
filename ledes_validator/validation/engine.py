from __future__ import annotations

import logging

from ..models.dataset import LedesDataset
from ..models.validation_result import ValidationError, ValidationResult
from .dataset_rules import validate_cross_row
from .row_rules import validate_cross_field_row, validate_row

logger = logging.getLogger(__name__)

__all__ = [
    "validate_dataset",
]


def validate_dataset(dataset: LedesDataset) -> ValidationResult:
    """Validate every row, then the dataset as a whole.

    Pure function of the snapshot passed in: no caching, no I/O. Findings are
    returned, never raised, so one malformed row cannot stop the rest.

    Row errors are ordered by row, field-rule errors before cross-field errors
    within a row. Dataset errors are consistency, uniqueness, then net total.
    """
    row_errors: list[ValidationError] = []
    headers = dataset.headers
    for row_number, values in enumerate(dataset.row_values(), start=1):
        for err in validate_row(values, headers):
            row_errors.append(err.with_row(row_number))
        for err in validate_cross_field_row(values, headers):
            row_errors.append(err.with_row(row_number))

    dataset_errors = validate_cross_row(dataset)
    logger.debug(
        "validated rows=%d row_errors=%d dataset_errors=%d",
        len(dataset.rows), len(row_errors), len(dataset_errors),
    )
    return ValidationResult(row_errors=row_errors, dataset_errors=dataset_errors)
