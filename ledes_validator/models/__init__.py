"""Domain models for the LEDES98BI validator.

Field catalogue, dataset/record types, validation findings and batch run
results.
"""

from .dataset import LedesDataset, LedesRecord, create_empty_dataset, create_empty_record
from .fields import CANONICAL_HEADERS, LedesField
from .validation_result import DatasetValidationError, ValidationError, ValidationResult

__all__ = [
    # Field catalogue
    "CANONICAL_HEADERS",
    "LedesField",
    # Data
    "LedesDataset",
    "LedesRecord",
    "create_empty_dataset",
    "create_empty_record",
    # Findings
    "DatasetValidationError",
    "ValidationError",
    "ValidationResult",
]
