from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from .dataset import LedesDataset
from .validation_result import ValidationResult

"""LedesFile model and FileStatus enum.

Processing context for one input file in a batch run, from discovery
through validation.
"""

__all__ = [
    "FileStatus",
    "LedesFile",
]


class FileStatus(Enum):
    """Lifecycle: pending -> (valid | invalid | failed).

    - VALID: parsed and produced no findings
    - INVALID: parsed, but validation returned findings
    - FAILED: could not be read or is not a LEDES98BI file
    """
    PENDING = "pending"
    VALID = "valid"
    INVALID = "invalid"
    FAILED = "failed"


@dataclass(frozen=True)
class LedesFile:
    path: Path
    name: str
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: FileStatus = FileStatus.PENDING
    dataset: LedesDataset | None = None
    result: ValidationResult | None = None
    error: str | None = None  # Hard failure reason

    @property
    def rows(self) -> int:
        return len(self.dataset.rows) if self.dataset is not None else 0

    @property
    def elapsed_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()
