from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Batch run result models.

Aggregates per-file outcomes of a validation run into the figures printed on
the SUMMARY line.
"""

__all__ = [
    "FileStat",
    "ProcessingResult",
]


@dataclass(frozen=True)
class FileStat:
    """Per-file outcome."""
    file_name: str
    status: str  # valid/invalid/failed
    rows: int  # Parsed line items
    row_errors: int
    dataset_errors: int
    elapsed_seconds: float
    error: str | None = None  # Hard failure reason for failed files


@dataclass(frozen=True)
class ProcessingResult:
    """Totals for one run across all scanned files."""
    valid_files: int
    invalid_files: int  # Parsed, but with findings
    failed_files: int  # Unreadable or not LEDES at all
    total_rows: int
    total_row_errors: int
    total_dataset_errors: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float
    file_stats: list[FileStat] | None = None
    error_log_path: str | None = None

    @property
    def total_files(self) -> int:
        return self.valid_files + self.invalid_files + self.failed_files
