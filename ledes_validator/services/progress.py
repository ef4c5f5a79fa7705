from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

from ..models.ledes_file import FileStatus

"""Progress display with tqdm (TTY only).

One bar per run, advanced once per file, with the running valid/invalid/failed
counts and parsed line items in the postfix. When stdout is not a terminal
(CI, pipes) no bar is created so log output stays free of control sequences;
the counts are still kept.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """File-level progress over a batch run."""

    def __init__(self, total_files: int, *, description: str = "Validating files") -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0
        self.rows = 0
        self.counts = {FileStatus.VALID: 0, FileStatus.INVALID: 0, FileStatus.FAILED: 0}

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None = None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, status: FileStatus, rows: int = 0) -> None:
        """Count one finished file and advance the bar."""
        self.counts[status] += 1
        self.rows += rows
        if self.pbar is None:
            return
        self.pbar.set_postfix(
            valid=self.counts[FileStatus.VALID],
            invalid=self.counts[FileStatus.INVALID],
            failed=self.counts[FileStatus.FAILED],
            rows=self.rows,
        )
        self.pbar.update(1)
        self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
