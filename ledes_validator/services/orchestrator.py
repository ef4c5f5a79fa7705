from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..codec.ledes98bi import LedesFormatError, is_banner, parse, validate_format
from ..config.loader import RunConfig
from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import FORMAT_ERROR, READ_ERROR, ErrorRecord
from ..models.ledes_file import FileStatus, LedesFile
from ..models.processing_result import FileStat, ProcessingResult
from ..validation.engine import validate_dataset
from .progress import ProgressTracker
from .report import write_report

logger = logging.getLogger(__name__)

"""Batch validation service.

Scans the configured directory, then for each file: parse (a file with no
records fails), validate, buffer findings into the error log and (optionally)
write a CSV report. A bad file never stops the run; only a missing source
directory is fatal.
"""

__all__ = [
    "ProcessingError",
    "scan_ledes_files",
    "process_file",
    "process_all",
]


class ProcessingError(Exception):
    """Fatal batch problem (the run cannot start)."""


def scan_ledes_files(directory: Path, extensions: tuple[str, ...]) -> list[Path]:
    """Files in ``directory`` (non-recursive) whose suffix is in ``extensions``, sorted by name.

    Raises:
        ProcessingError: directory missing, not a directory, or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in extensions),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def _failed(file_path: Path, start: datetime, reason: str, error_type: str, error_log: ErrorLogBuffer) -> LedesFile:
    logger.warning(f"{file_path.name}: {reason}")
    error_log.append(ErrorRecord.create(file_path.name, [], error_type, reason))
    return LedesFile(
        path=file_path,
        name=file_path.name,
        start_time=start,
        end_time=datetime.now(UTC),
        status=FileStatus.FAILED,
        error=reason,
    )


def _no_rows_reason(text: str) -> str:
    # The version banner has no delimiter; diagnose what follows it
    body = "\n".join(line for line in text.split("\n") if not is_banner(line))
    return validate_format(body).error or "No data rows found in file"


def process_file(file_path: Path, config: RunConfig, error_log: ErrorLogBuffer) -> LedesFile:
    """Read, parse and validate one file. Never raises for bad content."""
    start = datetime.now(UTC)
    try:
        text = file_path.read_text(encoding=config.encoding)
    except (OSError, UnicodeDecodeError) as e:
        return _failed(file_path, start, f"cannot read file: {e}", READ_ERROR, error_log)

    try:
        dataset = parse(text)
    except LedesFormatError as e:
        return _failed(file_path, start, str(e), FORMAT_ERROR, error_log)
    if not dataset.rows:
        return _failed(file_path, start, _no_rows_reason(text), FORMAT_ERROR, error_log)

    result = validate_dataset(dataset)
    for err in result.row_errors:
        error_log.append(ErrorRecord.from_row_error(file_path.name, err))
    for ds_err in result.dataset_errors:
        error_log.append(ErrorRecord.from_dataset_error(file_path.name, ds_err))

    if config.report_directory:
        out = write_report(result, Path(config.report_directory), file_path.name)
        logger.debug(f"report written: {out}")

    status = FileStatus.VALID if result.is_valid else FileStatus.INVALID
    logger.info(
        f"{file_path.name}: {status.value} rows={len(dataset.rows)} "
        f"row_errors={len(result.row_errors)} dataset_errors={len(result.dataset_errors)}"
    )
    return LedesFile(
        path=file_path,
        name=file_path.name,
        start_time=start,
        end_time=datetime.now(UTC),
        status=status,
        dataset=dataset,
        result=result,
    )


def process_all(config: RunConfig) -> ProcessingResult:
    """Validate every LEDES file in the configured directory.

    Steps:
    1. Scan the source directory
    2. Process each file (progress bar on a TTY)
    3. Flush the error log once
    4. Aggregate counts into a ProcessingResult

    Raises:
        ProcessingError: the source directory cannot be scanned
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer(Path(config.error_log_directory))
    file_paths = scan_ledes_files(Path(config.source_directory), config.file_extensions)

    file_stats: list[FileStat] = []
    total_row_errors = 0
    total_dataset_errors = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            processed = process_file(file_path, config, error_log)

            row_errors = len(processed.result.row_errors) if processed.result else 0
            dataset_errors = len(processed.result.dataset_errors) if processed.result else 0
            total_row_errors += row_errors
            total_dataset_errors += dataset_errors

            progress.finish_file(processed.status, processed.rows)

            file_stats.append(
                FileStat(
                    file_name=processed.name,
                    status=processed.status.value,
                    rows=processed.rows,
                    row_errors=row_errors,
                    dataset_errors=dataset_errors,
                    elapsed_seconds=processed.elapsed_seconds,
                    error=processed.error,
                )
            )

        counts = progress.counts
        total_rows = progress.rows

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"findings written to {log_path}")

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput_rps = total_rows / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        valid_files=counts[FileStatus.VALID],
        invalid_files=counts[FileStatus.INVALID],
        failed_files=counts[FileStatus.FAILED],
        total_rows=total_rows,
        total_row_errors=total_row_errors,
        total_dataset_errors=total_dataset_errors,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput_rps,
        file_stats=file_stats,
        error_log_path=str(log_path) if log_path is not None else None,
    )
