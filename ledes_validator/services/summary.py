from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for a batch validation run."""


def _format_seconds(value: float) -> str:
    # Integral values without a fraction; tiny values without scientific notation
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY files={total}/{total} valid={v} invalid={i} failed={f} rows={rows}
    row_errors={r} dataset_errors={d} elapsed_sec={elapsed} throughput_rps={tp}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     valid_files=1, invalid_files=1, failed_files=0, total_rows=40,
        ...     total_row_errors=3, total_dataset_errors=1, start_time=start,
        ...     end_time=end, elapsed_seconds=2.0, throughput_rows_per_sec=20.0,
        ... )
        >>> render_summary_line(result)  # doctest: +ELLIPSIS
        'SUMMARY files=2/2 valid=1 invalid=1 failed=0 rows=40 row_errors=3 dataset_errors=1 ...'
    """
    total = result.total_files
    return (
        f"SUMMARY files={total}/{total} "
        f"valid={result.valid_files} "
        f"invalid={result.invalid_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_rows} "
        f"row_errors={result.total_row_errors} "
        f"dataset_errors={result.total_dataset_errors} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)} "
        f"throughput_rps={_format_seconds(result.throughput_rows_per_sec)}"
    )
