from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..models.validation_result import ValidationResult

"""Tabular findings report.

Row and dataset findings flattened into one table, one line per finding,
so a reviewer can sort and filter them in a spreadsheet.
"""

__all__ = [
    "REPORT_COLUMNS",
    "findings_frame",
    "write_report",
]

REPORT_COLUMNS = ["scope", "check_type", "rows", "field", "column", "value", "message"]


def findings_frame(result: ValidationResult) -> pd.DataFrame:
    records: list[dict[str, object]] = []
    for err in result.row_errors:
        records.append({
            "scope": "row",
            "check_type": "field",
            "rows": str(err.row) if err.row is not None else "",
            "field": err.field,
            "column": err.column,
            "value": err.value,
            "message": err.message,
        })
    for ds_err in result.dataset_errors:
        records.append({
            "scope": "dataset",
            "check_type": ds_err.check_type,
            "rows": " ".join(str(r) for r in ds_err.affected_rows),
            "field": ds_err.invoice_identifier,
            "column": None,
            "value": "",
            "message": ds_err.message,
        })
    df = pd.DataFrame.from_records(records, columns=REPORT_COLUMNS)
    # Nullable integers keep the column blank for dataset findings
    df["column"] = df["column"].astype("Int64")
    return df


def write_report(result: ValidationResult, directory: Path, source_name: str) -> Path:
    """Write ``<source stem>.findings.csv`` under ``directory`` and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    out = directory / f"{Path(source_name).stem}.findings.csv"
    findings_frame(result).to_csv(out, index=False, encoding="utf-8")
    return out
