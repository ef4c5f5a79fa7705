from __future__ import annotations

import re
from dataclasses import dataclass

from ..models.dataset import LedesDataset, LedesRecord
from ..models.fields import CANONICAL_HEADERS

"""LEDES98BI reader/writer.

Wire layout:
- optional version banner ``LEDES98BI V2[]`` (ignored)
- optional header line ``FIELD1[]|FIELD2[]|...``
- data lines, one line item per line, ``|`` separated

Short data lines are padded, never rejected. Values are written back
verbatim: ``|`` and newlines inside a value are not escaped, so such a value
does not survive a write/read cycle.
"""

__all__ = [
    "LedesFormatError",
    "EmptyInputError",
    "FormatCheck",
    "parse",
    "serialize",
    "validate_format",
    "is_banner",
    "DELIMITER",
    "HEADER_SUFFIX",
]

DELIMITER = "|"
HEADER_SUFFIX = "[]"
HEADER_SCAN_LINES = 3

_BANNER_RE = re.compile(r"LEDES98BI\s+V\d+\[\]")


class LedesFormatError(Exception):
    """Raised when input cannot be read as LEDES98BI at all."""


class EmptyInputError(LedesFormatError):
    """Raised when the input has no non-blank lines."""


@dataclass(frozen=True)
class FormatCheck:
    valid: bool
    error: str | None = None


def is_banner(line: str) -> bool:
    return _BANNER_RE.fullmatch(line.strip()) is not None


def _is_header_style(line: str) -> bool:
    return all(part.strip().endswith(HEADER_SUFFIX) for part in line.split(DELIMITER))


def _header_name(token: str) -> str:
    name = token.strip()
    if name.endswith(HEADER_SUFFIX):
        name = name[: -len(HEADER_SUFFIX)]
    return name.strip()


def _non_blank_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if line.strip()]


def parse(text: str) -> LedesDataset:
    """Parse LEDES98BI text into a dataset.

    Steps:
    1. Keep non-blank lines
    2. The first of the first three lines that has a delimiter and is not the
       version banner is the header line; otherwise use the canonical headers
    3. Drop banner lines, repeated header-style lines and lines without a
       delimiter from the data section
    4. Split, pad, trim and zip each data line onto the headers

    Raises:
        EmptyInputError: nothing but blank lines
    """
    lines = _non_blank_lines(text)
    if not lines:
        raise EmptyInputError("File is empty")

    headers: list[str] = list(CANONICAL_HEADERS)
    data_start = 0
    for i, line in enumerate(lines[:HEADER_SCAN_LINES]):
        if DELIMITER in line and not is_banner(line):
            headers = [_header_name(tok) for tok in line.split(DELIMITER)]
            data_start = i + 1
            break

    rows: list[LedesRecord] = []
    for line in lines[data_start:]:
        if is_banner(line) or _is_header_style(line):
            continue
        if DELIMITER not in line:
            continue
        values = [v.strip() for v in line.split(DELIMITER)]
        rows.append(LedesRecord.from_values(headers, values))
    return LedesDataset(headers=headers, rows=rows)


def serialize(dataset: LedesDataset) -> str:
    """Header line with ``[]`` markers, then one line per record in header order."""
    lines = [DELIMITER.join(f"{h}{HEADER_SUFFIX}" for h in dataset.headers)]
    lines.extend(DELIMITER.join(values) for values in dataset.row_values())
    return "\n".join(lines)


def validate_format(text: str) -> FormatCheck:
    """Cheap pre-check before a full parse. Never raises."""
    lines = _non_blank_lines(text)
    if not lines:
        return FormatCheck(valid=False, error="File is empty")
    if DELIMITER not in lines[0]:
        return FormatCheck(valid=False, error="File does not appear to be pipe-delimited")
    try:
        dataset = parse(text)
    except LedesFormatError as e:
        return FormatCheck(valid=False, error=str(e))
    if not dataset.rows:
        return FormatCheck(valid=False, error="No data rows found in file (only headers detected)")
    return FormatCheck(valid=True)
