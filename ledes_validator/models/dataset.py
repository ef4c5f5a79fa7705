from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .fields import CANONICAL_HEADERS, LedesField, lookup_field

"""Dataset and record models.

A LedesDataset is the in-memory header list plus ordered line-item records.
Records hold raw strings only; nothing is coerced at storage time. Datasets
are never edited in place: the helpers at the bottom of this module return a
new dataset with whole records replaced.
"""

__all__ = [
    "LedesRecord",
    "LedesDataset",
    "create_empty_record",
    "create_empty_dataset",
    "add_row",
    "insert_row",
    "delete_row",
    "update_cell",
]


@dataclass(frozen=True)
class LedesRecord:
    """One line item.

    Canonical columns live in ``fields`` keyed by LedesField; columns whose
    header is not canonical live in the ``extras`` side-table keyed by
    their raw header name. Column order is owned by the dataset header list.
    """
    fields: dict[LedesField, str] = field(default_factory=dict)
    extras: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_values(cls, headers: Sequence[str], values: Sequence[str]) -> LedesRecord:
        """Zip values onto headers, padding missing trailing values with ''."""
        padded = list(values) + [""] * (len(headers) - len(values))
        canonical: dict[LedesField, str] = {}
        extras: dict[str, str] = {}
        for name, value in zip(headers, padded):
            fid = lookup_field(name)
            if fid is not None:
                canonical[fid] = value
            else:
                extras[name] = value
        return cls(fields=canonical, extras=extras)

    def get(self, name: str | LedesField, default: str = "") -> str:
        fid = name if isinstance(name, LedesField) else lookup_field(name)
        if fid is not None:
            return self.fields.get(fid, default)
        return self.extras.get(name, default)

    def values_for(self, headers: Sequence[str]) -> list[str]:
        """Values in header order (missing columns read as '')."""
        return [self.get(h) for h in headers]

    def to_dict(self, headers: Sequence[str]) -> dict[str, str]:
        return {h: self.get(h) for h in headers}

    def with_value(self, name: str, value: str) -> LedesRecord:
        """Return a copy of this record with one column replaced."""
        fid = lookup_field(name)
        if fid is not None:
            return LedesRecord(fields={**self.fields, fid: value}, extras=dict(self.extras))
        return LedesRecord(fields=dict(self.fields), extras={**self.extras, name: value})


@dataclass(frozen=True)
class LedesDataset:
    """Header list plus ordered records. Row order defines 1-based row numbers."""
    headers: list[str]
    rows: list[LedesRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def row_values(self) -> list[list[str]]:
        """Every record as a list of values in header order."""
        return [r.values_for(self.headers) for r in self.rows]


def create_empty_record(headers: Iterable[str]) -> LedesRecord:
    """Record with every column set to the empty string."""
    headers = list(headers)
    return LedesRecord.from_values(headers, [""] * len(headers))


def create_empty_dataset(row_count: int = 10) -> LedesDataset:
    headers = list(CANONICAL_HEADERS)
    return LedesDataset(
        headers=headers,
        rows=[create_empty_record(headers) for _ in range(row_count)],
    )


def add_row(dataset: LedesDataset) -> LedesDataset:
    """Append an empty record."""
    return LedesDataset(
        headers=list(dataset.headers),
        rows=[*dataset.rows, create_empty_record(dataset.headers)],
    )


def insert_row(dataset: LedesDataset, at_index: int) -> LedesDataset:
    """Insert an empty record before the 0-based ``at_index`` (list.insert semantics)."""
    rows = list(dataset.rows)
    rows.insert(at_index, create_empty_record(dataset.headers))
    return LedesDataset(headers=list(dataset.headers), rows=rows)


def delete_row(dataset: LedesDataset, row_index: int) -> LedesDataset:
    """Drop the record at the 0-based ``row_index``. Out-of-range indexes are a no-op."""
    rows = [r for i, r in enumerate(dataset.rows) if i != row_index]
    return LedesDataset(headers=list(dataset.headers), rows=rows)


def update_cell(dataset: LedesDataset, row_index: int, column: str, value: str) -> LedesDataset:
    """Replace the record at ``row_index`` with a copy carrying the new cell value.

    Raises:
        IndexError: row_index is outside the dataset
        KeyError: column is not in the dataset header list
    """
    if not 0 <= row_index < len(dataset.rows):
        raise IndexError(f"row index out of range: {row_index}")
    if column not in dataset.headers:
        raise KeyError(column)
    rows = list(dataset.rows)
    rows[row_index] = rows[row_index].with_value(column, value)
    return LedesDataset(headers=list(dataset.headers), rows=rows)
