# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from ledes_validator.logging.init import reset_logging
from ledes_validator.models.fields import CANONICAL_HEADERS, LINE_ITEM_EXPENSE_CODE, TIMEKEEPER_ID

# Canonical columns plus the two that F and E lines require
LEDES_HEADERS: tuple[str, ...] = (*CANONICAL_HEADERS, TIMEKEEPER_ID, LINE_ITEM_EXPENSE_CODE)

# A clean fee line item: 2 units x 100 = 200, invoice of one line
CLEAN_FEE_VALUES: dict[str, str] = {
    "INVOICE_DATE": "20240131",
    "INVOICE_NUMBER": "INV-1001",
    "CLIENT_MATTER_ID": "CM-7",
    "INVOICE_TOTAL": "200.00",
    "BILLING_START_DATE": "20240101",
    "BILLING_END_DATE": "20240131",
    "INVOICE_NET_TOTAL": "200.00",
    "INVOICE_CURRENCY": "USD",
    "LINE_ITEM_NUMBER": "1",
    "LINE_ITEM_NUMBER_OF_UNITS": "2",
    "LINE_ITEM_DATE": "20240115",
    "LINE_ITEM_UNIT_COST": "100",
    "LINE_ITEM_TOTAL": "200.00",
    "LINE_ITEM_DESCRIPTION": "Draft motion to dismiss",
    "LINE_ITEM_TYPE": "F",
    "LINE_ITEM_TASK_CODE": "L210",
    "TIMEKEEPER_ID": "TK-12",
    "LAW_FIRM_NAME": "Smith & Jones LLP",
    "LAW_FIRM_STATEorREGION": "NY",
    "LAW_FIRM_POSTCODE": "10001",
    "CLIENT_NAME": "Acme Corp",
    "CLIENT_STATEorREGION": "CA",
    "CLIENT_POSTCODE": "94105",
}


def canonical_values(**overrides: str) -> list[str]:
    """Values for the canonical columns, all empty unless given."""
    return [overrides.get(h, "") for h in CANONICAL_HEADERS]


def canonical_line(**overrides: str) -> str:
    return "|".join(canonical_values(**overrides))


def ledes_values(**overrides: str) -> list[str]:
    """Values for LEDES_HEADERS, all empty unless given."""
    return [overrides.get(h, "") for h in LEDES_HEADERS]


def ledes_line(**overrides: str) -> str:
    return "|".join(ledes_values(**overrides))


def header_line(headers: list[str] | tuple[str, ...] = LEDES_HEADERS) -> str:
    return "|".join(f"{h}[]" for h in headers)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("LEDES_CONFIG", raising=False)
    monkeypatch.delenv("LEDES_SOURCE_DIRECTORY", raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
file_extensions: [".txt", ".ledes"]
encoding: utf-8
error_log_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "ledes.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def clean_fee_values() -> dict[str, str]:
    return dict(CLEAN_FEE_VALUES)


@pytest.fixture()
def ledes_text() -> Callable[..., str]:
    """Build a LEDES98BI file body: banner, LEDES_HEADERS header, then one line per row dict."""
    def build(*rows: dict[str, str], banner: bool = True) -> str:
        lines = ["LEDES98BI V2[]"] if banner else []
        lines.append(header_line())
        lines.extend(ledes_line(**row) for row in rows)
        return "\n".join(lines) + "\n"
    return build
