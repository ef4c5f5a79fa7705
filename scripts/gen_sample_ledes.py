#!/usr/bin/env python3
"""Synthetic LEDES98BI file generator for performance and manual testing.

Generated files have the layout the validator expects:
- Line 1: version banner ``LEDES98BI V2[]``
- Line 2: header line (canonical columns, then TIMEKEEPER_ID and
  LINE_ITEM_EXPENSE_CODE)
- Line 3+: line items, grouped by invoice

Every invoice is internally consistent (line totals, net totals, unique line
item numbers). Pass ``--error-rate`` to corrupt a share of LINE_ITEM_TOTAL
values so the file produces findings.
"""
from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

import numpy as np

from ledes_validator import serialize
from ledes_validator.models.dataset import LedesDataset, LedesRecord
from ledes_validator.models.fields import CANONICAL_HEADERS, LINE_ITEM_EXPENSE_CODE, TIMEKEEPER_ID

BANNER = "LEDES98BI V2[]"

# Fee lines need a timekeeper and expense lines an expense code
HEADERS = [*CANONICAL_HEADERS, TIMEKEEPER_ID, LINE_ITEM_EXPENSE_CODE]

FEE_RATES = [150.0, 200.0, 250.0, 300.0, 450.0]
FEE_UNITS = [0.5, 1.0, 1.5, 2.0, 2.5, 3.0, 4.0, 6.5, 8.0]
TASK_CODES = ["L110", "L120", "L210", "L230", "L310", "L430"]
EXPENSE_CODES = ["E101", "E105", "E110", "E112"]
TIMEKEEPERS = ["TK-01", "TK-02", "TK-07", "TK-12"]
FEE_DESCRIPTIONS = [
    "Draft motion to dismiss",
    "Review discovery responses",
    "Conference with client",
    "Prepare deposition outline",
    "Legal research re: jurisdiction",
]
EXPENSE_DESCRIPTIONS = ["Copying", "Courier", "Filing fee", "Travel"]


def _line_items(rng: np.random.Generator, count: int, month: int, first_number: int,
                error_rate: float) -> tuple[list[dict[str, str]], float]:
    """Line item columns for one invoice and the invoice net total."""
    items: list[dict[str, str]] = []
    net = 0.0
    for j in range(count):
        is_fee = rng.random() < 0.7
        if is_fee:
            units = float(rng.choice(FEE_UNITS))
            cost = float(rng.choice(FEE_RATES))
        else:
            units = float(rng.integers(1, 6))
            cost = round(float(rng.uniform(5, 500)), 2)
        total = round(units * cost, 2)
        net += total
        # Corrupt after the net total is taken so both checks fire
        shown = total + 10.0 if rng.random() < error_rate else total

        item = {
            "LINE_ITEM_NUMBER": str(first_number + j),
            "LINE_ITEM_NUMBER_OF_UNITS": f"{units:g}",
            "LINE_ITEM_DATE": date(2024, month, int(rng.integers(1, 29))).strftime("%Y%m%d"),
            "LINE_ITEM_UNIT_COST": f"{cost:.2f}",
            "LINE_ITEM_TOTAL": f"{shown:.2f}",
            "LINE_ITEM_TYPE": "F" if is_fee else "E",
        }
        if is_fee:
            item["LINE_ITEM_TASK_CODE"] = str(rng.choice(TASK_CODES))
            item[TIMEKEEPER_ID] = str(rng.choice(TIMEKEEPERS))
            item["LINE_ITEM_DESCRIPTION"] = str(rng.choice(FEE_DESCRIPTIONS))
        else:
            item[LINE_ITEM_EXPENSE_CODE] = str(rng.choice(EXPENSE_CODES))
            item["LINE_ITEM_DESCRIPTION"] = str(rng.choice(EXPENSE_DESCRIPTIONS))
        items.append(item)
    return items, net


def generate_dataset(invoices: int, lines_per_invoice: int, seed: int = 42,
                     error_rate: float = 0.0) -> LedesDataset:
    """Build a dataset of ``invoices`` invoices over HEADERS.

    Args:
        invoices: Number of invoices
        lines_per_invoice: Line items per invoice
        seed: Random seed for reproducible output
        error_rate: Share of line items (0..1) whose LINE_ITEM_TOTAL is wrong

    Returns:
        LedesDataset with ``invoices * lines_per_invoice`` records
    """
    rng = np.random.default_rng(seed)
    headers = list(HEADERS)
    rows: list[LedesRecord] = []
    next_number = 1

    for i in range(invoices):
        month = i % 12 + 1
        items, net = _line_items(rng, lines_per_invoice, month, next_number, error_rate)
        next_number += lines_per_invoice
        invoice = {
            "INVOICE_DATE": date(2024, month, 28).strftime("%Y%m%d"),
            "INVOICE_NUMBER": f"INV-{i + 1:05d}",
            "CLIENT_MATTER_ID": f"CM-{i % 7 + 1}",
            "INVOICE_TOTAL": f"{net:.2f}",
            "BILLING_START_DATE": date(2024, month, 1).strftime("%Y%m%d"),
            "BILLING_END_DATE": date(2024, month, 28).strftime("%Y%m%d"),
            "INVOICE_NET_TOTAL": f"{net:.2f}",
            "INVOICE_CURRENCY": "USD",
            "LAW_FIRM_NAME": "Smith & Jones LLP",
            "LAW_FIRM_STATEorREGION": "NY",
            "LAW_FIRM_POSTCODE": "10001",
            "CLIENT_NAME": "Acme Corp",
            "CLIENT_STATEorREGION": "CA",
            "CLIENT_POSTCODE": "94105",
        }
        for item in items:
            values = {**invoice, **item}
            rows.append(LedesRecord.from_values(headers, [values.get(h, "") for h in headers]))

    return LedesDataset(headers=headers, rows=rows)


def render(dataset: LedesDataset) -> str:
    return f"{BANNER}\n{serialize(dataset)}\n"


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate synthetic LEDES98BI files")
    parser.add_argument("--invoices", type=int, default=100, help="Number of invoices (default: 100)")
    parser.add_argument("--lines", type=int, default=10, help="Line items per invoice (default: 10)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--error-rate", type=float, default=0.0,
                        help="Share of line items with a wrong total, 0..1 (default: 0)")
    parser.add_argument("--output", "-o", type=Path, required=True, help="Output file path")
    args = parser.parse_args()

    if args.invoices <= 0 or args.lines <= 0:
        print("Error: --invoices and --lines must be positive", file=sys.stderr)
        return 1
    if not 0.0 <= args.error_rate <= 1.0:
        print("Error: --error-rate must be between 0 and 1", file=sys.stderr)
        return 1

    dataset = generate_dataset(args.invoices, args.lines, seed=args.seed, error_rate=args.error_rate)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(render(dataset), encoding="utf-8")

    size_kb = args.output.stat().st_size / 1024
    print(f"Generated {args.output} ({len(dataset.rows)} line items, {size_kb:.1f} KB)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
