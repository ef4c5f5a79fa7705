from __future__ import annotations

import re
from pathlib import Path

from ledes_validator.cli import main as cli_main

"""SUMMARY output contract: exactly one line, last on stdout, fixed key order."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY files=(\d+)/\1 valid=\d+ invalid=\d+ failed=\d+ rows=\d+ "
    r"row_errors=\d+ dataset_errors=\d+ elapsed_sec=[0-9.]+ throughput_rps=[0-9.]+$"
)


def test_single_summary_line_is_last(temp_workdir: Path, write_config: Path, ledes_text, clean_fee_values, capsys):
    (temp_workdir / "data" / "inv.txt").write_text(ledes_text(clean_fee_values), encoding="utf-8")

    cli_main([])

    lines = capsys.readouterr().out.strip().splitlines()
    summary = [ln for ln in lines if ln.startswith("SUMMARY")]
    assert len(summary) == 1
    assert lines[-1] == summary[0]
    assert SUMMARY_PATTERN.match(summary[0]), summary[0]
