from __future__ import annotations

from pathlib import Path

from ledes_validator.cli import main as cli_main

"""Exit code contract: 0 all valid, 2 findings or failed files, 1 fatal."""


def test_exit_code_fatal_startup(temp_workdir: Path, capsys):
    assert cli_main([]) == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_invalid_config(temp_workdir: Path, capsys):
    (temp_workdir / "config" / "ledes.yml").write_text("source_directory: ./data\nextra: 1\n", encoding="utf-8")
    assert cli_main([]) == 1
    assert "config validation failed" in capsys.readouterr().out


def test_exit_code_all_valid(temp_workdir: Path, write_config: Path, ledes_text, clean_fee_values):
    (temp_workdir / "data" / "ok.ledes").write_text(ledes_text(clean_fee_values), encoding="utf-8")
    assert cli_main([]) == 0


def test_exit_code_empty_directory_is_success(temp_workdir: Path, write_config: Path):
    assert cli_main([]) == 0


def test_exit_code_failed_file_only(temp_workdir: Path, write_config: Path):
    (temp_workdir / "data" / "header-only.txt").write_text("A[]|B[]\n", encoding="utf-8")
    assert cli_main([]) == 2


def test_exit_code_findings(temp_workdir: Path, write_config: Path, ledes_text, clean_fee_values):
    clean_fee_values.update(INVOICE_CURRENCY="1SD")
    (temp_workdir / "data" / "bad.txt").write_text(ledes_text(clean_fee_values), encoding="utf-8")
    assert cli_main([]) == 2
