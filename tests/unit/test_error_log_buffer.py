from __future__ import annotations

import json
import re
from pathlib import Path

from ledes_validator.logging.error_log import ErrorLogBuffer, ErrorRecord

KEYS = {"timestamp", "file", "rows", "field", "error_type", "message"}


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("a.txt", [1], "FIELD_VALIDATION", "Invalid date", field="INVOICE_DATE"))
    buf.extend([ErrorRecord.create("a.txt", [1, 2], "INVOICE_CONSISTENCY", "mismatch")])
    path = buf.flush()

    assert path is not None and path.exists()
    assert path.parent == Path("logs")
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", path.name)
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw)) == KEYS
    assert len(buf) == 0


def test_error_log_buffer_multiple_flushes_append(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("a.txt", [], "READ_ERROR", "cannot read file"))
    path = buf.flush()
    size1 = path.stat().st_size

    buf.append(ErrorRecord.create("b.txt", [], "READ_ERROR", "cannot read file"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1


def test_clean_run_writes_no_file(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "custom-logs")
    assert buf.flush() is None
    assert not (temp_workdir / "custom-logs").exists()
