from __future__ import annotations

import math
import re

"""Lenient numeric helpers shared by the row and dataset rules.

Amount columns in real LEDES exports often carry currency symbols or
thousands separators. The reconciliation rules strip everything except
digits, '.' and '-', then read the longest leading number. Anything that
still does not read as a number counts as zero.
"""

__all__ = [
    "strip_non_numeric",
    "leading_float",
    "amount",
    "format_number",
]

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def strip_non_numeric(text: str) -> str:
    return _NON_NUMERIC.sub("", text)


def leading_float(text: str) -> float | None:
    """Read the longest numeric prefix of ``text``.

    '12.5abc' -> 12.5, '1.2.3' -> 1.2, 'abc' -> None.
    """
    m = _LEADING_NUMBER.match(text)
    if m is None:
        return None
    value = float(m.group(1))
    return value if math.isfinite(value) else None


def amount(text: str, *, strip: bool = True) -> float:
    """Lenient amount: strip (optional), read the leading number, default 0."""
    value = leading_float(strip_non_numeric(text) if strip else text)
    return 0.0 if value is None else value


def format_number(value: float) -> str:
    """Shortest plain rendering: integral values without a fraction (100.0 -> '100')."""
    if value == int(value) and abs(value) < 1e21:
        return str(int(value))
    return repr(value)
