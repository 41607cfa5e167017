"""Parsing of individual text cells."""

from __future__ import annotations

import math


def parse_number(text: str) -> float | None:
    """Parse a trimmed cell as a float, or return None.

    NaN is treated as unparseable so it never reaches min/max comparisons.
    """
    text = text.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isnan(value):
        return None
    return value


def parse_exact_number(text: str) -> float | None:
    """Parse a report cell as a float only when the whole cell is a plain number.

    Surrounding whitespace and digit separators ("1_0") keep the cell as text.
    """
    if text != text.strip() or "_" in text:
        return None
    return parse_number(text)


def cell_to_text(value: object) -> str:
    """Stringify a raw spreadsheet value; missing values become ''."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value)
