"""Extract device names from file paths and derive default file names."""

from __future__ import annotations

import re
from pathlib import Path

from pdureport.config import STATS_FILE_PATTERN

# Device code anywhere in a file stem: "total_a1" -> "a1", "B12" -> "B12"
_DEVICE_RE = re.compile(r"([abc]\d+)", re.IGNORECASE)


def device_name_from_filename(path: Path | str) -> str | None:
    """Recover the device name encoded in a file name.

    Examples:
        "total_a1.csv" → "A1"
        "reports/B2.xlsx" → "B2"
        "summary.csv" → None
    """
    m = _DEVICE_RE.search(Path(path).stem)
    if not m:
        return None
    return m.group(1).upper()


def default_stats_filename(input_path: Path | str) -> Path:
    """Default statistics file for an export: "A1.xlsx" → "total_a1.csv"."""
    return Path(STATS_FILE_PATTERN.format(name=Path(input_path).stem.lower()))
