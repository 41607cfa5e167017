"""Paths, constants, and configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from pdureport.errors import LoadError

logger = logging.getLogger(__name__)

# Default file locations
DEFAULT_TEMPLATE = Path("monthlyjune2025.xlsx")
DEFAULT_REPORT = Path("filled_monthly_report.csv")
SETTINGS_FILE = "pdureport.yaml"

# Per-device statistics file: "total_a1.csv"
STATS_FILE_PATTERN = "total_{name}.csv"

# Device layout
RACK_COUNT = 18
RACKS = [f"Q{i}" for i in range(1, RACK_COUNT + 1)]

# Report layout: every row is padded to this width so the summary columns exist
MIN_REPORT_COLUMNS = 15
SECTION_MARKER_PREFIX = "PDU "

# Report column offsets inside a device section row
REPORT_COLUMNS: dict[str, int] = {
    "l1 min": 3,
    "l1 avg": 4,
    "l1 max": 5,
    "l2 min": 6,
    "l2 avg": 7,
    "l2 max": 8,
    "l3 min": 9,
    "l3 avg": 10,
    "l3 max": 11,
    # Summary per rack
    "summary min": 12,
    "summary avg": 13,
    "summary max": 14,
}

# Statistics CSV row labels, in file order
MEASUREMENT_TYPES = [
    "l1 min", "l1 avg", "l1 max",
    "l2 min", "l2 avg", "l2 max",
    "l3 min", "l3 avg", "l3 max",
]
MEASUREMENT_TYPE_HEADER = "Measurement Type"

# Numbers are written with this precision in every CSV we produce
FLOAT_FORMAT = "%.3f"


@dataclass
class Settings:
    """User-level defaults, overridable from the command line."""

    template: Path = DEFAULT_TEMPLATE
    output: Path = DEFAULT_REPORT
    preserve: bool = True
    stats_dir: Path | None = None

    def __post_init__(self):
        self.template = Path(self.template)
        self.output = Path(self.output)
        if self.stats_dir is not None:
            self.stats_dir = Path(self.stats_dir)
        self.preserve = bool(self.preserve)


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a YAML file.

    Without an explicit path, ``pdureport.yaml`` in the working directory is
    used when present; otherwise the built-in defaults apply.
    """
    if path is None:
        candidate = Path(SETTINGS_FILE)
        if not candidate.exists():
            return Settings()
        path = candidate

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise LoadError(f"failed to read settings file {path}: {e}", stage="loading settings") from e

    if not isinstance(data, dict):
        raise LoadError(f"settings file {path} must contain a mapping", stage="loading settings")

    known = {f.name for f in fields(Settings)}
    for key in sorted(set(data) - known):
        logger.warning("Ignoring unknown setting '%s' in %s", key, path)

    settings = Settings(**{k: v for k, v in data.items() if k in known})
    logger.info("Loaded settings from %s", path)
    return settings
