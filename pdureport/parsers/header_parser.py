"""Parser for the header row of a PDU current export.

Export headers look like ``"A1 Q1 Current : l1"``:

- token 0: device name ("A1")
- token 1: rack ("Q1")
- last token: line ("l1")

Column 0 holds the timestamp label and is skipped. Headers with fewer than
five whitespace-separated tokens are not measurement columns and are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pdureport.models.core import Line, MeasurementKey

logger = logging.getLogger(__name__)

MIN_HEADER_TOKENS = 5


@dataclass
class HeaderLayout:
    """Device name and column index of every measurement key."""

    device_name: str = ""
    columns: dict[str, int] = field(default_factory=dict)  # "Q1_l1" -> column index


def make_key(rack: str, line: str) -> str | None:
    """Build the column-map key for a rack/line pair, or None for an unknown line.

    Racks are upper-cased and lines lower-cased, so "q1"/"L1" and "Q1"/"l1"
    address the same measurement.
    """
    parsed = Line.parse(line)
    if parsed is None:
        return None
    return MeasurementKey(rack.upper(), parsed).key


def parse_header(header: list[str]) -> HeaderLayout:
    """Map each measurement column of an export header to its key."""
    layout = HeaderLayout()

    for i, raw in enumerate(header):
        if i == 0:
            continue  # timestamp

        text = raw.strip()
        if not text:
            continue

        parts = text.split()
        if len(parts) < MIN_HEADER_TOKENS:
            logger.debug("Skipping header column %d: %r", i, text)
            continue

        device, rack, line = parts[0], parts[1], parts[-1]

        if not layout.device_name:
            layout.device_name = device
        elif device != layout.device_name:
            logger.debug("Column %d names device %s, keeping %s", i, device, layout.device_name)

        key = make_key(rack, line)
        if key is None:
            logger.debug("Skipping header column %d: unknown line %r", i, line)
            continue
        layout.columns[key] = i

    return layout
