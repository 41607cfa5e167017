"""Locate device sections in the monthly report.

A section starts at a row whose first cell reads ``"PDU <name>"``; the 18
rows below it hold racks Q1..Q18.
"""

from __future__ import annotations

import logging

import pandas as pd

from pdureport.config import RACK_COUNT, REPORT_COLUMNS, SECTION_MARKER_PREFIX
from pdureport.errors import SectionNotFoundError
from pdureport.models.core import DeviceSection
from pdureport.models.grid import ReportGrid

logger = logging.getLogger(__name__)


def locate_sections(grid: ReportGrid) -> list[DeviceSection]:
    """Find every device section, in row order.

    Row ranges are not checked against the grid size here; the filler
    reports sections that run past the end.
    """
    sections: list[DeviceSection] = []
    for i, row in enumerate(grid.rows):
        if not row or row[0] is None:
            continue
        first = row[0]
        if not isinstance(first, str) or not first.startswith(SECTION_MARKER_PREFIX):
            continue

        name = first[len(SECTION_MARKER_PREFIX):]
        start_row = i + 1
        section = DeviceSection(
            device_name=name,
            header_row=i,
            start_row=start_row,
            end_row=start_row + RACK_COUNT - 1,
        )
        sections.append(section)
        logger.debug(
            "Found PDU %s: header at row %d, data rows %d-%d",
            name, section.header_row, section.start_row, section.end_row,
        )
    return sections


def find_section(sections: list[DeviceSection], device_name: str) -> DeviceSection:
    """Return the first section for ``device_name``."""
    for section in sections:
        if section.device_name == device_name:
            return section
    raise SectionNotFoundError(f"PDU section '{device_name}' not found in template")


def section_has_data(grid: ReportGrid, section: DeviceSection) -> bool:
    """True when the section's Q1 row already holds an L1 minimum."""
    if section.start_row >= len(grid):
        return False
    return grid.cell(section.start_row, REPORT_COLUMNS["l1 min"]) is not None


def section_overview(grid: ReportGrid, sections: list[DeviceSection] | None = None) -> pd.DataFrame:
    """Table of sections with their row ranges and fill status."""
    if sections is None:
        sections = locate_sections(grid)
    return pd.DataFrame(
        [
            {
                "pdu": s.device_name,
                "header_row": s.header_row,
                "first_row": s.start_row,
                "last_row": s.end_row,
                "complete": s.end_row < len(grid),
                "filled": section_has_data(grid, s),
            }
            for s in sections
        ],
        columns=["pdu", "header_row", "first_row", "last_row", "complete", "filled"],
    )
