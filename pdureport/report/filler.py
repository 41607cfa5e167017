"""Write one device's statistics into its report section."""

from __future__ import annotations

import logging

from pdureport.config import RACK_COUNT, REPORT_COLUMNS
from pdureport.errors import RangeError
from pdureport.models.core import DeviceSection, DeviceStatisticsMatrix, Line, Statistics, StatKind
from pdureport.models.grid import ReportGrid

logger = logging.getLogger(__name__)


def summarize_lines(l1: Statistics, l2: Statistics, l3: Statistics) -> Statistics:
    """Cross-line summary of already reduced per-line statistics.

    The average is the unweighted mean of the three line averages.
    """
    return Statistics(
        min=min(l1.min, l2.min, l3.min),
        max=max(l1.max, l2.max, l3.max),
        avg=(l1.avg + l2.avg + l3.avg) / 3.0,
    )


def fill_section(grid: ReportGrid, section: DeviceSection, matrix: DeviceStatisticsMatrix) -> None:
    """Fill racks Q1..Q18 of ``section`` in place, including the summary columns."""
    logger.info(
        "Filling data into PDU %s section (rows %d-%d)",
        section.device_name, section.start_row, section.end_row,
    )

    for q in range(RACK_COUNT):
        row = section.start_row + q
        if row >= len(grid):
            raise RangeError(
                f"row index {row} exceeds template size ({len(grid)} rows) in PDU {section.device_name} section"
            )
        grid.pad_row(row)

        per_line = {line: matrix.get(q, line) for line in Line}
        for line, stats in per_line.items():
            for kind in StatKind:
                grid.set_cell(row, REPORT_COLUMNS[f"{line.value} {kind.value}"], stats.get(kind))

        summary = summarize_lines(per_line[Line.L1], per_line[Line.L2], per_line[Line.L3])
        for kind in StatKind:
            grid.set_cell(row, REPORT_COLUMNS[f"summary {kind.value}"], summary.get(kind))
