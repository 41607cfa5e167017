"""Reduce per-rack current samples to min/avg/max statistics.

Pure analysis, no file I/O: takes text rows of an export and returns a
``DeviceStatisticsMatrix``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from pdureport.config import RACKS
from pdureport.errors import LoadError
from pdureport.models.core import DeviceStatisticsMatrix, Line, MeasurementKey, Statistics
from pdureport.parsers.header_parser import HeaderLayout, parse_header
from pdureport.parsers.values import parse_number

logger = logging.getLogger(__name__)


def reduce_series(series: Sequence[float]) -> Statistics:
    """Min, max and mean of a series; (0, 0, 0) when it is empty.

    The mean sums values in encounter order.
    """
    if len(series) == 0:
        return Statistics.zero()

    values = np.asarray(series, dtype=np.float64)
    return Statistics(
        min=float(values.min()),
        max=float(values.max()),
        avg=float(np.cumsum(values)[-1] / values.size),
    )


def collect_samples(rows: Sequence[Sequence[str]], columns: dict[str, int]) -> dict[str, list[float]]:
    """Gather numeric samples per key from data rows, in row order.

    Out-of-range columns, blank cells and non-numeric cells are skipped.
    """
    samples: dict[str, list[float]] = {}
    skipped = 0

    for row in rows:
        for key, col in columns.items():
            if col >= len(row):
                skipped += 1
                continue
            value = parse_number(row[col])
            if value is None:
                skipped += 1
                continue
            samples.setdefault(key, []).append(value)

    if skipped:
        logger.debug("Skipped %d blank or non-numeric cells", skipped)
    return samples


def build_matrix(device_name: str, samples: dict[str, list[float]]) -> DeviceStatisticsMatrix:
    """Reduce every rack/line series into the fixed Q1..Q18 x L1..L3 matrix."""
    matrix = DeviceStatisticsMatrix(device_name=device_name)
    for q, rack in enumerate(RACKS):
        for line in Line:
            series = samples.get(MeasurementKey(rack, line).key, [])
            matrix.set(q, line, reduce_series(series))
    return matrix


def aggregate_rows(rows: Sequence[Sequence[str]]) -> DeviceStatisticsMatrix:
    """Turn the rows of one export (header first) into a statistics matrix."""
    if len(rows) < 2:
        raise LoadError("insufficient data: export needs a header and at least one data row")

    layout: HeaderLayout = parse_header(list(rows[0]))
    samples = collect_samples(rows[1:], layout.columns)
    logger.info(
        "PDU %s: %d columns mapped, %d data rows",
        layout.device_name or "?", len(layout.columns), len(rows) - 1,
    )
    return build_matrix(layout.device_name, samples)
