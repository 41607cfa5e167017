"""Write and read per-device statistics files and the monthly report."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from pdureport.config import FLOAT_FORMAT, MEASUREMENT_TYPE_HEADER, MEASUREMENT_TYPES, RACK_COUNT, RACKS
from pdureport.errors import LoadError, ReportError
from pdureport.models.core import DeviceStatisticsMatrix, Line, StatKind
from pdureport.models.grid import ReportGrid
from pdureport.parsers.filename_parser import device_name_from_filename
from pdureport.parsers.values import parse_number
from pdureport.storage.sheets import read_csv_rows, write_csv_rows

logger = logging.getLogger(__name__)

# "l1 min" -> (Line.L1, StatKind.MIN)
_LABELS: dict[str, tuple[Line, StatKind]] = {
    f"{line.value} {kind.value}": (line, kind) for line in Line for kind in StatKind
}


def statistics_to_dataframe(matrix: DeviceStatisticsMatrix) -> pd.DataFrame:
    """One row per measurement type, one column per rack."""
    records = []
    for label, values in matrix.rows():
        record = {MEASUREMENT_TYPE_HEADER: label}
        record.update(zip(RACKS, values))
        records.append(record)
    return pd.DataFrame(records, columns=[MEASUREMENT_TYPE_HEADER, *RACKS])


def write_statistics_csv(matrix: DeviceStatisticsMatrix, path: Path) -> Path:
    """Write the 9x18 statistics of one device."""
    df = statistics_to_dataframe(matrix)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False, float_format=FLOAT_FORMAT, lineterminator="\n")
    except OSError as e:
        raise ReportError(f"failed to write statistics file {path}: {e}", stage="exporting statistics") from e
    logger.info("Wrote statistics for PDU %s to %s", matrix.device_name, path)
    return path


def read_statistics_csv(path: Path) -> DeviceStatisticsMatrix:
    """Load a statistics file written by ``write_statistics_csv``.

    The device name comes from the file name ("total_a1.csv" -> "A1").
    Rows with an unknown label or fewer than 19 fields are skipped; cells that
    do not parse stay 0.
    """
    device_name = device_name_from_filename(path)
    if device_name is None:
        raise LoadError(f"could not extract PDU name from filename: {path}")

    records = read_csv_rows(path)
    if len(records) < len(MEASUREMENT_TYPES) + 1:
        raise LoadError(f"insufficient data in PDU CSV file {path}")

    matrix = DeviceStatisticsMatrix(device_name=device_name)
    for record in records[1:]:
        if len(record) < RACK_COUNT + 1:
            continue
        target = _LABELS.get(record[0].strip())
        if target is None:
            continue
        values = matrix.values[target]
        for q in range(RACK_COUNT):
            value = parse_number(record[q + 1])
            if value is not None:
                values[q] = value

    logger.info("Loaded PDU %s data from %s", device_name, path)
    return matrix


def write_report(grid: ReportGrid, path: Path) -> Path:
    """Serialize the full report grid as CSV."""
    try:
        write_csv_rows(path, grid.to_text_rows())
    except OSError as e:
        raise ReportError(f"failed to write report {path}: {e}", stage="exporting report") from e
    logger.info("Exported filled data to %s (%d rows)", path, len(grid))
    return path
