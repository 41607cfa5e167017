"""Read and write tabular files as rows of text."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from pdureport.errors import LoadError
from pdureport.parsers.values import cell_to_text

logger = logging.getLogger(__name__)


def _trim_trailing_blanks(row: list[str]) -> list[str]:
    end = len(row)
    while end and row[end - 1] == "":
        end -= 1
    return row[:end]


def read_sheet_rows(path: Path) -> list[list[str]]:
    """Read the first worksheet of a workbook as text rows.

    Blank rows are kept so row indices match the sheet; trailing blank cells
    of each row are dropped.
    """
    try:
        wb = load_workbook(path, data_only=True)
    except (OSError, ValueError, KeyError, BadZipFile, InvalidFileException) as e:
        raise LoadError(f"failed to open workbook {path}: {e}") from e

    try:
        if not wb.worksheets:
            raise LoadError(f"no sheets found in {path}")
        ws = wb.worksheets[0]
        rows = [
            _trim_trailing_blanks([cell_to_text(v) for v in values])
            for values in ws.iter_rows(values_only=True)
        ]
    finally:
        wb.close()

    logger.debug("Read %d rows from sheet '%s' of %s", len(rows), ws.title, path)
    return rows


def read_csv_rows(path: Path) -> list[list[str]]:
    """Read a CSV file as text rows (rows may differ in length)."""
    try:
        with open(path, newline="", encoding="utf-8") as f:
            return [row for row in csv.reader(f)]
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise LoadError(f"failed to read CSV {path}: {e}") from e


def read_rows(path: Path) -> list[list[str]]:
    """Read a CSV or workbook, chosen by file suffix."""
    if path.suffix.lower() == ".csv":
        return read_csv_rows(path)
    return read_sheet_rows(path)


def write_csv_rows(path: Path, rows: list[list[str]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerows(rows)
