"""In-memory monthly report grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from pdureport.config import FLOAT_FORMAT, MIN_REPORT_COLUMNS
from pdureport.parsers.values import parse_exact_number

# A report cell is empty (None), a number (float) or text (str)
Cell = Union[None, float, str]


def parse_cell(text: str) -> Cell:
    """Reinterpret a text cell: '' is empty, numbers become floats, the rest stays text."""
    if text == "":
        return None
    value = parse_exact_number(text)
    if value is None:
        return text
    return value


def format_cell(cell: Cell) -> str:
    if cell is None:
        return ""
    if isinstance(cell, str):
        return cell
    return FLOAT_FORMAT % cell


@dataclass
class ReportGrid:
    """Rectangular-ish grid of typed cells; row and column indices are positional."""

    rows: list[list[Cell]] = field(default_factory=list)
    min_columns: int = MIN_REPORT_COLUMNS

    @classmethod
    def from_text_rows(cls, text_rows: list[list[str]], min_columns: int = MIN_REPORT_COLUMNS) -> ReportGrid:
        grid = cls(rows=[[parse_cell(text) for text in row] for row in text_rows], min_columns=min_columns)
        for i in range(len(grid.rows)):
            grid.pad_row(i)
        return grid

    def to_text_rows(self) -> list[list[str]]:
        return [[format_cell(cell) for cell in row] for row in self.rows]

    def pad_row(self, index: int) -> None:
        row = self.rows[index]
        if len(row) < self.min_columns:
            row.extend([None] * (self.min_columns - len(row)))

    def __len__(self) -> int:
        return len(self.rows)

    def cell(self, row: int, column: int) -> Cell:
        cells = self.rows[row]
        if column >= len(cells):
            return None
        return cells[column]

    def set_cell(self, row: int, column: int, value: Cell) -> None:
        self.rows[row][column] = value
