"""Shared fixtures for pdureport tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from openpyxl import Workbook

TEMPLATE_HEADER = [
    "No", "Rack", "Breaker",
    "Current L1 Min", "Current L1 AVG", "Current L1 Max",
    "Current L2 Min", "Current L2 AVG", "Current L2 Max",
    "Current L3 Min", "Current L3 AVG", "Current L3 Max",
    "Current Min", "Current AVG", "Current Max",
]

# Two timestamps of A1 readings:
#   Q1: L1 10/12, L2 20/22, L3 5/7; Q2: L1 1 (second reading blank)
A1_HEADER = [
    "Timestamp",
    "A1 Q1 Current : l1",
    "A1 Q1 Current : l2",
    "A1 Q1 Current : l3",
    "A1 Q2 Current : l1",
]
A1_ROWS = [
    ["2025-06-01 00:00", "10.0", "20.0", "5", "1"],
    ["2025-06-01 01:00", "12.0", "22.0", "7", ""],
]

B1_HEADER = ["Timestamp", "B1 Q18 Current : l3", "B1 Q3 Current : l2"]
B1_ROWS = [
    ["2025-06-01 00:00", "4.5", "8"],
    ["2025-06-01 01:00", "5.5", "n/a"],
    ["2025-06-01 02:00", "6.5", "9"],
]


def write_workbook(path: Path, rows: list[list]) -> Path:
    """Write rows to the first sheet; ``None`` leaves a cell blank."""
    wb = Workbook()
    ws = wb.active
    for r, row in enumerate(rows, 1):
        for c, value in enumerate(row, 1):
            if value is not None:
                ws.cell(row=r, column=c, value=value)
    wb.save(path)
    return path


def template_rows(devices: list[str]) -> list[list]:
    """Title, header, then a blank spacer, marker and 18 rack rows per device."""
    rows: list[list] = [["Monthly PDU report June 2025"], TEMPLATE_HEADER]
    for name in devices:
        rows.append([])
        rows.append([f"PDU {name}"])
        for q in range(1, 19):
            rows.append([q, f"Q{q}", "32A"])
    return rows


@pytest.fixture
def workbook():
    return write_workbook


@pytest.fixture
def make_template(tmp_path):
    def _make(devices=("A1", "B1", "C1"), name="template.xlsx"):
        return write_workbook(tmp_path / name, template_rows(list(devices)))

    return _make


@pytest.fixture
def template_path(make_template):
    return make_template()


@pytest.fixture
def a1_export(tmp_path):
    return write_workbook(tmp_path / "A1.xlsx", [A1_HEADER, *A1_ROWS])


@pytest.fixture
def b1_export(tmp_path):
    return write_workbook(tmp_path / "B1.xlsx", [B1_HEADER, *B1_ROWS])
