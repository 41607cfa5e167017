"""Core data models for PDU current statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pdureport.config import RACK_COUNT


class Line(Enum):
    L1 = "l1"
    L2 = "l2"
    L3 = "l3"

    @classmethod
    def parse(cls, token: str) -> Line | None:
        try:
            return cls(token.strip().lower())
        except ValueError:
            return None


class StatKind(Enum):
    MIN = "min"
    AVG = "avg"
    MAX = "max"


@dataclass(frozen=True)
class MeasurementKey:
    """One circuit/phase combination of a device, e.g. rack Q1 on line L1."""

    rack: str  # e.g. "Q1"
    line: Line

    @property
    def key(self) -> str:
        """Column-map key like 'Q1_l1'."""
        return f"{self.rack}_{self.line.value}"


@dataclass(frozen=True)
class Statistics:
    """Summary of one sample series."""

    min: float
    max: float
    avg: float

    @classmethod
    def zero(cls) -> Statistics:
        return cls(0.0, 0.0, 0.0)

    def get(self, kind: StatKind) -> float:
        return getattr(self, kind.value)


def _empty_values() -> dict[tuple[Line, StatKind], list[float]]:
    return {(line, kind): [0.0] * RACK_COUNT for line in Line for kind in StatKind}


@dataclass
class DeviceStatisticsMatrix:
    """Per-rack statistics of one device.

    ``values[(line, kind)]`` holds 18 numbers, one per rack Q1..Q18.
    Iteration order is always L1, L2, L3 and min, avg, max within a line.
    """

    device_name: str
    values: dict[tuple[Line, StatKind], list[float]] = field(default_factory=_empty_values)

    def set(self, rack_index: int, line: Line, stats: Statistics) -> None:
        for kind in StatKind:
            self.values[(line, kind)][rack_index] = stats.get(kind)

    def get(self, rack_index: int, line: Line) -> Statistics:
        return Statistics(
            min=self.values[(line, StatKind.MIN)][rack_index],
            max=self.values[(line, StatKind.MAX)][rack_index],
            avg=self.values[(line, StatKind.AVG)][rack_index],
        )

    def rows(self) -> list[tuple[str, list[float]]]:
        """Labelled rows in file order: ("l1 min", [Q1..Q18]), ..."""
        return [
            (f"{line.value} {kind.value}", list(self.values[(line, kind)]))
            for line in Line
            for kind in StatKind
        ]


@dataclass(frozen=True)
class DeviceSection:
    """Row range of one device inside the monthly report."""

    device_name: str
    header_row: int
    start_row: int  # Q1 row
    end_row: int  # Q18 row

    @property
    def rows(self) -> range:
        return range(self.start_row, self.end_row + 1)
