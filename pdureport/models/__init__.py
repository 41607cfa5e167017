"""Data models for devices, statistics, and the monthly report."""

from pdureport.models.core import DeviceSection, DeviceStatisticsMatrix, Line, MeasurementKey, Statistics, StatKind
from pdureport.models.grid import Cell, ReportGrid

__all__ = [
    "Line",
    "StatKind",
    "MeasurementKey",
    "Statistics",
    "DeviceStatisticsMatrix",
    "DeviceSection",
    "Cell",
    "ReportGrid",
]
