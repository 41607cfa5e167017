"""Error types raised while building the monthly report."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for failures that abort a run.

    ``stage`` names the processing step that failed; the pipeline fills it
    in when the raising code did not.
    """

    def __init__(self, message: str, stage: str = ""):
        super().__init__(message)
        self.stage = stage


class LoadError(ReportError):
    """A source file is unreadable, empty, or too short."""


class SectionNotFoundError(ReportError):
    """The report has no ``PDU <name>`` marker for the device."""


class RangeError(ReportError):
    """A device section extends past the end of the report."""
