"""End-to-end runs: export -> statistics file -> monthly report.

Each report update is a load -> mutate -> save cycle on the output file.
Two runs writing the same output at the same time would race; runs are
expected to happen one after another.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from tqdm import tqdm

from pdureport.analysis.statistics import aggregate_rows
from pdureport.errors import ReportError
from pdureport.models.core import DeviceSection, DeviceStatisticsMatrix
from pdureport.parsers.filename_parser import default_stats_filename
from pdureport.report.filler import fill_section
from pdureport.report.loader import load_report_grid
from pdureport.report.sections import find_section, locate_sections, section_has_data
from pdureport.storage.sheets import read_sheet_rows
from pdureport.storage.writer import read_statistics_csv, write_report, write_statistics_csv

logger = logging.getLogger(__name__)


@dataclass
class FillResult:
    """Outcome of filling one device into the report."""

    device_name: str
    section: DeviceSection
    source: Path  # template or previous report the grid was loaded from
    output: Path
    overwrote: bool = False


@contextmanager
def _stage(name: str):
    """Label any ReportError raised inside the block with ``name``."""
    try:
        yield
    except ReportError as e:
        if not e.stage:
            e.stage = name
        raise


def aggregate_export(input_path: Path, output_path: Path | None = None) -> tuple[DeviceStatisticsMatrix, Path]:
    """Reduce one device export to its statistics file."""
    if output_path is None:
        output_path = default_stats_filename(input_path)

    with _stage("loading input file"):
        matrix = aggregate_rows(read_sheet_rows(input_path))

    with _stage("generating output"):
        write_statistics_csv(matrix, output_path)

    return matrix, output_path


def fill_report(stats_path: Path, template: Path, output: Path, preserve: bool = True) -> FillResult:
    """Merge one statistics file into the monthly report and save it."""
    with _stage("loading PDU data"):
        matrix = read_statistics_csv(stats_path)

    with _stage("loading monthly template"):
        grid, source = load_report_grid(template, output, preserve)
        sections = locate_sections(grid)
        logger.info("Report has %d PDU sections", len(sections))

    with _stage("finding PDU section"):
        section = find_section(sections, matrix.device_name)

    overwrote = section_has_data(grid, section)
    if overwrote:
        logger.warning("PDU %s section already contains data - it will be overwritten", matrix.device_name)

    with _stage("filling PDU data"):
        fill_section(grid, section, matrix)

    with _stage("exporting report"):
        write_report(grid, output)

    return FillResult(
        device_name=matrix.device_name,
        section=section,
        source=source,
        output=output,
        overwrote=overwrote,
    )


def process_exports(
    input_paths: list[Path],
    template: Path,
    output: Path,
    preserve: bool = True,
    stats_dir: Path | None = None,
) -> list[FillResult]:
    """Aggregate and fill several exports one after another.

    The first export honours ``preserve``; later ones always build on the
    report written by the previous one.
    """
    results: list[FillResult] = []
    for i, input_path in enumerate(tqdm(input_paths, desc="Processing PDU exports")):
        stats_path = default_stats_filename(input_path)
        if stats_dir is not None:
            stats_path = stats_dir / stats_path
        _, stats_path = aggregate_export(input_path, stats_path)
        results.append(fill_report(stats_path, template, output, preserve=preserve or i > 0))
    return results
