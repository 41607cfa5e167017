"""Choose and load the base grid for a report update.

In preserve mode an existing report at the output path is used as the base,
so sections filled by earlier runs survive. Otherwise the clean template is
loaded.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pdureport.errors import LoadError
from pdureport.models.grid import ReportGrid
from pdureport.storage.sheets import read_rows

logger = logging.getLogger(__name__)


def choose_report_source(template: Path, output: Path | None, preserve: bool) -> Path:
    """Return the file the base grid should be read from."""
    if preserve and output is not None:
        if output.exists():
            logger.info("Loading existing filled report %s (preserving previous data)", output)
            return output
        logger.info("Output file %s doesn't exist, using clean template %s", output, template)
        return template

    logger.info("Using clean template %s", template)
    return template


def load_report_grid(template: Path, output: Path | None = None, preserve: bool = True) -> tuple[ReportGrid, Path]:
    """Load the base grid and return it with the path it came from."""
    source = choose_report_source(template, output, preserve)
    rows = read_rows(source)
    if source == template and not rows:
        raise LoadError(f"template {template} contains no rows")

    grid = ReportGrid.from_text_rows(rows)
    logger.info("Loaded report grid from %s (%d rows)", source, len(grid))
    return grid, source
