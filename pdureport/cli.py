"""Click-based CLI entry point for pdureport."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from pdureport.config import load_settings
from pdureport.errors import ReportError


def _fail(e: ReportError) -> click.ClickException:
    stage = f"{e.stage} failed: " if e.stage else ""
    return click.ClickException(f"{stage}{e}")


def _resolve_preserve(settings, preserve: bool, clean: bool) -> bool:
    if preserve and clean:
        raise click.UsageError("--preserve and --clean are mutually exclusive")
    if clean:
        return False
    return preserve or settings.preserve


@click.group()
@click.version_option(version="0.1.0")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Settings file (default: ./pdureport.yaml if present).")
@click.option("-v", "--verbose", is_flag=True, help="Log progress messages.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool):
    """PDU current statistics and monthly report filling.

    Runs update the report file in place (load, fill, save); run them one at
    a time against the same output.
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = load_settings(config_path)
    except ReportError as e:
        raise _fail(e) from e


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path), required=False)
def aggregate(input_file: Path, output_file: Path | None):
    """Reduce a PDU export (e.g. A1.xlsx) to a statistics CSV (total_a1.csv)."""
    from pdureport.pipeline import aggregate_export

    try:
        matrix, out_path = aggregate_export(input_file, output_file)
    except ReportError as e:
        raise _fail(e) from e

    click.echo(f"Input: {input_file}")
    click.echo(f"Output: {out_path}")
    click.echo(f"PDU processed: {matrix.device_name}")


@cli.command()
@click.argument("stats_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("template_arg", metavar="TEMPLATE", required=False,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_arg", metavar="OUTPUT", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option("-t", "--template", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Monthly template file.")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Report output file.")
@click.option("-p", "--preserve", is_flag=True, help="Keep sections from an existing report (default).")
@click.option("-c", "--clean", is_flag=True,
              help="Start from the clean template, dropping previous data. Cannot be combined with --preserve.")
@click.pass_obj
def fill(settings, stats_file: Path, template_arg: Path | None, output_arg: Path | None,
         template: Path | None, output: Path | None, preserve: bool, clean: bool):
    """Fill one PDU statistics file into the monthly report.

    TEMPLATE and OUTPUT may also be given positionally; -t and -o take
    precedence over them.
    """
    from pdureport.pipeline import fill_report

    template = template or template_arg or settings.template
    output = output or output_arg or settings.output
    preserve = _resolve_preserve(settings, preserve, clean)
    if not template.exists():
        raise click.ClickException(f"Monthly template file {template} not found")

    try:
        result = fill_report(stats_file, template, output, preserve=preserve)
    except ReportError as e:
        raise _fail(e) from e

    click.echo(f"PDU data source: {stats_file}")
    click.echo(f"Base grid: {result.source}")
    click.echo(f"Output: {result.output}")
    click.echo(f"Filled PDU section: {result.device_name} (rows {result.section.start_row}-{result.section.end_row})")
    if result.overwrote:
        click.echo("Previous values in this section were overwritten.")
    click.echo("Mode: preserve existing data" if preserve else "Mode: clean template (previous data erased)")


@cli.command()
@click.argument("input_files", nargs=-1, required=True,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-t", "--template", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Monthly template file.")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Report output file.")
@click.option("-p", "--preserve", is_flag=True, help="First export keeps sections from an existing report (default).")
@click.option("-c", "--clean", is_flag=True,
              help="First export starts from the clean template. Cannot be combined with --preserve.")
@click.option("--stats-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Directory for the per-PDU statistics files.")
@click.pass_obj
def batch(settings, input_files: tuple[Path, ...], template: Path | None, output: Path | None,
          preserve: bool, clean: bool, stats_dir: Path | None):
    """Aggregate several PDU exports and fill them into one report, in order."""
    from pdureport.pipeline import process_exports

    template = template or settings.template
    output = output or settings.output
    preserve = _resolve_preserve(settings, preserve, clean)
    stats_dir = stats_dir or settings.stats_dir
    if not template.exists():
        raise click.ClickException(f"Monthly template file {template} not found")

    try:
        results = process_exports(list(input_files), template, output, preserve=preserve, stats_dir=stats_dir)
    except ReportError as e:
        raise _fail(e) from e

    click.echo(f"\nFilled {len(results)} PDU sections into {output}:")
    for r in results:
        note = " (overwritten)" if r.overwrote else ""
        click.echo(f"  {r.device_name}: rows {r.section.start_row}-{r.section.end_row}{note}")


@cli.command()
@click.argument("report_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def sections(report_file: Path):
    """List the PDU sections of a template or filled report."""
    from pdureport.models.grid import ReportGrid
    from pdureport.report.sections import section_overview
    from pdureport.storage.sheets import read_rows

    try:
        grid = ReportGrid.from_text_rows(read_rows(report_file))
    except ReportError as e:
        raise _fail(e) from e

    overview = section_overview(grid)
    if overview.empty:
        click.echo(f"No PDU sections found in {report_file}")
        return
    click.echo(overview.to_string(index=False))


if __name__ == "__main__":
    cli()
