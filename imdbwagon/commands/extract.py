from pathlib import Path
from typing import Optional, Tuple

import click

from imdbwagon.console import error, file_list, info, newline, status, success, warning
from imdbwagon.exceptions import ImdbWagonError, NetworkError
from imdbwagon.objects.app_config import AppConfig
from imdbwagon.objects.table_selection import TableSelection
from imdbwagon.pipeline import EtlPipeline, ExtractReport


@click.command()
@click.option(
    "--table",
    "-t",
    "tables",
    multiple=True,
    help="Table to download, e.g. movies (repeatable). Defaults to movies, actors, actresses, directors.",
)
@click.option("--all-tables", is_flag=True, help="Download every table listed by the mirror.")
@click.option(
    "--selection-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="TOML file with a [selection] table (tables, all_tables).",
)
@click.option(
    "--stop-on-error",
    is_flag=True,
    help="Stop at the first failed download instead of attempting the rest.",
)
@click.pass_context
def extract(
    ctx: click.Context,
    tables: Tuple[str, ...],
    all_tables: bool,
    selection_file: Optional[Path],
    stop_on_error: bool,
) -> ExtractReport:
    """Download the selected IMDb dump files into the raw staging directory."""

    app_config: AppConfig = ctx.obj["CONFIG"]

    try:
        selection = TableSelection.from_cli(list(tables), all_tables, selection_file)
    except ImdbWagonError as e:
        error(str(e))
        ctx.abort()

    if selection.all_tables:
        status(f"Resolving all tables against {app_config.source_url}...")
    else:
        status(f"Resolving {', '.join(selection.tables)} against {app_config.source_url}...")

    pipeline = EtlPipeline(app_config, stop_on_error=stop_on_error)
    try:
        report = pipeline.extract(selection)
    except NetworkError as e:
        error(str(e))
        ctx.abort()

    if not report.resolved:
        warning("None of the requested tables are available on the mirror.")
        return report

    summary = report.summary
    if summary.skipped:
        file_list(summary.skipped, title=f"{len(summary.skipped)} files already downloaded:")
    if summary.downloaded:
        file_list(summary.downloaded, title=f"{len(summary.downloaded)} files downloaded:")

    newline()
    info(f"Raw files are in {app_config.staging.raw_dir}")
    success(f"Extracted {len(report.resolved)} tables")

    return report
