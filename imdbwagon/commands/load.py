from pathlib import Path
from typing import Optional

import click
from pydantic import SecretStr

from imdbwagon.console import error, info, newline, status, success, table, warning
from imdbwagon.database.database_manager import DatabaseManager
from imdbwagon.exceptions import ImdbWagonError, LoadToolError
from imdbwagon.objects.app_config import AppConfig
from imdbwagon.pipeline import EtlPipeline, LoadReport


@click.command()
@click.option(
    "--password",
    type=str,
    default=None,
    help="Database password for this load. The real password is never shown in messages.",
)
@click.option(
    "--imdbpy2sql",
    "imdbpy2sql_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Location of imdbpy2sql.py for this load.",
)
@click.option(
    "--skip-tool",
    is_flag=True,
    help="Do not run imdbpy2sql; verify and fall back using files already staged.",
)
@click.option(
    "--stop-on-error",
    is_flag=True,
    help="Stop the fallback load at the first table that fails.",
)
@click.pass_context
def load(
    ctx: click.Context,
    password: Optional[str],
    imdbpy2sql_path: Optional[Path],
    skip_tool: bool,
    stop_on_error: bool,
) -> LoadReport:
    """Load the staged dump files into the database with imdbpy2sql."""

    app_config: AppConfig = ctx.obj["CONFIG"]

    updates = {}
    if password is not None:
        updates["connection"] = app_config.connection.model_copy(
            update={"password": SecretStr(password)}
        )
    if imdbpy2sql_path is not None:
        updates["imdbpy2sql_path"] = imdbpy2sql_path
    if updates:
        app_config = app_config.model_copy(update=updates)

    connection = app_config.connection
    if not skip_tool and not connection.has_password:
        warning("Password argument is blank! A valid password is required.")

    db_manager = DatabaseManager(connection)
    if not db_manager.is_valid_connection:
        error(f"Unable to connect to {connection.describe()}: {db_manager.connection_error}")
        ctx.abort()

    status(f"Loading staged files into {connection.describe()}...")

    pipeline = EtlPipeline(app_config, stop_on_error=stop_on_error)
    try:
        report = pipeline.load(db_manager, run_tool=not skip_tool)
    except LoadToolError as e:
        error(f"imdbpy2sql failed: {e}")
        ctx.abort()
    except ImdbWagonError as e:
        error(str(e))
        ctx.abort()
    finally:
        db_manager.close()

    if report.tool_path:
        info(f"Ran {report.tool_path} (exit status {report.exit_status})")

    newline()
    if report.verified:
        success("Table 'title' is queryable, load complete")
        return report

    warning("Table 'title' was not found, loaded the staged CSV files directly")
    if report.fallback_tables:
        table(
            [[name, f"{rows:,}"] for name, rows in report.fallback_tables],
            headers=["Table", "Rows"],
            title="Fallback load",
        )
    else:
        warning(f"No CSV files found in {app_config.staging.load_dir}")

    return report
