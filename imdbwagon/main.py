"""imdbwagon CLI application entry point.

This module provides the Click CLI for imdbwagon, which downloads the IMDb
plain text dumps from a public mirror and loads them into PostgreSQL, MySQL or
SQLite through IMDbPY's imdbpy2sql tool. It handles configuration loading,
validation, logging setup and command orchestration.

Commands can be chained, e.g. ``imdbwagon extract -t movies load``.
"""
import importlib.metadata
from pathlib import Path
from typing import Optional

import click
from dotenv import find_dotenv, load_dotenv
from pydantic import SecretStr, ValidationError

from imdbwagon.commands.check_db_connection import check_db_connection
from imdbwagon.commands.cleanup import cleanup
from imdbwagon.commands.extract import extract
from imdbwagon.commands.list_tables import list_tables
from imdbwagon.commands.load import load
from imdbwagon.commands.show_config import show_config
from imdbwagon.exceptions import ConfigurationError
from imdbwagon.logging_config import setup_logging
from imdbwagon.objects.app_config import DEFAULT_SOURCE_URL, AppConfig
from imdbwagon.objects.connection_descriptor import ConnectionDescriptor, DatabaseKind
from imdbwagon.objects.staging_directories import StagingDirectories

DEFAULT_STAGING_DIR = "~/dumps/imdb"
DEFAULT_SQLITE_FILE = "imdb.sqlite3"
DEFAULT_DB_NAME = "imdb"


@click.group(chain=True)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging (DEBUG level)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    help="Write logs to file",
)
@click.option(
    "--staging-dir",
    type=click.Path(file_okay=False),
    default=DEFAULT_STAGING_DIR,
    show_default=True,
    help="Root of the raw/, processing/ and load/ staging directories.",
    envvar="IW_STAGING_DIR",
)
@click.option(
    "--source-url",
    type=str,
    default=DEFAULT_SOURCE_URL,
    show_default=True,
    help="Base URL of the IMDb dump mirror (ftp, http(s) or file).",
    envvar="IW_SOURCE_URL",
)
@click.option(
    "--db-kind",
    type=click.Choice([kind.value for kind in DatabaseKind], case_sensitive=False),
    default=DatabaseKind.SQLITE.value,
    show_default=True,
    help="Target database kind",
    envvar="IW_DB_KIND",
)
@click.option("--db-host", type=str, default="localhost", help="Database host", envvar="IW_DB_HOST")
@click.option("--db-user", type=str, default="", help="Database user", envvar="IW_DB_USER")
@click.option(
    "--db-password",
    type=str,
    default="",
    help="Database password (never displayed)",
    envvar="IW_DB_PASSWORD",
    show_envvar=True,
)
@click.option(
    "--db-name",
    type=str,
    help=f"Database name, or file for sqlite (default: {DEFAULT_DB_NAME}, "
    + f"or <staging-dir>/{DEFAULT_SQLITE_FILE} for sqlite)",
    envvar="IW_DB_NAME",
)
@click.option(
    "--imdbpy2sql",
    "imdbpy2sql_path",
    type=click.Path(dir_okay=False),
    help="Location of imdbpy2sql.py (searched for when omitted)",
    envvar="IW_IMDBPY2SQL",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_file: Optional[str],
    staging_dir: str,
    source_url: str,
    db_kind: str,
    db_host: str,
    db_user: str,
    db_password: str,
    db_name: Optional[str],
    imdbpy2sql_path: Optional[str],
) -> None:
    """imdbwagon CLI group for loading the IMDb dumps into a database.

    Args:
        ctx: Click context object for passing data between commands
        verbose: Enable DEBUG level logging if True
        log_file: Optional path to write log output
        staging_dir: Root directory for downloaded and derivative files
        source_url: Base URL of the dump mirror
        db_kind: postgres, mysql or sqlite
        db_host: Database host
        db_user: Database user
        db_password: Database password
        db_name: Database name or sqlite file
        imdbpy2sql_path: Explicit location of imdbpy2sql.py

    Raises:
        click.UsageError: If the configuration is invalid

    Example:
        >>> imdbwagon --db-kind mysql --db-user imdb extract -t movies load
    """
    logger = setup_logging(verbose=verbose, log_file=log_file)
    ctx.ensure_object(dict)
    ctx.obj["logger"] = logger

    staging = StagingDirectories(root=Path(staging_dir))

    try:
        kind = DatabaseKind.from_name(db_kind)
        if not db_name:
            db_name = (
                str(staging.root / DEFAULT_SQLITE_FILE)
                if kind is DatabaseKind.SQLITE
                else DEFAULT_DB_NAME
            )
        elif kind is DatabaseKind.SQLITE:
            db_name = str(Path(db_name).expanduser().resolve())

        connection = ConnectionDescriptor(
            kind=kind,
            host="" if kind is DatabaseKind.SQLITE else db_host,
            user=db_user,
            password=SecretStr(db_password or ""),
            db_name=db_name,
        )

        app_config = AppConfig(
            staging=staging,
            source_url=source_url,
            connection=connection,
            imdbpy2sql_path=Path(imdbpy2sql_path).expanduser() if imdbpy2sql_path else None,
        )
    except ConfigurationError as e:
        raise click.UsageError(str(e))
    except ValidationError as e:
        raise click.UsageError(f"Invalid configuration\n{e}")

    logger.debug(f"Staging directory: {staging.root}")
    logger.debug(f"Target database: {connection.describe()}")

    ctx.obj["CONFIG"] = app_config


cli.add_command(list_tables)
cli.add_command(extract)
cli.add_command(load)
cli.add_command(check_db_connection)
cli.add_command(show_config)
cli.add_command(cleanup)


def start_cli() -> click.Group:
    """Load the .env file, print the banner and run the CLI group.

    A missing .env file is not an error; options and the environment are
    enough to configure every command.
    """
    env_file = find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(env_file)

    click.secho("imdbwagon", fg="magenta", bold=True)
    click.echo(f"Version: {importlib.metadata.version('imdbwagon')}")
    if env_file:
        click.echo(f"Configuration loaded from: {env_file}")
    click.echo(nl=True)

    return cli(obj={})  # type: ignore


if __name__ == "__main__":
    start_cli()
