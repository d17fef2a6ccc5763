import click

from imdbwagon.console import error, success, table
from imdbwagon.database.database_manager import DatabaseManager
from imdbwagon.objects.app_config import AppConfig


@click.command(name="check-db-connection")
@click.option("--counts", is_flag=True, help="Also list tables with their row counts.")
@click.pass_context
def check_db_connection(ctx: click.Context, counts: bool) -> bool:
    """Test the connection to the target database."""

    app_config: AppConfig = ctx.obj["CONFIG"]
    connection = app_config.connection

    db_manager = DatabaseManager(connection)
    try:
        if not db_manager.test_connection():
            error(f"Failed to connect to {connection.describe()}: {db_manager.connection_error}")
            return False

        success(f"Successfully connected to {connection.describe()}")

        if counts:
            rows = [[name, f"{count:,}"] for name, count in db_manager.tables_and_row_counts()]
            table(rows, headers=["Table", "Row Count"])
    finally:
        db_manager.close()

    return True
