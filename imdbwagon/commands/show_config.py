import click

from imdbwagon.console import header, info
from imdbwagon.objects.app_config import AppConfig


@click.command(name="show-config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Display the current configuration (the password is hidden)."""

    app_config: AppConfig = ctx.obj["CONFIG"]

    header("Application Configuration")
    info(app_config.model_dump_json(indent=2))
