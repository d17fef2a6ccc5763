from typing import List

import click

from imdbwagon.catalog.remote_catalog import RemoteCatalog
from imdbwagon.catalog.remote_repository import RemoteRepository
from imdbwagon.console import error, info, newline, status, table
from imdbwagon.exceptions import NetworkError
from imdbwagon.objects.app_config import AppConfig
from imdbwagon.objects.manifest_entry import ManifestEntry


@click.command(name="list-tables")
@click.pass_context
def list_tables(ctx: click.Context) -> List[ManifestEntry]:
    """Show the tables available on the mirror and which are already downloaded."""

    app_config: AppConfig = ctx.obj["CONFIG"]
    catalog = RemoteCatalog(RemoteRepository(), app_config.source_url, app_config.manifest_name)

    status(f"Fetching {catalog.manifest_url}...")
    try:
        manifest = catalog.fetch_manifest()
    except NetworkError as e:
        error(str(e))
        ctx.abort()

    raw_dir = app_config.staging.raw_dir
    rows = [
        [
            entry.table_name,
            entry.archive_name,
            entry.file_size,
            "yes" if (raw_dir / entry.archive_name).exists() else "",
        ]
        for entry in manifest
    ]
    table(rows, headers=["Table", "File", "Size", "Downloaded"], title="IMDb dump files")

    newline()
    info(f"{len(manifest)} tables available", bold=True)

    return manifest
