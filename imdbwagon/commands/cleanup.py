from typing import List

import click

from imdbwagon.console import confirm, file_list, info, success
from imdbwagon.objects.app_config import AppConfig
from imdbwagon.objects.manifest_entry import ARCHIVE_SUFFIX


@click.command()
@click.option(
    "--keep-downloads",
    is_flag=True,
    help="Keep the downloaded .gz archives so the next extract can skip them.",
)
@click.pass_context
def cleanup(ctx: click.Context, keep_downloads: bool) -> List[str]:
    """Delete staged files after asking for confirmation."""

    app_config: AppConfig = ctx.obj["CONFIG"]

    staged = app_config.staging.staged_files()
    if keep_downloads:
        staged = [path for path in staged if not path.name.endswith(ARCHIVE_SUFFIX)]

    if not staged:
        info(f"Nothing to delete in {app_config.staging.root}")
        return []

    file_list([str(path) for path in staged], title=f"{len(staged)} staged files:")
    confirm(f"Delete {len(staged)} staged files?", default=False, abort=True)

    for path in staged:
        path.unlink()

    success(f"Deleted {len(staged)} files from {app_config.staging.root}")
    return [path.name for path in staged]
