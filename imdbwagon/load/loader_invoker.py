"""Run imdbpy2sql against the staged dump files.

The command line contract is::

    <tool> [db type flag] -d <raw dir> -u '<kind>://<user>:<password>@<host>/<db>' -c <raw dir>

The connection string carries the real password, so every diagnostic form of
the command goes through ``ConnectionDescriptor.redact``.
"""
import os
import shlex
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

from imdbwagon.catalog.remote_repository import PARTIAL_SUFFIX
from imdbwagon.exceptions import LoadToolError
from imdbwagon.logging_config import get_logger
from imdbwagon.objects.connection_descriptor import ConnectionDescriptor, DatabaseKind
from imdbwagon.objects.manifest_entry import ARCHIVE_SUFFIX
from imdbwagon.objects.staging_directories import StagingDirectories

logger = get_logger(__name__)

DB_TYPE_FLAGS: Dict[DatabaseKind, Optional[str]] = {
    DatabaseKind.POSTGRES: None,
    DatabaseKind.MYSQL: "--mysql-force-myisam",
    DatabaseKind.SQLITE: "--sqlite-transactions",
}


class ExternalLoaderInvoker:
    """Builds and runs the imdbpy2sql command for one connection."""

    def __init__(self, tool_path: Path) -> None:
        self.tool_path = tool_path

    def _tool_prefix(self) -> List[str]:
        # A non-executable script is run with the current interpreter
        if self.tool_path.suffix == ".py" and not os.access(self.tool_path, os.X_OK):
            return [sys.executable, str(self.tool_path)]
        return [str(self.tool_path)]

    def build_command(self, descriptor: ConnectionDescriptor, raw_dir: Path) -> List[str]:
        command = self._tool_prefix()

        flag = DB_TYPE_FLAGS.get(descriptor.kind)
        if flag:
            command.append(flag)

        command += ["-d", str(raw_dir), "-u", descriptor.dsn(), "-c", str(raw_dir)]
        return command

    def redacted_command(self, descriptor: ConnectionDescriptor, raw_dir: Path) -> str:
        """Shell-quoted command with the password replaced by a placeholder."""
        arguments = [descriptor.redact(arg) for arg in self.build_command(descriptor, raw_dir)]
        return descriptor.redact(shlex.join(arguments))

    def load(self, descriptor: ConnectionDescriptor, staging: StagingDirectories) -> int:
        """Run the tool, move its derivative files to the load dir, return its exit status.

        Raises:
            LoadToolError: If the tool cannot be started or exits nonzero
        """
        if not descriptor.has_password:
            logger.warning("Password argument is blank! A valid password is required.")

        staging.ensure()
        command = self.build_command(descriptor, staging.raw_dir)
        display = self.redacted_command(descriptor, staging.raw_dir)

        logger.info(f"Running {display}")
        try:
            completed = subprocess.run(command, cwd=staging.processing_dir, check=False)
        except OSError as e:
            raise LoadToolError(
                f"Unable to run {self.tool_path}: {descriptor.redact(str(e))}"
            ) from e
        logger.info(f"Ran {display}")

        self.relocate_derivatives(staging.raw_dir, staging.load_dir)

        if completed.returncode != 0:
            raise LoadToolError(
                f"{self.tool_path.name} exited with status {completed.returncode}",
                exit_status=completed.returncode,
            )

        return completed.returncode

    @staticmethod
    def relocate_derivatives(raw_dir: Path, load_dir: Path) -> List[Path]:
        """Move every non-archive file from ``raw_dir`` into ``load_dir``."""
        load_dir.mkdir(parents=True, exist_ok=True)

        moved = []
        for path in sorted(raw_dir.iterdir()):
            if not path.is_file() or path.name.endswith((ARCHIVE_SUFFIX, PARTIAL_SUFFIX)):
                continue
            target = load_dir / path.name
            shutil.move(str(path), str(target))
            moved.append(target)

        logger.info(f"Moved {len(moved)} derivative files to {load_dir}")
        return moved
