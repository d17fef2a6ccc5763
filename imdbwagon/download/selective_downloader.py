"""Idempotent download of resolved dump files into the staging area."""
from pathlib import Path
from typing import List, Tuple

from pydantic import BaseModel, Field

from imdbwagon.catalog.remote_repository import RemoteRepository
from imdbwagon.exceptions import NetworkError
from imdbwagon.logging_config import get_logger
from imdbwagon.security import SecurityError, validate_path_traversal

logger = get_logger(__name__)


class DownloadSummary(BaseModel):
    """Outcome of one download batch.

    Attributes:
        downloaded: File names fetched during this call
        skipped: File names already present in the destination
        failed: (file name, error message) pairs
    """

    downloaded: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
    failed: List[Tuple[str, str]] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.failed) > 0


class SelectiveDownloader:
    """Downloads each file that is not already staged.

    A file whose destination path exists is never fetched again, so reruns are
    cheap. There is no resume of partial transfers and no checksum check.

    By default a failed file does not stop the batch: every remaining file is
    attempted and one NetworkError naming all failures is raised at the end.
    With ``stop_on_error`` the first failure is raised immediately.
    """

    def __init__(
        self,
        repository: RemoteRepository,
        base_url: str,
        stop_on_error: bool = False,
    ) -> None:
        self.repository = repository
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.stop_on_error = stop_on_error

    def download(self, file_names: List[str], destination_dir: Path) -> DownloadSummary:
        """Populate ``destination_dir`` with ``file_names``.

        Raises:
            NetworkError: If any file could not be fetched
        """
        destination_dir.mkdir(parents=True, exist_ok=True)
        summary = DownloadSummary()

        for file_name in file_names:
            try:
                destination = self._destination_for(file_name, destination_dir)
                if destination.exists():
                    logger.info(f"{file_name} already exists in {destination_dir}, skipping download")
                    summary.skipped.append(file_name)
                    continue

                self.repository.download(self.base_url + file_name, destination)
            except NetworkError as e:
                if self.stop_on_error:
                    raise
                logger.error(f"Failed to download {file_name}: {e}")
                summary.failed.append((file_name, str(e)))
                continue

            summary.downloaded.append(file_name)

        if summary.has_errors:
            failed_names = [name for name, _ in summary.failed]
            raise NetworkError(
                f"Failed to download {len(failed_names)} file(s): {', '.join(failed_names)}",
                failed_files=failed_names,
            )

        return summary

    @staticmethod
    def _destination_for(file_name: str, destination_dir: Path) -> Path:
        try:
            return validate_path_traversal(destination_dir / file_name, destination_dir)
        except SecurityError as e:
            raise NetworkError(f"Refusing to download {file_name}: {e}") from e
