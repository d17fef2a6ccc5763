"""Resolve logical table names against the mirror's manifest."""
from typing import List, Optional

from imdbwagon.catalog.remote_repository import RemoteRepository
from imdbwagon.logging_config import get_logger
from imdbwagon.objects.manifest_entry import TABLE_DUMP_SUFFIX, ManifestEntry, table_name_for
from imdbwagon.objects.table_selection import TableSelection
from imdbwagon.security import SecurityError, validate_file_name

logger = get_logger(__name__)


class RemoteCatalog:
    """Reads the remote manifest and maps table names to dump file names.

    Requested names that the manifest does not list are dropped without an
    error; they are only reported at DEBUG level.

    Example:
        >>> catalog = RemoteCatalog(RemoteRepository(), "ftp://ftp.fu-berlin.de/pub/misc/movies/database/")
        >>> catalog.resolve(TableSelection(tables=["movies"]))
        ['movies.list.gz']
    """

    def __init__(
        self,
        repository: RemoteRepository,
        base_url: str,
        manifest_name: str = "filesizes",
    ) -> None:
        self.repository = repository
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.manifest_name = manifest_name

    @property
    def manifest_url(self) -> str:
        return self.base_url + self.manifest_name

    def fetch_manifest(self) -> List[ManifestEntry]:
        """Fetch and parse the manifest.

        Raises:
            NetworkError: If the manifest cannot be fetched
        """
        text = self.repository.read_text(self.manifest_url)

        entries = []
        for row in text.splitlines():
            entry = ManifestEntry.from_row(row)
            if entry is None:
                continue
            try:
                validate_file_name(entry.file_name)
            except SecurityError as e:
                logger.error(f"Skipping manifest row: {e}")
                continue
            entries.append(entry)

        logger.info(f"Manifest {self.manifest_url} lists {len(entries)} files")
        return entries

    def available_files(self, manifest: Optional[List[ManifestEntry]] = None) -> List[str]:
        if manifest is None:
            manifest = self.fetch_manifest()
        return [entry.archive_name for entry in manifest]

    def resolve(
        self,
        selection: TableSelection,
        manifest: Optional[List[ManifestEntry]] = None,
    ) -> List[str]:
        """Return the dump file names to download for ``selection``.

        Args:
            selection: Requested tables or the all-tables flag
            manifest: Already fetched manifest; fetched when omitted

        Returns:
            File names present in the manifest, in request order, without duplicates
        """
        files = self.available_files(manifest)

        if selection.all_tables:
            tables = [table_name_for(file_name) for file_name in files]
        else:
            tables = selection.tables

        available = set(files)
        resolved: List[str] = []
        for table in tables:
            file_name = table + TABLE_DUMP_SUFFIX
            if file_name not in available:
                logger.debug(f"Table '{table}' is not listed in the manifest, skipping")
            elif file_name not in resolved:
                resolved.append(file_name)

        return resolved
