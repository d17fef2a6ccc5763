"""Extract and load phases of the IMDb ETL cycle.

Extract: resolve the table selection against the manifest, then download the
missing archives into the raw staging directory.

Load: run imdbpy2sql, move its derivative files into the load directory,
check that the ``title`` table is queryable and, if it is not, write the
derivative CSV files into the database directly.

Either phase can run on its own. A failing imdbpy2sql run stops the load
phase before the fallback path is considered.
"""
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from imdbwagon.catalog.remote_catalog import RemoteCatalog
from imdbwagon.catalog.remote_repository import RemoteRepository
from imdbwagon.database.database_manager import DatabaseManager
from imdbwagon.download.selective_downloader import DownloadSummary, SelectiveDownloader
from imdbwagon.load.fallback_loader import fallback_loader_for
from imdbwagon.load.loader_invoker import ExternalLoaderInvoker
from imdbwagon.load.tool_discovery import find_imdbpy2sql
from imdbwagon.load.verifier import PostLoadVerifier
from imdbwagon.logging_config import get_logger
from imdbwagon.objects.app_config import AppConfig
from imdbwagon.objects.table_selection import TableSelection

logger = get_logger(__name__)


class ExtractReport(BaseModel):
    resolved: List[str] = Field(default_factory=list)
    summary: DownloadSummary = Field(default_factory=DownloadSummary)


class LoadReport(BaseModel):
    """Outcome of one load phase.

    Attributes:
        tool_path: imdbpy2sql used, None when the tool run was skipped
        exit_status: Exit status of the tool run, None when skipped
        verified: Whether the verification table was queryable after the tool run
        fallback_tables: (table, rows) written by the fallback loader
    """

    tool_path: Optional[Path] = None
    exit_status: Optional[int] = None
    verified: bool = False
    fallback_tables: List[Tuple[str, int]] = Field(default_factory=list)

    @property
    def fallback_used(self) -> bool:
        return not self.verified


class EtlPipeline:
    """Runs the extract and load phases for one application config."""

    def __init__(
        self,
        config: AppConfig,
        repository: Optional[RemoteRepository] = None,
        stop_on_error: bool = False,
    ) -> None:
        self.config = config
        self.repository = repository or RemoteRepository()
        self.stop_on_error = stop_on_error
        self.catalog = RemoteCatalog(self.repository, config.source_url, config.manifest_name)
        self.downloader = SelectiveDownloader(self.repository, config.source_url, stop_on_error)

    def extract(self, selection: TableSelection) -> ExtractReport:
        """Download the selected tables into the raw staging directory.

        Raises:
            NetworkError: If the manifest or any file cannot be fetched
        """
        staging = self.config.staging.ensure()

        resolved = self.catalog.resolve(selection)
        if not resolved:
            logger.warning("No requested table is listed in the manifest, nothing to download")
            return ExtractReport()

        logger.info(f"Downloading {len(resolved)} files to {staging.raw_dir}")
        summary = self.downloader.download(resolved, staging.raw_dir)
        return ExtractReport(resolved=resolved, summary=summary)

    def load(
        self,
        db_manager: DatabaseManager,
        run_tool: bool = True,
        verifier: Optional[PostLoadVerifier] = None,
    ) -> LoadReport:
        """Load the staged files into the database.

        Args:
            db_manager: Connection to the target database
            run_tool: Run imdbpy2sql first; when False only the derivative
                files already in the raw directory are moved and verified
            verifier: Verification strategy, checks the ``title`` table by default

        Raises:
            LoaderNotFoundError: If imdbpy2sql cannot be found
            LoadToolError: If imdbpy2sql fails; the fallback loader is not run
            LoadError: If the fallback loader fails
        """
        staging = self.config.staging.ensure()
        connection = self.config.connection
        report = LoadReport()

        if run_tool:
            tool_path = find_imdbpy2sql(self.config.imdbpy2sql_path, search_dirs=[staging.root])
            report.tool_path = tool_path
            report.exit_status = ExternalLoaderInvoker(tool_path).load(connection, staging)
        else:
            ExternalLoaderInvoker.relocate_derivatives(staging.raw_dir, staging.load_dir)

        report.verified = (verifier or PostLoadVerifier()).verify(db_manager)
        if report.verified:
            return report

        loader = fallback_loader_for(
            connection.kind, dialect=self.config.csv_dialect, stop_on_error=self.stop_on_error
        )
        report.fallback_tables = loader.load_fallback(db_manager, staging.load_dir)
        return report
