"""Application configuration model.

Runtime settings assembled by the CLI group from options, environment
variables and the .env file.
"""
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

from imdbwagon.objects.connection_descriptor import ConnectionDescriptor
from imdbwagon.objects.csv_dialect import CsvDialect
from imdbwagon.objects.staging_directories import StagingDirectories

DEFAULT_SOURCE_URL = "ftp://ftp.fu-berlin.de/pub/misc/movies/database/"
DEFAULT_MANIFEST_NAME = "filesizes"


class AppConfig(BaseModel):
    """Application runtime configuration.

    Attributes:
        staging: Staging directory layout for downloads and loads
        source_url: Base URL of the mirror, always ending in "/"
        manifest_name: Name of the manifest file under source_url
        connection: Target database connection descriptor
        imdbpy2sql_path: Explicit path to the imdbpy2sql.py tool, if configured
        csv_dialect: Format of the derivative CSV files for the fallback load

    Example:
        >>> config = AppConfig(
        ...     staging=StagingDirectories(root=Path("/data/imdb")),
        ...     connection=ConnectionDescriptor(kind="sqlite", db_name="imdb.db"),
        ... )
        >>> config.source_url
        'ftp://ftp.fu-berlin.de/pub/misc/movies/database/'
    """

    staging: StagingDirectories
    source_url: str = DEFAULT_SOURCE_URL
    manifest_name: str = DEFAULT_MANIFEST_NAME
    connection: ConnectionDescriptor
    imdbpy2sql_path: Optional[Path] = None
    csv_dialect: CsvDialect = CsvDialect()

    model_config = {"frozen": True}

    @field_validator("source_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        return v if v.endswith("/") else v + "/"
