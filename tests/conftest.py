"""Pytest fixtures and configuration."""

import gzip
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from imdbwagon.database.database_manager import DatabaseManager
from imdbwagon.objects.app_config import AppConfig
from imdbwagon.objects.connection_descriptor import ConnectionDescriptor
from imdbwagon.objects.staging_directories import StagingDirectories

MIRROR_MANIFEST = "movies.list 1211463\nactors.list 2048\nratings.list 512\n"
MIRROR_TABLES = ["movies", "actors", "ratings"]


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests without external resources")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def mirror_dir(temp_dir: Path) -> Path:
    """A local mirror with a manifest and three gzipped list files."""
    mirror = temp_dir / "mirror"
    mirror.mkdir()
    (mirror / "filesizes").write_text(MIRROR_MANIFEST)
    for table in MIRROR_TABLES:
        with gzip.open(mirror / f"{table}.list.gz", "wt") as f:
            f.write(f"{table} list contents\n")
    return mirror


@pytest.fixture
def mirror_url(mirror_dir: Path) -> str:
    return mirror_dir.as_uri() + "/"


@pytest.fixture
def sqlite_descriptor(temp_dir: Path) -> ConnectionDescriptor:
    return ConnectionDescriptor(kind="sqlite", db_name=str(temp_dir / "imdb.sqlite3"))


@pytest.fixture
def mysql_descriptor() -> ConnectionDescriptor:
    return ConnectionDescriptor(
        kind="mysql",
        host="localhost",
        user="imdb",
        password="s3cret",
        db_name="imdb",
    )


@pytest.fixture
def staging(temp_dir: Path) -> StagingDirectories:
    return StagingDirectories(root=temp_dir / "staging").ensure()


@pytest.fixture
def app_config(
    staging: StagingDirectories,
    mirror_url: str,
    sqlite_descriptor: ConnectionDescriptor,
) -> AppConfig:
    return AppConfig(staging=staging, source_url=mirror_url, connection=sqlite_descriptor)


@pytest.fixture
def db_manager(sqlite_descriptor: ConnectionDescriptor) -> Generator[DatabaseManager, None, None]:
    manager = DatabaseManager(sqlite_descriptor)
    yield manager
    manager.close()


@pytest.fixture
def derivative_csv_files(staging: StagingDirectories) -> Path:
    """CSV files as imdbpy2sql leaves them in the raw directory."""
    (staging.raw_dir / "title.csv").write_text(
        '1,"Star Wars",1977\n2,"Empire Strikes Back, The",1980\n'
    )
    (staging.raw_dir / "name.csv").write_text('1,"Hamill, Mark"\n')
    with gzip.open(staging.raw_dir / "movies.list.gz", "wt") as f:
        f.write("movies\n")
    return staging.raw_dir
