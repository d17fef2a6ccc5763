"""Fixtures for invoking the CLI."""
import logging
from pathlib import Path
from typing import List

import pytest
from click.testing import CliRunner

import imdbwagon.console


@pytest.fixture(autouse=True)
def plain_console(monkeypatch: pytest.MonkeyPatch):
    """Uncolored, wide console output that CliRunner can capture."""
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("COLUMNS", "200")
    for name in ("IW_STAGING_DIR", "IW_SOURCE_URL", "IW_DB_KIND", "IW_DB_PASSWORD", "IW_DB_NAME", "IW_IMDBPY2SQL"):
        monkeypatch.delenv(name, raising=False)
    imdbwagon.console._console = None
    yield
    imdbwagon.console._console = None
    logging.getLogger("imdbwagon").handlers = []


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def staging_root(temp_dir: Path) -> Path:
    return temp_dir / "staging"


@pytest.fixture
def cli_args(staging_root: Path, mirror_url: str) -> List[str]:
    """Group options pointing at the local mirror and a sqlite database."""
    return ["--staging-dir", str(staging_root), "--source-url", mirror_url, "--db-kind", "sqlite"]
