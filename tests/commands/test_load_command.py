"""Tests for the load, check-db-connection and cleanup commands."""
from pathlib import Path
from typing import List
from unittest.mock import Mock, patch

from click.testing import CliRunner

from imdbwagon.main import cli


def _stage_csv(staging_root: Path) -> None:
    raw_dir = staging_root / "raw"
    raw_dir.mkdir(parents=True)
    (raw_dir / "title.csv").write_text("1,Alien,1979\n2,Aliens,1986\n")
    (raw_dir / "movies.list.gz").write_bytes(b"")


def test_load_skip_tool_falls_back(runner: CliRunner, cli_args: List[str], staging_root: Path) -> None:
    _stage_csv(staging_root)

    result = runner.invoke(cli, cli_args + ["load", "--skip-tool", "check-db-connection", "--counts"])

    assert result.exit_code == 0, result.output
    assert "loaded the staged CSV files directly" in result.output
    assert "Successfully connected" in result.output
    assert (staging_root / "load" / "title.csv").exists()
    assert (staging_root / "imdb.sqlite3").exists()


@patch("imdbwagon.load.loader_invoker.subprocess.run")
def test_load_tool_failure(mock_run: Mock, runner: CliRunner, cli_args: List[str], temp_dir: Path) -> None:
    tool = temp_dir / "imdbpy2sql.py"
    tool.write_text("")
    mock_run.return_value = Mock(returncode=3)

    result = runner.invoke(cli, cli_args + ["load", "--imdbpy2sql", str(tool), "--password", "s3cret"])

    assert result.exit_code == 1
    assert "imdbpy2sql failed" in result.output
    assert "exited with status 3" in result.output
    assert "s3cret" not in result.output


@patch("imdbwagon.load.loader_invoker.subprocess.run")
def test_load_warns_on_blank_password(mock_run: Mock, runner: CliRunner, cli_args: List[str], temp_dir: Path) -> None:
    tool = temp_dir / "imdbpy2sql.py"
    tool.write_text("")
    mock_run.return_value = Mock(returncode=0)

    result = runner.invoke(cli, cli_args + ["--imdbpy2sql", str(tool), "load"])

    assert result.exit_code == 0, result.output
    assert "Password argument is blank! A valid password is required." in result.output
    mock_run.assert_called_once()


def test_load_missing_tool(runner: CliRunner, cli_args: List[str], temp_dir: Path) -> None:
    result = runner.invoke(cli, cli_args + ["load", "--imdbpy2sql", str(temp_dir / "missing.py")])

    assert result.exit_code == 1
    assert "imdbpy2sql not found" in result.output


def test_check_db_connection_without_driver(runner: CliRunner, cli_args: List[str]) -> None:
    with patch(
        "imdbwagon.database.database_manager.create_engine",
        side_effect=ImportError("No module named 'pymysql'"),
    ):
        result = runner.invoke(cli, cli_args + ["--db-kind", "mysql", "check-db-connection"])

    assert result.exit_code == 0
    assert "Failed to connect" in result.output


def test_cleanup_keep_downloads(runner: CliRunner, cli_args: List[str], staging_root: Path) -> None:
    _stage_csv(staging_root)

    result = runner.invoke(cli, cli_args + ["cleanup", "--keep-downloads"], input="y\n")

    assert result.exit_code == 0, result.output
    assert "Deleted 1 files" in result.output
    assert [path.name for path in (staging_root / "raw").iterdir()] == ["movies.list.gz"]


def test_cleanup_declined(runner: CliRunner, cli_args: List[str], staging_root: Path) -> None:
    _stage_csv(staging_root)

    result = runner.invoke(cli, cli_args + ["cleanup"], input="n\n")

    assert result.exit_code == 1
    assert (staging_root / "raw" / "title.csv").exists()


def test_cleanup_nothing_staged(runner: CliRunner, cli_args: List[str]) -> None:
    result = runner.invoke(cli, cli_args + ["cleanup"])

    assert result.exit_code == 0
    assert "Nothing to delete" in result.output
