"""Tests for the extract and list-tables commands."""
from pathlib import Path
from typing import List

from click.testing import CliRunner

from imdbwagon.main import cli


def test_extract_single_table(runner: CliRunner, cli_args: List[str], staging_root: Path) -> None:
    result = runner.invoke(cli, cli_args + ["extract", "-t", "movies"])

    assert result.exit_code == 0, result.output
    assert "Extracted 1 tables" in result.output
    assert [path.name for path in (staging_root / "raw").iterdir()] == ["movies.list.gz"]


def test_extract_is_idempotent(runner: CliRunner, cli_args: List[str]) -> None:
    runner.invoke(cli, cli_args + ["extract", "-t", "movies"])

    result = runner.invoke(cli, cli_args + ["extract", "-t", "movies"])

    assert result.exit_code == 0
    assert "1 files already downloaded" in result.output


def test_extract_selection_file(runner: CliRunner, cli_args: List[str], temp_dir: Path, staging_root: Path) -> None:
    selection_file = temp_dir / "selection.toml"
    selection_file.write_text('[selection]\ntables = ["actors", "ratings"]\n')

    result = runner.invoke(cli, cli_args + ["extract", "--selection-file", str(selection_file)])

    assert result.exit_code == 0, result.output
    assert sorted(path.name for path in (staging_root / "raw").iterdir()) == ["actors.list.gz", "ratings.list.gz"]


def test_extract_nothing_available(runner: CliRunner, cli_args: List[str]) -> None:
    result = runner.invoke(cli, cli_args + ["extract", "-t", "directors"])

    assert result.exit_code == 0
    assert "None of the requested tables are available" in result.output


def test_extract_unreachable_mirror(runner: CliRunner, staging_root: Path, temp_dir: Path) -> None:
    args = ["--staging-dir", str(staging_root), "--source-url", (temp_dir / "gone").as_uri()]

    result = runner.invoke(cli, args + ["extract"])

    assert result.exit_code == 1
    assert "Unable to fetch" in result.output


def test_list_tables(runner: CliRunner, cli_args: List[str]) -> None:
    result = runner.invoke(cli, cli_args + ["extract", "-t", "ratings", "list-tables"])

    assert result.exit_code == 0, result.output
    assert "movies.list.gz" in result.output
    assert "yes" in result.output
    assert "3 tables available" in result.output
