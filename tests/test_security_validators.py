"""Tests for name and path validation."""
from pathlib import Path

import pytest

from imdbwagon.exceptions import ImdbWagonError
from imdbwagon.security import SecurityError, validate_file_name, validate_path_traversal


@pytest.mark.parametrize("name", ["movies.list", "aka-titles.list", "filesizes"])
def test_plain_file_names_pass(name: str) -> None:
    assert validate_file_name(name) == name


@pytest.mark.parametrize("name", ["", ".", "..", "../escaped.list", "sub/movies.list", "/etc/passwd", "..\\escaped.list"])
def test_names_with_directories_fail(name: str) -> None:
    with pytest.raises(SecurityError):
        validate_file_name(name)


def test_path_inside_base(temp_dir: Path) -> None:
    assert validate_path_traversal(temp_dir / "raw" / "movies.list.gz", temp_dir / "raw") == (
        temp_dir / "raw" / "movies.list.gz"
    )


def test_path_traversal_detected(temp_dir: Path) -> None:
    with pytest.raises(SecurityError) as exc_info:
        validate_path_traversal(temp_dir / "raw" / ".." / "escaped.list.gz", temp_dir / "raw")

    assert isinstance(exc_info.value, ImdbWagonError)
    assert "outside" in str(exc_info.value)
