"""Tests for manifest row parsing."""
import pytest

from imdbwagon.objects.manifest_entry import (
    ManifestEntry,
    human_readable_size,
    parse_size,
    table_name_for,
)


def test_from_row_with_list_suffix() -> None:
    entry = ManifestEntry.from_row("movies.list 1211463")

    assert entry is not None
    assert entry.file_name == "movies.list"
    assert entry.declared_size == 1211463
    assert entry.archive_name == "movies.list.gz"
    assert entry.table_name == "movies"


def test_from_row_without_list_suffix() -> None:
    entry = ManifestEntry.from_row("movies 120MB")

    assert entry is not None
    assert entry.archive_name == "movies.list.gz"
    assert entry.declared_size == 120 * 1024 * 1024


def test_from_row_blank_and_missing_size() -> None:
    assert ManifestEntry.from_row("   ") is None

    entry = ManifestEntry.from_row("actors.list")
    assert entry is not None
    assert entry.declared_size == 0


@pytest.mark.parametrize(
    "value,expected",
    [("2048", 2048), ("80MB", 80 * 1024**2), ("1.5 GB", int(1.5 * 1024**3)), ("12K", 12 * 1024), ("n/a", 0)],
)
def test_parse_size(value: str, expected: int) -> None:
    assert parse_size(value) == expected


def test_human_readable_size() -> None:
    assert human_readable_size(512) == "512.00 B"
    assert human_readable_size(2048) == "2.00 KB"
    assert human_readable_size(5 * 1024**2) == "5.00 MB"


def test_table_name_for() -> None:
    assert table_name_for("aka-titles.list.gz") == "aka-titles"
    assert table_name_for("filesizes") == "filesizes"


def test_from_row_size_with_separate_unit() -> None:
    entry = ManifestEntry.from_row("movies.list 1.5 GB")

    assert entry is not None
    assert entry.file_name == "movies.list"
    assert entry.declared_size == 1610612736
