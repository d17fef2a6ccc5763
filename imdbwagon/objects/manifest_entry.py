"""Remote manifest models.

The mirror publishes a plain text ``filesizes`` listing with one
``<base-name> <size>`` row per dump file. Base names normally carry the
``.list`` suffix (``movies.list``); the archive on the mirror is the base name
plus ``.gz``.
"""
import re
from typing import Optional

from pydantic import BaseModel

LIST_SUFFIX = ".list"
ARCHIVE_SUFFIX = ".gz"
TABLE_DUMP_SUFFIX = LIST_SUFFIX + ARCHIVE_SUFFIX

_SIZE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*([KMGTP]?B?)$", re.IGNORECASE)
_SIZE_UNITS = {"": 1, "B": 1, "K": 1024, "M": 1024**2, "G": 1024**3, "T": 1024**4, "P": 1024**5}


class ManifestEntry(BaseModel):
    """One row of the remote manifest.

    Attributes:
        file_name: Base name as listed (e.g. "movies.list")
        declared_size: Size in bytes as declared by the mirror (0 if unknown)

    Example:
        >>> entry = ManifestEntry.from_row("movies.list 1211463")
        >>> entry.archive_name
        'movies.list.gz'
        >>> entry.table_name
        'movies'
    """

    file_name: str
    declared_size: int = 0

    @classmethod
    def from_row(cls, row: str) -> Optional["ManifestEntry"]:
        """Parse a whitespace-delimited manifest row, None for blank rows."""
        fields = row.split()
        if not fields:
            return None
        size = parse_size(" ".join(fields[1:])) if len(fields) > 1 else 0
        return cls(file_name=fields[0], declared_size=size)

    @property
    def archive_name(self) -> str:
        if self.file_name.endswith(LIST_SUFFIX):
            return self.file_name + ARCHIVE_SUFFIX
        return self.file_name + TABLE_DUMP_SUFFIX

    @property
    def table_name(self) -> str:
        return table_name_for(self.archive_name)

    @property
    def file_size(self) -> str:
        return human_readable_size(self.declared_size)


def table_name_for(archive_name: str) -> str:
    """Strip the table dump suffix: 'movies.list.gz' -> 'movies'."""
    if archive_name.endswith(TABLE_DUMP_SUFFIX):
        return archive_name[: -len(TABLE_DUMP_SUFFIX)]
    return archive_name


def parse_size(value: str) -> int:
    """Parse a declared size such as '1211463', '120MB' or '1.5 GB' into bytes."""
    match = _SIZE_PATTERN.match(value.strip())
    if not match:
        return 0
    number, unit = match.groups()
    multiplier = _SIZE_UNITS.get(unit.upper().rstrip("B"), 1)
    return int(float(number) * multiplier)


def human_readable_size(size: int) -> str:
    """Convert a size in bytes to a two-decimal string with unit.

    Example:
        >>> human_readable_size(2048)
        '2.00 KB'
    """
    unit_list = ["B", "KB", "MB", "GB", "TB", "PB"]
    index = 0

    f_size = float(size)
    while f_size >= 1024.0 and index < len(unit_list) - 1:
        f_size /= 1024.0
        index += 1

    return f"{f_size:.2f} {unit_list[index]}"
