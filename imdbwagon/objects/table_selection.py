"""Selection of the logical IMDb tables to download."""
from pathlib import Path
from typing import List, Optional

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator

from imdbwagon.exceptions import ConfigurationError

DEFAULT_TABLES = ["movies", "actors", "actresses", "directors"]


class TableSelection(BaseModel):
    """Logical table names to fetch, or every table on the mirror.

    ``all_tables`` overrides any explicit ``tables``. Names are the dump names
    without suffix, e.g. "movies" for ``movies.list.gz``.

    Example:
        >>> TableSelection(tables=["movies"]).tables
        ['movies']
        >>> TableSelection(all_tables=True).all_tables
        True
    """

    tables: List[str] = Field(default_factory=lambda: list(DEFAULT_TABLES))
    all_tables: bool = False

    @field_validator("tables")
    @classmethod
    def strip_names(cls, v: List[str]) -> List[str]:
        names: List[str] = []
        for name in v:
            name = name.strip()
            if name and name not in names:
                names.append(name)
        return names

    @classmethod
    def from_cli(
        cls,
        tables: Optional[List[str]] = None,
        all_tables: bool = False,
        selection_file: Optional[Path] = None,
    ) -> "TableSelection":
        """Build a selection from command line values.

        Explicit ``tables`` win over the selection file, which wins over the
        default table list.
        """
        selection = cls.from_toml(selection_file) if selection_file else cls()

        if tables:
            selection = cls(tables=list(tables), all_tables=selection.all_tables)
        if all_tables:
            selection = cls(tables=selection.tables, all_tables=True)

        return selection

    @classmethod
    def from_toml(cls, path: Path) -> "TableSelection":
        """Read a ``[selection]`` table from a TOML file.

        Raises:
            ConfigurationError: If the file cannot be parsed or fails validation
        """
        try:
            content = toml.load(path)
        except (OSError, toml.TomlDecodeError) as e:
            raise ConfigurationError(f"Unable to read selection file {path}: {e}") from e

        try:
            return cls(**content.get("selection", {}))
        except ValidationError as e:
            raise ConfigurationError(f"Validation failed for {path}\n{e}") from e
