"""Local staging area for one extract and load cycle."""
from pathlib import Path
from typing import List

from pydantic import BaseModel, field_validator


class StagingDirectories(BaseModel):
    """Staging layout under a single root directory.

    ``raw`` holds downloaded archives and the external tool's derivative
    files, ``processing`` is the tool's working directory and ``load`` holds
    files ready for final ingestion. Nothing here is deleted automatically so
    reruns can skip existing downloads.

    Example:
        >>> staging = StagingDirectories(root=Path("~/dumps/imdb"))
        >>> staging.raw_dir.name
        'raw'
    """

    root: Path

    @field_validator("root")
    @classmethod
    def absolute_root(cls, v: Path) -> Path:
        # imdbpy2sql runs with processing/ as its working directory
        return v.expanduser().resolve()

    @property
    def raw_dir(self) -> Path:
        return self.root / "raw"

    @property
    def processing_dir(self) -> Path:
        return self.root / "processing"

    @property
    def load_dir(self) -> Path:
        return self.root / "load"

    def all_dirs(self) -> List[Path]:
        return [self.raw_dir, self.processing_dir, self.load_dir]

    def ensure(self) -> "StagingDirectories":
        for directory in self.all_dirs():
            directory.mkdir(parents=True, exist_ok=True)
        return self

    def staged_files(self) -> List[Path]:
        """Every regular file currently held in the staging subdirectories."""
        return sorted(
            path
            for directory in self.all_dirs()
            if directory.is_dir()
            for path in directory.iterdir()
            if path.is_file()
        )
