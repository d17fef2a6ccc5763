"""Locate the imdbpy2sql tool shipped with IMDbPY."""
import shutil
from pathlib import Path
from typing import Iterable, List, Optional, Union

from imdbwagon.exceptions import LoaderNotFoundError
from imdbwagon.logging_config import get_logger

logger = get_logger(__name__)

TOOL_NAMES = ("imdbpy2sql.py", "imdbpy2sql")


def conventional_dirs() -> List[Path]:
    return [Path.home() / ".local" / "bin", Path("/usr/local/bin"), Path("/usr/bin")]


def find_imdbpy2sql(
    explicit_path: Optional[Union[str, Path]] = None,
    search_dirs: Iterable[Path] = (),
) -> Path:
    """Return the absolute path of the imdbpy2sql tool.

    Lookup order: the explicit path, the executable search path, a recursive
    search of each of ``search_dirs`` (usually the staging root), then the
    conventional install directories.

    Raises:
        LoaderNotFoundError: If the tool cannot be found
    """
    if explicit_path:
        path = Path(explicit_path).expanduser()
        if path.is_file():
            return path.resolve()
        raise LoaderNotFoundError(f"imdbpy2sql not found at configured path: {path}")

    for name in TOOL_NAMES:
        found = shutil.which(name)
        if found:
            logger.debug(f"Found {name} on PATH: {found}")
            return Path(found).resolve()

    for directory in search_dirs:
        if not directory.is_dir():
            continue
        for name in TOOL_NAMES:
            matches = sorted(path for path in directory.rglob(name) if path.is_file())
            if matches:
                logger.debug(f"Found {name} under {directory}: {matches[0]}")
                return matches[0].resolve()

    for directory in conventional_dirs():
        for name in TOOL_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate.resolve()

    raise LoaderNotFoundError(
        "Unable to find imdbpy2sql. Install IMDbPY or pass its location with --imdbpy2sql."
    )
