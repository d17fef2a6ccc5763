"""Validation of names and paths that come from the remote mirror."""
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Union

from imdbwagon.exceptions import ImdbWagonError


class SecurityError(ImdbWagonError):
    """Raised when a security validation fails."""

    pass


def validate_file_name(file_name: str) -> str:
    """Validate that a manifest name is a bare file name.

    Raises:
        SecurityError: If the name is empty, "." or "..", or has directory parts

    Example:
        >>> validate_file_name("movies.list")
        'movies.list'
    """
    if file_name in ("", ".", ".."):
        raise SecurityError(f"Invalid file name: '{file_name}'")
    if PurePosixPath(file_name).name != file_name or PureWindowsPath(file_name).name != file_name:
        raise SecurityError(f"File name has directory components: {file_name}")
    return file_name


def validate_path_traversal(file_path: Union[str, Path], base_dir: Union[str, Path]) -> Path:
    """Validate that file_path is within base_dir (prevents path traversal).

    Args:
        file_path: Path to validate
        base_dir: Base directory that file_path must be within

    Returns:
        Resolved absolute Path object

    Raises:
        SecurityError: If path traversal detected
    """
    base = Path(base_dir).resolve()
    target = Path(file_path).resolve()

    try:
        target.relative_to(base)
    except ValueError as e:
        raise SecurityError(f"Path traversal detected: {file_path} is outside {base_dir}") from e

    return target
