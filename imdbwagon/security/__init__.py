"""Security utilities for imdbwagon."""

from imdbwagon.security.validators import SecurityError, validate_file_name, validate_path_traversal

__all__ = ["SecurityError", "validate_file_name", "validate_path_traversal"]
