"""Custom exceptions for the imdbwagon application."""
from typing import List, Optional


class ImdbWagonError(Exception):
    """Base exception class for imdbwagon-specific errors."""

    pass


class ConfigurationError(ImdbWagonError):
    """Raised when there are configuration-related errors."""

    pass


class NetworkError(ImdbWagonError):
    """Raised when the manifest or a remote dump file cannot be fetched."""

    def __init__(self, message: str, failed_files: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.failed_files = failed_files or []


class LoadToolError(ImdbWagonError):
    """Raised when the external loading tool fails or exits nonzero."""

    def __init__(self, message: str, exit_status: int = -1) -> None:
        super().__init__(message)
        self.exit_status = exit_status


class LoaderNotFoundError(LoadToolError):
    """Raised when the external loading tool cannot be located."""

    pass


class LoadError(ImdbWagonError):
    """Raised when writing a staged file into the database fails."""

    pass


class FallbackUnsupportedError(LoadError):
    """Raised when no fallback loader exists for a database kind."""

    pass
