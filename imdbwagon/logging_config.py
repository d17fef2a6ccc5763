"""Centralized logging configuration for imdbwagon."""

import logging
import sys
from typing import Optional


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    verbose: bool = False,
) -> logging.Logger:
    """Configure application-wide logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        verbose: If True, sets level to DEBUG

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging(verbose=True)
        >>> logger.info("Extract started")
    """
    log_level = logging.DEBUG if verbose else getattr(logging, level.upper())

    logger = logging.getLogger("imdbwagon")
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates when chained commands re-enter
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(console_formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module.

    Module names that already carry the package prefix (``__name__`` inside
    imdbwagon) are used as-is.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    if name == "imdbwagon" or name.startswith("imdbwagon."):
        return logging.getLogger(name)
    return logging.getLogger(f"imdbwagon.{name}")
