"""Logging infrastructure with inspected-path context tracking.

Log records carry a ``durs_path`` field holding the path the application is
currently inspecting, stored in a ContextVar so nested calls never need to
pass it around. Console output goes to stderr because stdout carries command
output; an optional file handler serves the interactive browser, where
console logging would corrupt the screen.
"""

import contextvars
import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Final, override

inspected_path_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "inspected_path",
    default=None,
)

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - [%(durs_path)s] - %(message)s"


class PathContextFilter(logging.Filter):
    """Logging filter that adds the inspected path to log records."""

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        """Add the current inspected path to the record.

        Args:
            record: Log record to enhance

        Returns:
            True to allow the record to be logged
        """
        inspected_path = inspected_path_var.get()
        record.durs_path = inspected_path if inspected_path is not None else "-"
        return True


def configure_logging(
    *,
    log_level: str = "WARNING",
    log_file: Path | None = None,
    enable_console: bool = True,
) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file that also receives log records
        enable_console: Enable the stderr handler

    Example:
        >>> configure_logging(log_level="DEBUG", enable_console=True)
        >>> with path_context("/srv"):
        ...     get_logger(__name__).debug("Listing directory")
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))

    # Remove existing handlers to avoid duplicates on reconfiguration
    root_logger.handlers.clear()

    path_filter = PathContextFilter()
    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(path_filter)
        root_logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.addFilter(path_filter)
        root_logger.addHandler(file_handler)

    if not root_logger.handlers:
        # Keep logging.lastResort from printing warnings to the terminal
        root_logger.addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


@contextmanager
def path_context(path: str | os.PathLike[str]) -> Iterator[None]:
    """Mark ``path`` as the inspected path for the duration of the block.

    Example:
        >>> with path_context("/var/log"):
        ...     logger.info("Computing size")
    """
    token = inspected_path_var.set(os.fspath(path))
    try:
        yield
    finally:
        inspected_path_var.reset(token)
