"""Logging configuration for PhysCalc.

Sets up the ``physcalc`` package logger.  Library modules only create
module loggers; handlers are attached here, once, by the entry points.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int = logging.WARNING,
    log_file: str | None = None,
    console: Console | None = None,
) -> logging.Logger:
    """Configure the ``physcalc`` logger.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO).
        log_file: Optional path to also write logs to.
        console: Rich console for terminal output (stderr by default).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("physcalc")
    logger.setLevel(level)

    # Avoid duplicate handlers when called more than once
    if logger.hasHandlers():
        logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    logger.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(file_handler)

    logger.debug("Logging initialised at level %s", logging.getLevelName(level))
    return logger
