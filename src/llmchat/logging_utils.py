"""Logging setup for the command line entry points.

The TUI owns the terminal, so interactive runs log to a rotating file.
Non-interactive commands log to stderr through Rich.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3

DEFAULT_LOG_LEVEL = "warning"


def parse_level(level: str | int | None) -> int:
    """Map 'debug'/'info'/'warning'/'error' (or a numeric level) to a logging level."""
    if level is None:
        return logging.WARNING
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.WARNING


def configure_logging(
    level: str | int | None = DEFAULT_LOG_LEVEL,
    log_file: str | Path | None = None,
    console: Console | None = None,
) -> logging.Handler:
    """Install a single handler on the ``llmchat`` logger.

    Args:
        level: Log level name or number
        log_file: Write to this file (rotated at 1MB, 3 backups)
        console: Otherwise log to this Rich console (stderr by default)

    Returns:
        The installed handler
    """
    logger = logging.getLogger("llmchat")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(
            path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    else:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )

    logger.addHandler(handler)
    logger.setLevel(parse_level(level))
    logger.propagate = False
    return handler
