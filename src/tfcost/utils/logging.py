"""Logging setup for tfcost."""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV = "TFCOST_LOG_LEVEL"
ROOT_LOGGER = "tfcost"


def _level_from_env(default: int) -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_logging(level: Optional[int] = None, format_string: Optional[str] = None) -> logging.Logger:
    """
    Configure the tfcost logger hierarchy to write to stderr.

    Args:
        level: Logging level (default: TFCOST_LOG_LEVEL, else WARNING)
        format_string: Custom format string (optional)

    Returns:
        The root tfcost logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level if level is not None else _level_from_env(logging.WARNING))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(format_string or LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def set_level(level: int) -> None:
    """Change the level of every tfcost logger at runtime (e.g. for --verbose)."""
    logging.getLogger(ROOT_LOGGER).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
