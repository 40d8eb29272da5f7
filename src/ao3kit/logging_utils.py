#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/ao3kit/logging_utils.py
"""Logging setup for the ao3kit command line.

Library modules only create ``logging.getLogger(__name__)`` loggers and never
install handlers, so an embedding application keeps control of its own
logging. The CLI calls :func:`configure_logging` once at start-up.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP stack loggers that report every request; held at WARNING unless tracing
HTTP_LOGGERS = ("httpx", "httpcore")


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name or number into a numeric level.

    Unknown names resolve to ``logging.INFO``.

    Examples
    --------
    >>> resolve_log_level("debug")
    10
    >>> resolve_log_level("LOUD")
    20

    """
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Replace the root handlers with a stderr handler and an optional log file.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name
    log_file : str, optional
        Path of a file that receives the same records, appended to
    trace_mode : bool, default False
        Add timestamps and logger names, and let the HTTP client log requests

    Returns
    -------
    logging.Logger
        The root logger

    Raises
    ------
    OSError
        If the log file cannot be opened

    """
    level = resolve_log_level(log_level)
    formatter = (
        logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT) if trace_mode else logging.Formatter(CONSOLE_FORMAT)
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    http_level = level if trace_mode else max(level, logging.WARNING)
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)

    if log_file:
        root_logger.debug("Logging to file: %s", log_file)
    return root_logger
