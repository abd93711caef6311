"""
logging_config.py — Visualizer Logging
=======================================
Every module logs under the "sortvis" namespace:

    sortvis.engine.executor   run start / finish, faults
    sortvis.engine.control    pause / resume / cancel requests
    sortvis.engine.emitter    subscriber errors
    sortvis.engine.session    resets and setting changes
    sortvis.main              server start, rejected requests

setup_logging() is called once by main.run(); modules only ever call
get_logger(__name__) and stay silent until it has run.
"""

import logging
import sys
from typing import Optional, Union

LOGGER_NAMESPACE = "sortvis"

LOG_FORMAT  = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def resolve_level(level: Union[int, str, None]) -> int:
    """Accepts logging.DEBUG, "debug", "DEBUG" or None (INFO)."""
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: Union[int, str, None] = logging.INFO,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Attach a stdout handler (and a file handler when `log_file` is set)
    to the "sortvis" logger.  Calling it again replaces the handlers,
    so a reloaded app does not print every line twice.
    """
    level = resolve_level(level)
    root = logging.getLogger(LOGGER_NAMESPACE)
    root.setLevel(level)
    root.propagate = False

    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    root.addHandler(_handler(logging.StreamHandler(sys.stdout), level))
    if log_file:
        root.addHandler(_handler(logging.FileHandler(log_file, mode="a", encoding="utf-8"), level))

    root.debug("log level %s, file %s", logging.getLevelName(level), log_file or "-")
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
