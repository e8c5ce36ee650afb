"""
Logging setup for static-sitemap-generator.

Every module logs through a child of the package logger
(``static_sitemap_generator.<module>``); only the package logger carries a
handler, so one call to ``set_log_level`` controls all of them.
"""
from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "static_sitemap_generator"

_configured = False


def _configure_package_logger() -> logging.Logger:
    global _configured

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not _configured:
        package_logger.setLevel(logging.INFO)
        if not package_logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(logging.INFO)
            # Format: [LEVEL] message
            handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            package_logger.addHandler(handler)
        _configured = True
    return package_logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Return the logger for ``name`` (usually a module's ``__name__``).

    Names outside the package are placed under it, so their records still
    reach the package handler.
    """
    _configure_package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int | str) -> None:
    """
    Set the level of the package logger and its handler.

    Args:
        level: Logging level name (DEBUG, INFO, ...) or integer level
    """
    package_logger = _configure_package_logger()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)
