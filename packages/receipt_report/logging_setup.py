"""Logging for the ``receipt_report`` package.

Library modules log through ``get_logger("receipt_report.<module>")`` and stay
silent until an application opts in. The CLI opts in once per process with
:func:`configure_logging`, taking the level from ``--log-level`` or the
``RECEIPT_REPORT_LOG_LEVEL`` environment variable. Records go to stderr so
the report on stdout stays clean for piping.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "RECEIPT_REPORT_LOG_LEVEL"

_PKG_LOGGER_NAME = "receipt_report"
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_CONFIGURED = False


def resolve_level(level: int | str | None) -> int:
    """Turn a level name, number or ``None`` into a :mod:`logging` level.

    ``None`` falls back to ``RECEIPT_REPORT_LOG_LEVEL`` and then ``INFO``.
    Unknown names raise ``ValueError``.
    """

    if level is None:
        level = os.getenv(LOG_LEVEL_ENV) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelNamesMapping().get(name)
    if numeric is None:
        raise ValueError(f"unknown log level: {level!r}")
    return numeric


def configure_logging(level: int | str | None = None) -> None:
    """Send package records at ``level`` and above to stderr, once per process."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved = resolve_level(level)
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolved)
    # The root logger would print every record a second time.
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return ``name``'s logger; the package stays silent until configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["LOG_LEVEL_ENV", "configure_logging", "get_logger", "resolve_level"]
