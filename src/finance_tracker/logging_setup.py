"""Logging configuration for the ``finance_tracker`` package.

Entrypoints call ``setup_logging`` once at startup. Library modules only call
``logging.getLogger(__name__)`` and never attach handlers themselves.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

_PKG_LOGGER_NAME = "finance_tracker"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def setup_logging(level: int | str | None = None, *, stream: IO[str] = sys.stderr) -> logging.Logger:
    logger = logging.getLogger(_PKG_LOGGER_NAME)

    # re-running replaces the handler instead of stacking a second one
    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))

    logger.setLevel(_parse_level(level))
    logger.addHandler(handler)
    return logger
