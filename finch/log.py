"""Logging helpers for finch.

Thin layer over stdlib logging; every module logs under the ``finch``
namespace so an application can route or silence it in one place.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

_LOGGER_NAME = "finch"
_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s"

__all__ = [
    "get_logger",
    "configure_logging",
]


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def configure_logging(verbosity: int = 0, *, stream: Optional[TextIO] = None) -> None:
    """
    Install a single stream handler on the ``finch`` logger.

    verbosity 0 -> WARNING, 1 -> INFO, 2+ -> DEBUG.
    """
    logger = get_logger()
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logger.setLevel(level)

    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False
