"""Logging utilities.

All package loggers live below the ``dlpsynth`` namespace.  Handlers are only
attached by :func:`configure_logging`, which is safe to call repeatedly; a
library import never installs handlers on its own.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

__all__ = ["ROOT_LOGGER", "get_logger", "configure_logging"]

ROOT_LOGGER = "dlpsynth"

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_HANDLER_ATTR = "_dlpsynth_handler"


def get_logger(name: str) -> logging.Logger:
    """Return a logger in the package namespace.

    Module names such as ``dlpsynth.io.writers.csv_writer`` are used as is;
    bare names are prefixed with ``dlpsynth.``.
    """

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(level: str | int = "INFO", *, stream: TextIO | None = None) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Repeated calls update the level and stream of the existing handler instead
    of stacking new ones.
    """

    root = logging.getLogger(ROOT_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {level}")
    root.setLevel(level)

    target = stream if stream is not None else sys.stderr
    for handler in root.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            if isinstance(handler, logging.StreamHandler):
                handler.setStream(target)
            handler.setLevel(level)
            return root

    handler = logging.StreamHandler(target)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.setLevel(level)
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)
    return root
