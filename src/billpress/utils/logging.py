"""Logging utilities.

Every module obtains its logger through :func:`get_logger` so that all
records live under the ``billpress`` namespace.  :func:`configure_logging`
installs a single stderr handler and may be called repeatedly; later calls
only adjust the level and point the handler at the current ``sys.stderr``.
"""

from __future__ import annotations

import logging
import sys

__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger"]

ROOT_LOGGER = "billpress"

_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under ``billpress``."""

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger (idempotent)."""

    logger = logging.getLogger(ROOT_LOGGER)
    ours = [h for h in logger.handlers if getattr(h, "_billpress", False)]
    if ours:
        for handler in ours:
            handler.stream = sys.stderr  # type: ignore[attr-defined]
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._billpress = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
