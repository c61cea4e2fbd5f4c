"""Logging setup for the ``ims`` package.

Modules log through ``logging.getLogger(__name__)``; this module only
attaches a single stream handler to the ``ims`` logger. Messages are
written as ``event key=value ...`` so they stay greppable.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_HANDLER_NAME = "ims-stream"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Install the ``ims`` stream handler once and set its level."""
    logger = logging.getLogger("ims")
    logger.setLevel(level.upper())

    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def reset_logging() -> None:
    """Remove the handler installed by configure_logging (used by tests)."""
    logger = logging.getLogger("ims")
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
