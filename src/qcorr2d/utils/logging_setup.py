"""Logger helpers.

All modules share one import surface::

    from qcorr2d.utils.logging_setup import get_logger
    logger = get_logger(__name__)
    logger.info("...")

Library use stays silent (the package logger only carries a NullHandler);
scripts call :func:`configure_logging` to get console output.
"""

from __future__ import annotations

import logging
from typing import Union

PACKAGE_LOGGER = "qcorr2d"
_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Return a logger below the package logger (no handlers of its own)."""
    return logging.getLogger(name)


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Attach a single console handler to the package logger.

    Calling it again only changes the level.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {level}")

    logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
