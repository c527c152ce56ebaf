"""Logging setup for the prsync command line."""

from __future__ import annotations

import sys

from loguru import logger


LOG_FORMAT = "<level>{level: <8}</level> | {message}"


def configure_logging(verbose: bool = False) -> int:
    """Replace loguru's default sink with a stderr sink.

    Per-file staging lines are logged at INFO, so they show by default.
    verbose lowers the threshold to DEBUG.

    Returns:
        The id of the added sink.
    """
    logger.remove()
    return logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format=LOG_FORMAT,
        colorize=None,
    )
