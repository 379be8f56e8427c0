"""Logging configuration for org-daily."""

import sys

from loguru import logger

VERBOSE_FORMAT = "{level.icon} {time:HH:mm:ss} {name}: {message}"
DEFAULT_FORMAT = "{level.icon} {message}"


def configure_logging(*, verbose: bool = False) -> None:
    """Send log records to stderr; DEBUG and the emitting module when verbose."""
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=VERBOSE_FORMAT)
    else:
        logger.add(sys.stderr, level="INFO", format=DEFAULT_FORMAT)
