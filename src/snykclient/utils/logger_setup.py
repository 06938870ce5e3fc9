"""Logging configuration for applications embedding snykclient."""

import sys

from loguru import logger

from snykclient.config import get_settings

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
)


def setup_logging(level: str | None = None, replace_sinks: bool = False) -> int:
    """Enable snykclient log output on stderr.

    The package is silent until this is called.

    Args:
        level: Minimum level to emit, e.g. "DEBUG". Defaults to SNYK_LOG_LEVEL.
        replace_sinks: Remove previously configured loguru sinks first.

    Returns:
        Identifier of the added sink, usable with ``logger.remove``.
    """
    logger.enable("snykclient")
    if replace_sinks:
        logger.remove()
    return logger.add(sys.stderr, level=level or get_settings().log_level, format=LOG_FORMAT)
