"""
Loguru setup for the API process and the import command.
"""

import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def setup_logging(level: str = "INFO") -> None:
    """
    Replace loguru's default handler with a single stderr sink.

    Args:
        level: Minimum level (DEBUG, INFO, WARNING, ERROR)
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, backtrace=False)
    logger.debug(f"Logging initialized (level={level})")
