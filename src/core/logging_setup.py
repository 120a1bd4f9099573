"""
Process-wide loguru configuration.
"""

import sys

from loguru import logger

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(level: str = "INFO", json: bool = False) -> int:
    """
    Replace loguru's default sink with a single stderr sink.

    Args:
        level: Minimum level name
        json: Serialize records as JSON lines instead of colored text

    Returns:
        Id of the installed sink
    """
    logger.remove()
    if json:
        sink_id = logger.add(sys.stderr, level=level, serialize=True)
    else:
        sink_id = logger.add(sys.stderr, level=level, format=TEXT_FORMAT, colorize=True)
    logger.debug(f"Logging configured at {level} ({'json' if json else 'text'})")
    return sink_id
