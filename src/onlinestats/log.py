"""
Logging setup.

The package logs through loguru and is silent by default: importing
onlinestats disables its records so that library use never writes to the
host application's sinks unasked. Call enable_logging() to see them.
"""

import sys
from typing import Any, Optional

from loguru import logger

PACKAGE = "onlinestats"

logger.disable(PACKAGE)


def enable_logging(level: str = "INFO", sink: Any = sys.stderr) -> int:
    """
    Turn on onlinestats log records and attach a sink.

    Args:
        level: Minimum level for the new sink
        sink: Any loguru sink (stream, path, callable)

    Returns:
        Handler id, usable with disable_logging()
    """
    logger.enable(PACKAGE)
    return logger.add(
        sink,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message}",
        filter=PACKAGE,
    )


def disable_logging(handler_id: Optional[int] = None) -> None:
    """Silence onlinestats again, removing the given handler if any."""
    if handler_id is not None:
        logger.remove(handler_id)
    logger.disable(PACKAGE)
