"""Logging configuration for the gridbot command line."""

import logging
import os
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL = "WARNING"
LEVEL_ENV_VAR = "GRIDBOT_LOG_LEVEL"


def configure_logging(
    *,
    level: Optional[str] = None,
    format: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
) -> logging.Logger:
    """Configure logging for the simulator.

    Console output is the CLI's job, so the default level is WARNING and
    log lines only show blocked moves and rejected commands.

    Args:
        level: Optional explicit log level. Falls back to ``GRIDBOT_LOG_LEVEL``
            or WARNING when not provided.
        format: Log format string.
        datefmt: Date format string.

    Returns:
        The package logger (``gridbot``).
    """
    raw_level = level if level is not None else os.getenv(LEVEL_ENV_VAR)
    resolved_level = (raw_level or DEFAULT_LEVEL).upper()
    logging.basicConfig(level=resolved_level, format=format, datefmt=datefmt)

    app_logger = logging.getLogger("gridbot")
    app_logger.setLevel(resolved_level)
    app_logger.debug("Logging configured at %s", resolved_level)
    return app_logger
