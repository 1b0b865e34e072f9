"""Logging setup for the booking gateway.

Every module obtains its logger through ``get_logger(__name__)`` so log
lines carry the originating module name.
"""

import os
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - "
    "<level>{message}</level>"
)


def get_logger(name: str):
    """Get a logger instance bound to a module name.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger with the module name attached
    """
    return logger.bind(name=name)


def setup_logging(log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure loguru sinks for the application.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: Optional file path to also write logs to
    """
    level = log_level.upper()

    logger.remove()
    logger.configure(extra={"name": "booking_gateway"})

    logger.add(sys.stderr, format=LOG_FORMAT, level=level, colorize=True)

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]} - {message}",
            level=level,
            rotation="20 MB",
            retention="14 days",
            compression="zip",
        )

    logger.bind(name=__name__).info(f"Logging initialized with level {level}")
