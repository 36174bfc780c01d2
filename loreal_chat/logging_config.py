"""Logging configuration for the L'Oréal chat client and relay."""

import logging
import sys
from typing import Optional

# Configure package logger
logger = logging.getLogger("loreal_chat")


def configure_logging(level: Optional[str] = None) -> None:
    """Set up logging configuration."""

    if level is None:
        from .config import get_settings
        level = get_settings().log_level

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    # Configure root logger first
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear all existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)

    formatter = logging.Formatter(
        '[%(asctime)s][%(levelname)s] %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)

    # Package loggers propagate to our own handler only
    logger.handlers.clear()
    logger.addHandler(console_handler)
    logger.setLevel(numeric_level)
    logger.propagate = False

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str = "loreal_chat") -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)
