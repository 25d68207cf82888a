"""Logging configuration for the ytplaylist package."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Create logger
logger: logging.Logger = logging.getLogger("ytplaylist")

# Create console handler; stdout is reserved for command output
console_handler = logging.StreamHandler(sys.stderr)
console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging for the package.

    Attaches the console handler once and stops propagation to the root
    logger so that embedding applications keep their own output clean.

    Args:
        level: Logging level for both the logger and its handler
    """
    logger.setLevel(level)
    console_handler.setLevel(level)
    if console_handler not in logger.handlers:
        logger.addHandler(console_handler)
    logger.propagate = False


def enable_debug() -> None:
    """Enable debug logging.

    Sets both the logger and console handler to DEBUG level.
    """
    logger.setLevel(logging.DEBUG)
    console_handler.setLevel(logging.DEBUG)


def disable_debug() -> None:
    """Disable debug logging.

    Sets both the logger and console handler back to INFO level.
    """
    logger.setLevel(logging.INFO)
    console_handler.setLevel(logging.INFO)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name of the logger, typically __name__. If None, returns the
            package logger.

    Returns:
        A Logger instance that reports through the package logger
    """
    if not name:
        return logger
    if name == "ytplaylist" or name.startswith("ytplaylist."):
        return logging.getLogger(name)
    # Modules imported as src.ytplaylist.* still log under the package logger
    short_name = name.rsplit(".", 1)[-1]
    return logging.getLogger(f"ytplaylist.{short_name}")
