"""
Logging helpers for the EIP-7702 sponsorship engine.

The library never configures the root logger. Every module obtains a
namespaced logger through get_logger(); applications opt into output with
configure_logging() or their own handlers.

Example:
    >>> from eip7702.utils.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.info("Authorization signed", extra={"signer": "0x..."})
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union

ROOT_LOGGER_NAME = "eip7702"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the eip7702 namespace.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    level: Union[int, str] = logging.INFO,
    detailed: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach a single stream handler to the eip7702 logger.

    Calling this twice replaces the previous handler instead of duplicating
    output.

    Args:
        level: Logging level (name or number)
        detailed: Include file/line in each record
        stream: Output stream (defaults to stdout)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_eip7702_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(DETAILED_FORMAT if detailed else DEFAULT_FORMAT, datefmt=DATE_FORMAT)
    )
    handler._eip7702_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger


def set_level(level: Union[int, str]) -> None:
    """Set the level of the eip7702 logger and its handlers."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def disable_logging() -> None:
    """Silence all eip7702 log output, including child loggers."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.CRITICAL + 1)


def short_address(address: str) -> str:
    """Abbreviate an address for log lines (0x1234...abcd)."""
    if len(address) <= 12:
        return address
    return f"{address[:6]}...{address[-4:]}"
