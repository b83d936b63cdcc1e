"""
Centralized logging configuration.

Usage:
    from iwd.core.logging import get_logger
    logger = get_logger(__name__)
    logger.info("Collection seeded")
"""

from __future__ import annotations

import logging
import sys

from .config import get_settings

ROOT_LOGGER = "iwd"


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        levelname = record.levelname
        if levelname in self.COLORS:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        return super().format(record)


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Configure the package logger once.

    Module loggers (logging.getLogger(__name__) under the iwd package)
    propagate here, so a single console handler covers the whole app.
    """
    if level is None:
        level = get_settings().log_level

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    if sys.stdout.isatty():
        handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S"))
    else:
        handler.setFormatter(logging.Formatter(fmt, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    return logging.getLogger(name)
