from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

Output format is ``LABEL message`` where LABEL is one of
INFO | WARN | ERROR | SUMMARY (plus DEBUG in --debug mode).

- 標準 logging のみ使用 (loguru 等は使わない)
- アプリ用ロガーは stdout に 1 ハンドラのみ (冪等)
- ライブラリ側モジュール (src.*) は logging.getLogger(__name__) を使い、
  同じハンドラに流す (enable_debug() で DEBUG まで出力)
"""

__all__ = [
    "setup_logging",
    "get_logger",
    "log_summary",
    "enable_debug",
    "reset_logging",
]

APP_LOGGER_NAME = "invoice_importer"
LIBRARY_LOGGER_NAME = "src"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

# Global logger instance
_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter that prefixes each message with a short level label."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def setup_logging() -> logging.Logger:
    """Configure the application logger (stdout, labeled prefixes).

    Returns:
        Configured logger instance. Repeated calls return the same logger.
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(logging.INFO)

    # Clear any existing handlers to avoid duplication
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    # Prevent propagation to root logger to avoid duplicate output
    logger.propagate = False

    lib_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    lib_logger.setLevel(logging.INFO)
    for h in lib_logger.handlers[:]:
        lib_logger.removeHandler(h)
    lib_logger.addHandler(handler)
    lib_logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the configured application logger, configuring it on first use."""
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    """Log a message at SUMMARY level."""
    logger = get_logger()
    logger.log(SUMMARY_LEVEL, message)


def enable_debug() -> None:
    """Switch the application logger and library loggers to DEBUG."""
    logger = get_logger()
    for h in logger.handlers:
        h.setLevel(logging.DEBUG)
    logger.setLevel(logging.DEBUG)

    logging.getLogger(LIBRARY_LOGGER_NAME).setLevel(logging.DEBUG)
    logger.debug("debug mode enabled")


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    _logger = None
    lib_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    for h in lib_logger.handlers[:]:
        lib_logger.removeHandler(h)
    lib_logger.setLevel(logging.NOTSET)
    lib_logger.propagate = True
