"""Centralized logging configuration for termreg.

Provides rotating file logs with consistent formatting across all components.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "termreg"

# Default configuration
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "termreg.log"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_BACKUP_COUNT = 3
DEFAULT_LOG_LEVEL = "INFO"

# Violation lines kept when a rejected report is logged
DEFAULT_REPORT_LINES = 20

# Log format
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
) -> logging.Logger:
    """Set up logging with rotating file handler.

    Args:
        log_dir: Directory for log files. Defaults to 'logs' in current directory.
                 Can be overridden with TERMREG_LOG_DIR environment variable.
        log_file: Log file name. Defaults to 'termreg.log'.
        max_bytes: Maximum size per log file before rotation.
        backup_count: Number of rotated files to keep.
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to INFO.
               Can be overridden with TERMREG_LOG_LEVEL environment variable.
        console: Whether to also log to console. Defaults to True.

    Returns:
        The root termreg logger.
    """
    if log_dir is None:
        log_dir = os.environ.get("TERMREG_LOG_DIR", DEFAULT_LOG_DIR)
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    if level is None:
        level = os.environ.get("TERMREG_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    # Drop handlers from a previous call
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    log_path = log_dir / log_file
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.info("termreg logging initialized (level=%s, file=%s)", level, log_path)

    return logger


def get_logger(component: str) -> logging.Logger:
    """Return the logger for a termreg component.

    Components log under the ``termreg`` namespace so a single
    ``setup_logging`` call covers the enrollment engine, the store and the
    API alike. ``get_logger("state_store")`` and
    ``get_logger("termreg.state_store")`` return the same logger.
    """
    if component == LOGGER_NAME or component.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(component)
    return logging.getLogger(f"{LOGGER_NAME}.{component}")


def truncate_report(report: str, max_lines: int = DEFAULT_REPORT_LINES) -> str:
    """Shorten a violation report for a log record.

    Whole violation lines are kept; the rest is summarized by count so a
    large rejected request does not flood the log file.

    Args:
        report: Newline-terminated report, one violation per line.
        max_lines: Number of violation lines to keep.

    Returns:
        The report itself when short enough, otherwise its first
        ``max_lines`` lines followed by a ``... N more violations`` line.
    """
    lines = report.splitlines(keepends=True)
    if len(lines) <= max_lines:
        return report
    hidden = len(lines) - max_lines
    return "".join(lines[:max_lines]) + f"... {hidden} more violations\n"
