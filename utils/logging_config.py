"""Centralized logging configuration for the qualification engine.

This module provides a unified logging setup for scripts and host
applications, with support for console and file logging, log rotation,
and configurable log levels.

The engines themselves only create module loggers; nothing is configured
on import. Entry points call ``setup_logging()`` once.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT

Example:
    >>> from utils.logging_config import setup_logging, get_logger
    >>>
    >>> # Setup logging once at application start
    >>> setup_logging()
    >>>
    >>> # Get logger in any module
    >>> logger = get_logger(__name__)
    >>> logger.info("Scoring started")
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import config


# Global flag to track if logging has been configured
_logging_configured = False


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    console_output: bool = True,
    file_output: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    force: bool = False
) -> None:
    """Setup centralized logging configuration.

    Configures logging with a console handler and, when a log file is
    known, a rotating file handler, using settings from environment
    variables or provided parameters.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            If None, uses config.LOG_LEVEL.
        log_file: Path to log file. If None, uses config.LOG_FILE.
        log_format: Log message format. If None, uses config.LOG_FORMAT.
        console_output: Enable console logging (default: True).
        file_output: Enable file logging when a log file is set (default: True).
        max_bytes: Maximum size of log file before rotation (default: 10MB).
        backup_count: Number of backup log files to keep (default: 5).
        force: Force reconfiguration even if already configured (default: False).

    Example:
        >>> setup_logging(log_level="DEBUG", console_output=True)
        >>> logger = get_logger(__name__)
        >>> logger.debug("Debug message")

    Note:
        This function should be called once at application startup.
        Subsequent calls will be ignored unless force=True.
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    # Use config values if not provided
    log_level = log_level or config.LOG_LEVEL
    log_file = log_file or config.LOG_FILE
    log_format = log_format or config.LOG_FORMAT

    # Convert log level string to logging constant
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # File handler with rotation
    if file_output and log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _logging_configured = True

    root_logger.debug(f"Logging configured (level={log_level}, file={log_file if file_output else None})")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        Logger instance configured with the application settings.

    Note:
        If setup_logging() hasn't been called, this will use Python's
        default logging configuration.
    """
    return logging.getLogger(name)


def log_exception(logger: logging.Logger, message: str, exc: Exception) -> None:
    """Log an exception with full traceback.

    Args:
        logger: Logger instance to use.
        message: Context message describing what was being done.
        exc: Exception that was caught.

    Example:
        >>> logger = get_logger(__name__)
        >>> try:
        ...     load_qualification_config(path)
        ... except ConfigurationError as e:
        ...     log_exception(logger, "Failed to load configuration", e)
    """
    logger.error(f"{message}: {str(exc)}", exc_info=True)


def log_performance(logger: logging.Logger, operation: str, duration: float) -> None:
    """Log performance metrics for an operation.

    Args:
        logger: Logger instance to use.
        operation: Name of the operation.
        duration: Duration in seconds.

    Example:
        >>> import time
        >>> logger = get_logger(__name__)
        >>> start = time.time()
        >>> snapshot = aggregate(scored, config)
        >>> log_performance(logger, "Analytics aggregation", time.time() - start)
    """
    logger.info(f"Performance: {operation} completed in {duration:.2f}s")


# Made with Bob
