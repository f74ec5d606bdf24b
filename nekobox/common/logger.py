"""
Application Logger

This module provides a consistent logging interface for the application,
with configurable log levels, formatters, and handlers.
"""

import os
import sys
import json
import logging
import datetime
from typing import Optional, Union

from nekobox.config import settings

# Default log format
DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

APP_LOGGER_NAME = "nekobox"

__all__ = [
    'configure_logger',
    'get_logger',
    'JsonFormatter',
    'app_logger'
]


class JsonFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per log record.

    Fields passed as ``extra={"data": {...}}`` are merged into the object.
    """

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        *,
        indent: Optional[int] = None
    ):
        super().__init__(fmt, datefmt)
        self.indent = indent

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the specified record as JSON.

        Args:
            record: Log record to format

        Returns:
            Formatted JSON string
        """
        log_object = {
            "timestamp": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "name": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno
        }

        if record.exc_info:
            log_object["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info)
            }

        if hasattr(record, 'data') and isinstance(record.data, dict):
            log_object.update(record.data)

        return json.dumps(log_object, indent=self.indent, default=str)


def configure_logger(
    name: str = APP_LOGGER_NAME,
    level: Union[str, int] = logging.INFO,
    format_string: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    use_json: bool = False,
    log_file: Optional[str] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Configure a logger with appropriate handlers and formatters.

    Args:
        name: Logger name
        level: Log level
        format_string: Log format string
        date_format: Date format string
        use_json: Whether to use JSON formatting
        log_file: Path to log file (if None, no file handler is created)
        console_output: Whether to output logs to console

    Returns:
        Configured logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers = []

    if use_json:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(format_string, date_format)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except (FileNotFoundError, PermissionError) as e:
            logger.warning(f"Could not create log file {log_file}: {e}")

    return logger


def get_logger(
    name: str,
    parent: Optional[logging.Logger] = None
) -> logging.Logger:
    """
    Get a logger with the specified name.

    Names under the ``nekobox`` package already inherit the application
    handlers; anything else can be attached explicitly through ``parent``.
    """
    if parent:
        return parent.getChild(name)
    return logging.getLogger(name)


def get_app_logger() -> logging.Logger:
    """
    Get or create the application logger.

    Returns:
        The configured application logger
    """
    logger = logging.getLogger(APP_LOGGER_NAME)

    # Only configure if not already configured
    if not logger.handlers:
        return configure_logger(
            name=APP_LOGGER_NAME,
            level=settings.LOG_LEVEL,
            use_json=settings.LOG_JSON,
            log_file=settings.LOG_FILE,
            console_output=True
        )

    return logger


# Initialize the app logger
app_logger = get_app_logger()
