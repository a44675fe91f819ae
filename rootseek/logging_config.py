"""Logging configuration utilities for rootseek.

rootseek is silent by default (a NullHandler is attached to its logger).
Callers opt in to output with the helpers below.

Example usage:
    import rootseek

    # Per-iteration solver detail on stderr
    rootseek.enable_console_logging(level="DEBUG")

    # Rotating file logging
    rootseek.enable_file_logging("solver.log", max_bytes=10_000_000)

    # JSON lines for log aggregation
    rootseek.enable_json_logging()

    # Configure from environment variables
    rootseek.configure_from_env()

Environment variables:
    ROOTSEEK_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    ROOTSEEK_LOG_FILE: Path to log file (enables rotating file logging)
    ROOTSEEK_LOG_JSON: Set to "1" for JSON output
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

__all__ = [
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5

LOGGER_NAME = "rootseek"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JsonFormatter(logging.Formatter):
    """Formats log records as one JSON object per line.

    Example output:
        {"timestamp": "2026-01-15T10:30:00.123456+00:00", "level": "DEBUG",
         "logger": "rootseek.numerics.root_finding", "message": "Iteration 3: ..."}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def _get_level(level: str | int) -> int:
    """Convert a level string or int to a logging level constant."""
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _clear_handlers() -> None:
    """Remove and close every handler except the NullHandler."""
    logger = _get_logger()
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()


def _install(handler: logging.Handler, level: LogLevel | int) -> None:
    logger = _get_logger()
    logger.setLevel(_get_level(level))
    handler.setLevel(_get_level(level))
    logger.addHandler(handler)


def _rotating_handler(path: str | Path, max_bytes: int, backup_count: int) -> RotatingFileHandler:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)


def enable_console_logging(
    level: LogLevel | int = "INFO",
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.StreamHandler:
    """Enable console (stderr) logging for rootseek.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int.
        format: Log message format string.
        date_format: Date format string for %(asctime)s.

    Returns:
        The created StreamHandler.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format, date_format))
    _install(handler, level)
    return handler


def enable_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> RotatingFileHandler:
    """Enable rotating file logging for rootseek.

    Parent directories of ``path`` are created. When the file reaches
    ``max_bytes`` it is rolled over, keeping ``backup_count`` old files.

    Returns:
        The created RotatingFileHandler.
    """
    handler = _rotating_handler(path, max_bytes, backup_count)
    handler.setFormatter(logging.Formatter(format, date_format))
    _install(handler, level)
    return handler


def enable_json_logging(level: LogLevel | int = "INFO") -> logging.StreamHandler:
    """Enable JSON console logging for rootseek."""
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    _install(handler, level)
    return handler


def enable_json_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> RotatingFileHandler:
    """Enable JSON rotating file logging for rootseek."""
    handler = _rotating_handler(path, max_bytes, backup_count)
    handler.setFormatter(JsonFormatter())
    _install(handler, level)
    return handler


def configure_from_env() -> None:
    """Configure logging from environment variables.

    Reads ROOTSEEK_LOGGING, ROOTSEEK_LOG_FILE and ROOTSEEK_LOG_JSON. Does
    nothing if neither a level nor a file is set.
    """
    level = os.environ.get("ROOTSEEK_LOGGING", "").upper()
    log_file = os.environ.get("ROOTSEEK_LOG_FILE", "")
    use_json = os.environ.get("ROOTSEEK_LOG_JSON", "") == "1"

    if not level and not log_file:
        return

    level = level or "INFO"

    if use_json:
        if log_file:
            enable_json_file_logging(log_file, level=level)
        else:
            enable_json_logging(level=level)
    elif log_file:
        enable_file_logging(log_file, level=level)
    else:
        enable_console_logging(level=level)


def set_level(level: LogLevel | int) -> None:
    """Set the log level for the whole rootseek logger tree."""
    _get_logger().setLevel(_get_level(level))


def set_module_level(module: str, level: LogLevel | int) -> None:
    """Set the log level for one rootseek submodule.

    Example:
        >>> import rootseek
        >>> rootseek.enable_console_logging(level="INFO")
        >>> rootseek.set_module_level("numerics.root_finding", "DEBUG")
    """
    logging.getLogger(f"{LOGGER_NAME}.{module}").setLevel(_get_level(level))


def disable_logging() -> None:
    """Remove all handlers and silence every level."""
    _clear_handlers()
    _get_logger().setLevel(logging.CRITICAL + 1)


_get_logger().addHandler(logging.NullHandler())
