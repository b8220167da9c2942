"""
Structured JSON logging.

Every record is one JSON object on stdout:
{"timestamp": "2025-01-15 10:30", "level": "INFO", "logger": "file-cache.store",
 "message": "File cached", "extra": {"digest": "..."}}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# Attributes every LogRecord carries; anything else was passed via `extra`.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}

VALID_LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class JSONFormatter(logging.Formatter):
    """Formatter that renders log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        timestamp = datetime.fromtimestamp(record.created, tz=UTC).strftime("%Y-%m-%d %H:%M")

        log_data: dict[str, Any] = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {
            key: value for key, value in record.__dict__.items() if key not in _STANDARD_ATTRS
        }
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


def setup_logging(level: str, service_name: str) -> logging.Logger:
    """
    Configure structured JSON logging for the service.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        service_name: Name of the service for logger identification

    Returns:
        Configured service logger

    Raises:
        ValueError: If level is not a valid log level
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}. Must be one of {sorted(VALID_LOG_LEVELS)}")
    numeric_level = getattr(logging, level_upper)

    logger = logging.getLogger(service_name)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the service namespace.

    Args:
        name: Component name, e.g. "store" or __name__
    """
    # Import here to avoid circular dependency (config imports the store)
    from file_cache.config import get_settings  # noqa: PLC0415

    settings = get_settings()
    return logging.getLogger(f"{settings.service.name}.{name}")
