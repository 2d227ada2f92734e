"""Structured logging utilities for Squadfolio.

Provides JSON-formatted logging for production and human-readable
logging for development. Supports different log levels and categories
for different components (privacy, history, persistence, api).
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

# Log categories
CATEGORY_PRIVACY = "privacy"
CATEGORY_HISTORY = "history"
CATEGORY_PERSISTENCE = "persistence"
CATEGORY_API = "api"
CATEGORY_SYSTEM = "system"


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs as JSON objects with timestamp, level, category,
    message, and any additional context.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "category": getattr(record, "category", CATEGORY_SYSTEM),
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_data["data"] = record.extra_data

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Human-readable formatter for development.

    Outputs logs with colors (if supported) and clear formatting.
    """

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record for human reading.

        Args:
            record: Log record to format

        Returns:
            Formatted log string with colors
        """
        color = self.COLORS.get(record.levelname, "")
        reset = self.COLORS["RESET"]

        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        category = getattr(record, "category", CATEGORY_SYSTEM)

        msg = f"{color}[{timestamp}] {record.levelname:8s}{reset} [{category:11s}] {record.getMessage()}"

        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            msg += f"\n  Data: {record.extra_data}"

        return msg


class CategoryAdapter(logging.LoggerAdapter):
    """
    Logger adapter that adds category to log records.

    This allows us to categorize logs by component (privacy, history, etc.)
    without creating separate loggers.
    """

    def __init__(self, logger: logging.Logger, category: str):
        """
        Initialize adapter.

        Args:
            logger: Base logger
            category: Log category (privacy, history, persistence, etc.)
        """
        super().__init__(logger, {})
        self.category = category

    def process(self, msg: str, kwargs: Dict) -> tuple:
        """
        Process log message to add category.

        Args:
            msg: Log message
            kwargs: Additional keyword arguments

        Returns:
            Tuple of (message, kwargs)
        """
        if "extra" not in kwargs:
            kwargs["extra"] = {}
        kwargs["extra"]["category"] = self.category

        # extra_data travels separately so formatters can render it as a block
        if "extra_data" in kwargs:
            kwargs["extra"]["extra_data"] = kwargs.pop("extra_data")

        return msg, kwargs


def setup_logger(
    name: str = "squadfolio",
    level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    json_format: bool = False,
) -> logging.Logger:
    """
    Setup and configure logger.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory to save log files (if None, logs to stdout only)
        json_format: If True, use JSON format; otherwise human-readable

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = JSONFormatter() if json_format else HumanReadableFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f"{name}_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        # File logs are always JSON
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(
    category: str,
    name: str = "squadfolio",
    level: Optional[int] = None,
) -> CategoryAdapter:
    """
    Get logger with specific category.

    Args:
        category: Log category (privacy, history, persistence, etc.)
        name: Base logger name
        level: Optional logging level override

    Returns:
        Logger adapter with category
    """
    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level)

    return CategoryAdapter(logger, category)


def get_privacy_logger(name: str = "squadfolio") -> CategoryAdapter:
    """Get logger for privacy resolution and formatting."""
    return get_logger(CATEGORY_PRIVACY, name)


def get_history_logger(name: str = "squadfolio") -> CategoryAdapter:
    """Get logger for history sampling and aggregation."""
    return get_logger(CATEGORY_HISTORY, name)


def get_persistence_logger(name: str = "squadfolio") -> CategoryAdapter:
    """Get logger for the persistence layer."""
    return get_logger(CATEGORY_PERSISTENCE, name)


def get_api_logger(name: str = "squadfolio") -> CategoryAdapter:
    """Get logger for API services."""
    return get_logger(CATEGORY_API, name)
