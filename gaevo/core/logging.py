"""
Centralized logging for gaevo.

Console output uses a plain formatter, the log file gets one JSON object per
record. Every record of an evolution run carries the run's correlation ID.
"""

import logging
import logging.handlers
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import json


class CorrelationFilter(logging.Filter):
    """Adds the current run's correlation ID to log records."""

    def __init__(self):
        super().__init__()
        self.correlation_id = None

    def filter(self, record):
        if self.correlation_id:
            record.correlation_id = self.correlation_id
        return True

    def set_correlation_id(self, correlation_id: Optional[str]):
        """Set the correlation ID for the current context."""
        self.correlation_id = correlation_id


class StructuredFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, 'correlation_id'):
            log_entry["correlation_id"] = record.correlation_id

        # Structured payload passed as extra={"extra_fields": {...}}
        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    enable_console: bool = True,
    enable_file: bool = True,
    max_file_size: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3
) -> logging.Logger:
    """
    Set up logging for gaevo.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file, defaults to logs/gaevo.log
        enable_console: Whether to log to stdout
        enable_file: Whether to log to a rotating JSON file
        max_file_size: Maximum size of log file before rotation
        backup_count: Number of rotated files to keep

    Returns:
        Configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()
    for existing in list(root_logger.filters):
        if isinstance(existing, CorrelationFilter):
            root_logger.removeFilter(existing)

    # Shared by every handler so records propagated from child loggers get the ID
    correlation_filter = CorrelationFilter()
    root_logger.addFilter(correlation_filter)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        console_handler.addFilter(correlation_filter)
        root_logger.addHandler(console_handler)

    if enable_file:
        if log_file is None:
            log_file = Path("logs") / "gaevo.log"
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size,
            backupCount=backup_count
        )
        file_handler.setFormatter(StructuredFormatter())
        file_handler.addFilter(correlation_filter)
        root_logger.addHandler(file_handler)

    get_logger(__name__).info("gaevo logging initialized", extra={
        "extra_fields": {
            "log_level": level,
            "log_file": str(log_file) if enable_file else None,
            "enable_console": enable_console,
            "enable_file": enable_file
        }
    })

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name (usually ``__name__``)."""
    return logging.getLogger(name)


def set_correlation_id(correlation_id: Optional[str]) -> bool:
    """
    Set the correlation ID on the root logger's correlation filter.

    Args:
        correlation_id: Identifier of the current run, or None to clear it

    Returns:
        True if a correlation filter was installed and updated
    """
    for filter_obj in logging.getLogger().filters:
        if isinstance(filter_obj, CorrelationFilter):
            filter_obj.set_correlation_id(correlation_id)
            return True
    return False


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())
