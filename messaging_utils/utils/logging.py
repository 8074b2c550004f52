"""Structured logging configuration with correlation ID support."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .correlation import get_correlation_id

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "exc_info",
        "exc_text",
        "stack_info",
        "correlation_id",
        "channel",
    }
)

# Emitted ahead of the standard fields, in this order.
_CONTEXT_ATTRS = ("channel", "correlation_id")


class CorrelationFormatter(logging.Formatter):
    """Custom formatter that includes correlation ID in log records."""

    def __init__(self, format_type: str = "json"):
        super().__init__()
        self.format_type = format_type.lower()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with correlation ID."""
        correlation_id = get_correlation_id()
        if correlation_id:
            record.correlation_id = correlation_id

        if self.format_type == "json":
            return self._format_json(record)
        return self._format_text(record)

    def _format_json(self, record: logging.LogRecord) -> str:
        log_data = {}

        # Dispatch context leads so lines from one send group together
        for key in _CONTEXT_ATTRS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        log_data.update(
            {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
                "module": record.module,
                "function": record.funcName,
                "line": record.lineno,
            }
        )

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def _format_text(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        correlation_part = ""

        if hasattr(record, "correlation_id"):
            correlation_part = f" [{record.correlation_id}]"

        base_msg = f"{timestamp} {record.levelname:8s} {record.name}{correlation_part}: {record.getMessage()}"

        if record.exc_info:
            base_msg += "\n" + self.formatException(record.exc_info)

        return base_msg


def setup_logging(level: str = "INFO", format_type: str = "json") -> None:
    """Set up structured logging configuration."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CorrelationFormatter(format_type))

    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.addHandler(handler)

    # Suppress noisy third-party loggers; the twilio client logs full request
    # headers at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("twilio.http_client").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the specified name."""
    return logging.getLogger(name)


class LoggerMixin:
    """
    Mixin class to add logging capabilities to other classes.

    A class-level `channel` attribute is attached to every record it logs.
    """

    channel: Optional[str] = None

    @property
    def logger(self) -> logging.Logger:
        """Get logger instance for this class."""
        return get_logger(self.__class__.__module__ + "." + self.__class__.__name__)

    def _extra(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        if self.channel:
            kwargs.setdefault("channel", self.channel)
        return kwargs

    def log_info(self, message: str, **kwargs) -> None:
        """Log info message with extra context."""
        self.logger.info(message, extra=self._extra(kwargs))

    def log_warning(self, message: str, **kwargs) -> None:
        """Log warning message with extra context."""
        self.logger.warning(message, extra=self._extra(kwargs))

    def log_error(self, message: str, **kwargs) -> None:
        """Log error message with extra context."""
        self.logger.error(message, extra=self._extra(kwargs))

    def log_debug(self, message: str, **kwargs) -> None:
        """Log debug message with extra context."""
        self.logger.debug(message, extra=self._extra(kwargs))
