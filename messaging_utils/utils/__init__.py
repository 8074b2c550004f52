"""Utility functions and helpers."""

from .logging import setup_logging, get_logger, LoggerMixin
from .correlation import (
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
    correlation_scope,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "LoggerMixin",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    "correlation_scope",
]
