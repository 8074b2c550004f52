"""Correlation ID utilities for tracking a dispatch through the logs."""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

# Context variable to store correlation ID for the current dispatch
_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return f"msg_{uuid.uuid4().hex[:12]}"


def set_correlation_id(correlation_id: Optional[str]) -> None:
    """Set the correlation ID for the current context."""
    _correlation_id.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    """Get the correlation ID from the current context."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(correlation_id: Optional[str] = None) -> Iterator[str]:
    """
    Bind a correlation ID for the duration of one dispatch.

    An ID already set by the caller is kept, so a caller can tie several
    sends together; otherwise each scope gets a fresh one. The previous
    value is restored on exit.
    """
    token = _correlation_id.set(
        correlation_id or get_correlation_id() or generate_correlation_id()
    )
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)
