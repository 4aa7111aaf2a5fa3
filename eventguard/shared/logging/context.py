"""
Context management for structured logging.
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

import structlog

# Context variables for validation tracking
_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
_group_id: ContextVar[Optional[str]] = ContextVar("group_id", default=None)


@contextmanager
def validation_context(group_id: str, correlation_id: Optional[str] = None) -> Iterator[str]:
    """
    Bind event group and correlation id to all logs emitted inside the block.

    Nested blocks restore the outer context on exit.

    Args:
        group_id: Event group being validated
        correlation_id: Correlation ID, reused from the outer context or generated

    Yields:
        Correlation ID in effect
    """
    corr_id = correlation_id or _correlation_id.get() or generate_correlation_id()
    corr_token = _correlation_id.set(corr_id)
    group_token = _group_id.set(group_id)
    bound = structlog.contextvars.bind_contextvars(correlation_id=corr_id, group_id=group_id)
    try:
        yield corr_id
    finally:
        structlog.contextvars.reset_contextvars(**bound)
        _group_id.reset(group_token)
        _correlation_id.reset(corr_token)


def generate_correlation_id() -> str:
    """Generate a unique correlation ID."""
    return f"corr_{uuid.uuid4().hex[:16]}"


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from context."""
    return _correlation_id.get()


def get_group_id() -> Optional[str]:
    """Get the event group being validated in this context."""
    return _group_id.get()
