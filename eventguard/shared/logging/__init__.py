"""
eventguard structured logging.

This module provides structured logging capabilities with:
- Redaction of raw telemetry payloads and secrets
- Correlation ID and event group context tracking
"""

from .context import (
    generate_correlation_id,
    get_correlation_id,
    get_group_id,
    validation_context,
)
from .factory import EnvironmentProcessor, configure_logging, get_logger
from .sanitizers import TelemetryRedactionProcessor, describe_shape, sanitize_for_log

__all__ = [
    "configure_logging",
    "get_logger",
    "EnvironmentProcessor",
    "sanitize_for_log",
    "describe_shape",
    "TelemetryRedactionProcessor",
    "validation_context",
    "generate_correlation_id",
    "get_correlation_id",
    "get_group_id",
]
