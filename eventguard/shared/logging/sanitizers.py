"""
Log sanitizers that keep raw telemetry out of log records.
"""

import re
from typing import Any

from structlog.types import EventDict, WrappedLogger

# Field names whose values are never logged
SENSITIVE_PATTERNS = [
    r"password",
    r"pwd",
    r"secret",
    r"token",
    r"api_key",
    r"apikey",
    r"credential",
    r"private",
    r"salt",
]

# Raw event payloads: only their shape is logged
PAYLOAD_FIELDS = {"event_data", "data", "payload", "value"}

# Fields that should be partially masked
PARTIAL_MASK_FIELDS = {
    "session_id": lambda v: _mask_id(v, "session"),
    "session": lambda v: _mask_id(v, "session"),
    "bucket": lambda v: _mask_id(v, "bucket"),
    "build": lambda v: _mask_build(v),
}


class TelemetryRedactionProcessor:
    """
    Structlog processor that masks raw telemetry in log events.

    Secrets are redacted, payload fields are reduced to their shape and
    identifiers are partially masked.
    """

    def __call__(
        self,
        logger: WrappedLogger,
        name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """Process log event and mask sensitive data."""
        return sanitize_for_log(event_dict)


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Sanitize a dictionary for logging.

    Args:
        data: Dictionary to sanitize

    Returns:
        Sanitized dictionary with masked sensitive data
    """
    sanitized = {}

    for key, value in data.items():
        if not isinstance(key, str):
            sanitized[key] = "***REDACTED***"
        elif _is_sensitive_field(key):
            sanitized[key] = "***REDACTED***"
        elif key in PAYLOAD_FIELDS and value is not None:
            sanitized[key] = describe_shape(value)
        elif key in PARTIAL_MASK_FIELDS:
            if value is not None:
                sanitized[key] = PARTIAL_MASK_FIELDS[key](str(value))
            else:
                sanitized[key] = None
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_log(value)
        elif isinstance(value, list):
            sanitized[key] = [
                sanitize_for_log(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            sanitized[key] = value

    return sanitized


def describe_shape(value: Any) -> str:
    """
    Describe a payload without revealing its values.

    Examples: ``dict[3]``, ``list[2]``, ``str``
    """
    if isinstance(value, dict):
        return f"dict[{len(value)}]"
    if isinstance(value, (list, tuple)):
        return f"list[{len(value)}]"
    return type(value).__name__


def _is_sensitive_field(field_name: str) -> bool:
    """Check if a field name indicates sensitive data."""
    field_lower = field_name.lower()
    return any(re.search(pattern, field_lower) for pattern in SENSITIVE_PATTERNS)


def _mask_build(value: str) -> str:
    """Keep only the major build number."""
    major = value.split(".", 1)[0]
    return f"{major}.***" if major else "***"


def _mask_id(value: str, prefix: str) -> str:
    """Mask IDs keeping prefix and last 4 chars."""
    if len(value) > 8:
        return f"{prefix}_***{value[-4:]}"
    return f"{prefix}_***"
