"""
eventguard: sanitization of telemetry events before they are recorded.

Every event id and field value must be proven safe by a validation rule;
anything else is replaced with a verdict sentinel.
"""

__version__ = "1.0.0"
