"""Event log records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .validation import escaping


@dataclass(frozen=True)
class LogEventGroup:
    """Event group id and version."""

    id: str
    version: str


@dataclass(frozen=True)
class LogEventAction:
    """Event id with its data payload."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)
    state: bool = False
    count: int = 1

    def add_escaped_data(self, key: str, value: Any) -> None:
        """Add a field after validation, escaping both name and value."""
        self.data[escaping.escape_field_name(key)] = escaping.escape_event_data_value(value)


@dataclass(frozen=True)
class LogEvent:
    """Single event log record."""

    session: str
    build: str
    bucket: str
    time: int
    group: LogEventGroup
    recorder_version: str
    event: LogEventAction

    def escape(self) -> "LogEvent":
        """Return a copy with every field escaped."""
        return new_log_event(
            session=self.session,
            build=self.build,
            bucket=self.bucket,
            time=self.time,
            group_id=self.group.id,
            group_version=self.group.version,
            recorder_version=self.recorder_version,
            event_id=self.event.id,
            is_state=self.event.state,
            event_data=self.event.data,
            count=self.event.count,
        )


def new_log_event(
    session: str,
    build: str,
    bucket: str,
    time: int,
    group_id: str,
    group_version: str,
    recorder_version: str,
    event_id: str,
    is_state: bool = False,
    event_data: Optional[dict[str, Any]] = None,
    count: int = 1,
) -> LogEvent:
    """Create a log event with all fields escaped."""
    action = LogEventAction(
        id=escaping.escape_event_id_or_field_value(event_id),
        data=escaping.escape_event_data(event_data or {}),
        state=is_state,
        count=count,
    )
    group = LogEventGroup(id=escaping.escape(group_id), version=escaping.escape(group_version))
    return LogEvent(
        session=escaping.escape(session),
        build=escaping.escape(build),
        bucket=escaping.escape(bucket),
        time=time,
        group=group,
        recorder_version=escaping.escape(recorder_version),
        event=action,
    )
