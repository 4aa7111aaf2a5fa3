"""Value objects passed through and returned by validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional


@dataclass(frozen=True)
class EventContext:
    """
    Whole-event context handed to every rule invocation.

    Rules may use it to correlate a field value with the event id or
    with sibling fields of the raw payload.
    """

    event_id: str
    event_data: Optional[Mapping[str, Any]] = None

    @classmethod
    def create(cls, event_id: str, event_data: Optional[Mapping[str, Any]] = None) -> "EventContext":
        return cls(event_id=event_id, event_data=event_data)

    def __repr__(self) -> str:
        # Payload values may be unsafe; keep them out of reprs and logs.
        fields = len(self.event_data) if self.event_data else 0
        return f"EventContext(event_id={self.event_id!r}, fields={fields})"


@dataclass(frozen=True)
class OutputField:
    """Validated field: possibly renamed, value possibly replaced by a sentinel."""

    name: str
    value: Any

    def __iter__(self) -> Iterator[Any]:
        yield self.name
        yield self.value
