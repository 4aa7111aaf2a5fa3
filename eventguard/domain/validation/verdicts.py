"""
Validation verdicts.

Every outcome of validating an event id or a field value is one of these
members. The description of a verdict is also the literal text written in
place of a value that could not be proven safe, so downstream consumers
must treat these strings as markers, not data.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class Verdict(Enum):
    """Outcome of validating a single value."""

    ACCEPTED = ("accepted", True)
    THIRD_PARTY = ("third.party", True)
    REJECTED = ("validation.unmatched_rule", True)
    INCORRECT_RULE = ("validation.incorrect_rule", False)
    UNDEFINED_RULE = ("validation.undefined_rule", False)
    UNREACHABLE_METADATA = ("validation.unreachable_metadata", True)
    PERFORM_ACTION_DURING_VALIDATION = ("perform.action.during.validation", False)

    def __init__(self, description: str, final: bool) -> None:
        self.description = description
        self.final = final

    @property
    def is_final(self) -> bool:
        """Final verdicts stop rule chain evaluation immediately."""
        return self.final

    def __str__(self) -> str:
        return self.description


SENTINELS: frozenset[str] = frozenset(verdict.description for verdict in Verdict)


def is_sentinel(value: Any) -> bool:
    """Check whether a value is exactly one of the verdict descriptions."""
    return isinstance(value, str) and value in SENTINELS
