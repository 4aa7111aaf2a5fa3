"""
Validation rules.

A rule answers one question: is this string value (an event id or a
field value) known to be safe in the given event context? Rules are
stateless and may be shared between threads without locking.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Callable, Iterable, Pattern, Union

from .context import EventContext
from .escaping import cleanup_for_legacy_rules
from .verdicts import Verdict


class Rule(ABC):
    """Single validation capability."""

    @abstractmethod
    def evaluate(self, value: str, context: EventContext) -> Verdict:
        """
        Validate a value before it is recorded.

        Args:
            value: Event id or the string form of a field value
            context: Whole event context

        Returns:
            ACCEPTED if the value may be recorded as is, THIRD_PARTY if it is
            correct but comes from an unverified origin, REJECTED or another
            verdict otherwise
        """


class _ConstantRule(Rule):
    def __init__(self, verdict: Verdict) -> None:
        self._verdict = verdict

    def evaluate(self, value: str, context: EventContext) -> Verdict:
        return self._verdict

    def __repr__(self) -> str:
        return f"ConstantRule({self._verdict.name})"


ACCEPT_ALL: Rule = _ConstantRule(Verdict.ACCEPTED)
REJECT_ALL: Rule = _ConstantRule(Verdict.REJECTED)


class IncorrectRule(_ConstantRule):
    """Stand-in for a rule that could not be built from its specifier."""

    def __init__(self, specifier: str) -> None:
        super().__init__(Verdict.INCORRECT_RULE)
        self.specifier = specifier

    def __repr__(self) -> str:
        return f"IncorrectRule({self.specifier!r})"


class EnumRule(Rule):
    """Accepts values that belong to a fixed enumeration.

    Values written with separators that older recorders did not replace
    (``a;b``, ``a b``) are also matched in their cleaned-up form.
    """

    def __init__(self, values: Iterable[str]) -> None:
        self._values = frozenset(values)

    @property
    def values(self) -> frozenset[str]:
        return self._values

    def evaluate(self, value: str, context: EventContext) -> Verdict:
        if value in self._values:
            return Verdict.ACCEPTED
        legacy_value = cleanup_for_legacy_rules(value)
        if legacy_value is not None and legacy_value in self._values:
            return Verdict.ACCEPTED
        return Verdict.REJECTED

    def __repr__(self) -> str:
        return f"EnumRule({sorted(self._values)!r})"


class RegexpRule(Rule):
    """Accepts values fully matched by a regular expression."""

    def __init__(self, pattern: Union[str, Pattern[str]]) -> None:
        self._pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    @property
    def pattern(self) -> str:
        return self._pattern.pattern

    def evaluate(self, value: str, context: EventContext) -> Verdict:
        if self._pattern.fullmatch(value):
            return Verdict.ACCEPTED
        legacy_value = cleanup_for_legacy_rules(value)
        if legacy_value is not None and self._pattern.fullmatch(legacy_value):
            return Verdict.ACCEPTED
        return Verdict.REJECTED

    def __repr__(self) -> str:
        return f"RegexpRule({self._pattern.pattern!r})"


class CallableRule(Rule):
    """
    Custom domain rule backed by a plain function.

    Used for checks such as "is a known plugin id" that need knowledge
    outside the rule descriptor. The function must be thread safe.
    """

    def __init__(self, name: str, func: Callable[[str, EventContext], Verdict]) -> None:
        self.name = name
        self._func = func

    def evaluate(self, value: str, context: EventContext) -> Verdict:
        return self._func(value, context)

    def __repr__(self) -> str:
        return f"CallableRule({self.name!r})"
