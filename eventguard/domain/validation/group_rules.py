"""
Validation rules of one event group.

A GroupRuleSet is built once per event group and reused for every event of
that group, possibly from many threads at once. All rule chains are
resolved at construction time and stored as tuples behind a read-only
mapping, so readers never observe a partially built chain.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, ClassVar, Iterable, Mapping, Optional, Sequence

from .chain import evaluate_chain
from .context import EventContext, OutputField
from .rules import ACCEPT_ALL, Rule
from .verdicts import Verdict, is_sentinel

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "."


def stringify(value: Any) -> str:
    """String form of a scalar as seen by rules."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class GroupRuleSet:
    """Event id rules, per-field rule chains and excluded fields of a group."""

    EMPTY: ClassVar["GroupRuleSet"]

    def __init__(
        self,
        event_id_rules: Sequence[Rule] = (),
        event_data_rules: Optional[Mapping[str, Sequence[Rule]]] = None,
        excluded_fields: Iterable[str] = (),
    ) -> None:
        """
        Initialize group rules.

        Args:
            event_id_rules: Ordered rule chain for the event id
            event_data_rules: Field path to ordered rule chain
            excluded_fields: Field names copied through without validation
        """
        self._excluded_fields = frozenset(excluded_fields)
        self._event_id_rules: tuple[Rule, ...] = tuple(event_id_rules)

        resolved: dict[str, tuple[Rule, ...]] = {}
        for field_path, rules in (event_data_rules or {}).items():
            if field_path in self._excluded_fields:
                resolved[field_path] = (ACCEPT_ALL,)
            else:
                resolved[field_path] = tuple(rules)
        self._event_data_rules: Mapping[str, tuple[Rule, ...]] = MappingProxyType(resolved)

        logger.debug(
            "Group rules built: %d event id rules, %d data fields, %d excluded",
            len(self._event_id_rules),
            len(resolved),
            len(self._excluded_fields),
        )

    @property
    def event_id_rules(self) -> tuple[Rule, ...]:
        return self._event_id_rules

    @property
    def event_data_rules(self) -> Mapping[str, tuple[Rule, ...]]:
        return self._event_data_rules

    @property
    def excluded_fields(self) -> frozenset[str]:
        return self._excluded_fields

    @property
    def has_event_id_rules(self) -> bool:
        return len(self._event_id_rules) > 0

    @property
    def has_event_data_rules(self) -> bool:
        return len(self._event_data_rules) > 0

    def validate_event_id(self, context: EventContext) -> Verdict:
        """
        Validate the event id against the id rule chain.

        An id that is already a sentinel comes from a previously validated
        event and is accepted as is.
        """
        if is_sentinel(context.event_id):
            return Verdict.ACCEPTED
        return evaluate_chain(context.event_id, context, self._event_id_rules)

    def validate_event_data(self, key: str, data: Any, context: EventContext) -> OutputField:
        """
        Validate one top-level field of the event data.

        Returns:
            Validated field; unsafe values are replaced with the description
            of the verdict that rejected them
        """
        return self._validate(key, data, context, key)

    def _validate(self, path: str, data: Any, context: EventContext, field_name: str) -> OutputField:
        if data is None:
            return OutputField(field_name, Verdict.REJECTED.description)
        if is_sentinel(data):
            return OutputField(field_name, data)
        if path in self._excluded_fields:
            return OutputField(field_name, data)

        if isinstance(data, Mapping):
            return self._validate_mapping(path, data, context, field_name)
        if isinstance(data, (list, tuple)):
            return self._validate_sequence(path, data, context, field_name)

        rules = self._event_data_rules.get(path)
        if not rules:
            return OutputField(Verdict.UNDEFINED_RULE.description, Verdict.UNDEFINED_RULE.description)

        verdict = evaluate_chain(stringify(data), context, rules)
        return OutputField(field_name, data if verdict is Verdict.ACCEPTED else verdict.description)

    def _validate_mapping(
        self, path: str, data: Mapping[Any, Any], context: EventContext, field_name: str
    ) -> OutputField:
        validated: dict[Any, Any] = {}
        for entry_key, entry_value in data.items():
            if isinstance(entry_key, str):
                name, value = self._validate(
                    path + FIELD_SEPARATOR + entry_key, entry_value, context, entry_key
                )
                validated[name] = value
            else:
                validated[entry_key] = Verdict.REJECTED.description

        undefined = Verdict.UNDEFINED_RULE.description
        if validated and all(isinstance(name, str) and name == undefined for name in validated):
            field_name = undefined
        return OutputField(field_name, validated)

    def _validate_sequence(
        self, path: str, data: Sequence[Any], context: EventContext, field_name: str
    ) -> OutputField:
        values: list[Any] = []
        names: list[str] = []
        for item in data:
            name, value = self._validate(path, item, context, field_name)
            values.append(value)
            names.append(name)

        undefined = Verdict.UNDEFINED_RULE.description
        if values and all(name == undefined for name in names):
            field_name = undefined
        return OutputField(field_name, values)

    def __repr__(self) -> str:
        return (
            f"GroupRuleSet(event_id_rules={len(self._event_id_rules)}, "
            f"event_data_rules={sorted(self._event_data_rules)}, "
            f"excluded_fields={sorted(self._excluded_fields)})"
        )


GroupRuleSet.EMPTY = GroupRuleSet()
