"""
Rule factory: turns descriptor specifiers into evaluable rules.

Supported specifiers:

- ``{enum:a|b|c}``      inline enumeration
- ``{enum#name}``       named enumeration (group data first, then global)
- ``{regexp:pattern}``  inline regular expression, full match
- ``{regexp#name}``     named regular expression
- ``{util#name}``       custom rule registered by the caller
- anything else         exact literal match

Enum and regexp parts may be mixed with literal text, e.g.
``id_{regexp:[0-9]+}_{enum:a|b}``; such an expression compiles into a single
anchored regular expression.

A specifier that cannot be resolved becomes an IncorrectRule instead of an
error, so a broken descriptor degrades to sanitized output rather than lost
events.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from eventguard.domain.validation import (
    EnumRule,
    GroupRuleSet,
    IncorrectRule,
    RegexpRule,
    Rule,
)
from eventguard.shared.logging import get_logger

from .descriptors import EventGroupRemoteDescriptor, GlobalRules

logger = get_logger("application.rule_factory")

_SPECIFIER_RE = re.compile(r"^\{(?P<kind>[a-z_]+)(?P<sep>[:#])(?P<body>.*)\}$", re.DOTALL)


@dataclass(frozen=True)
class EventGroupContextData:
    """Named enumerations and regexps visible to the rules of one group."""

    enums: Mapping[str, list[str]] = field(default_factory=dict)
    regexps: Mapping[str, str] = field(default_factory=dict)
    global_rules: GlobalRules = field(default_factory=GlobalRules)

    def get_enum(self, name: str) -> Optional[list[str]]:
        if name in self.enums:
            return self.enums[name]
        return self.global_rules.enums.get(name)

    def get_regexp(self, name: str) -> Optional[str]:
        if name in self.regexps:
            return self.regexps[name]
        return self.global_rules.regexps.get(name)


class SimpleRuleFactory:
    """Builds rule chains from specifier lists."""

    def __init__(self, util_rules: Optional[Mapping[str, Rule]] = None):
        """
        Initialize factory.

        Args:
            util_rules: Custom rules addressable as ``{util#name}``
        """
        self._util_rules = dict(util_rules or {})

    def get_rules(
        self,
        specifiers: Optional[Iterable[str]],
        context_data: EventGroupContextData,
    ) -> tuple[Rule, ...]:
        """
        Build an ordered rule chain.

        Args:
            specifiers: Rule specifiers in priority order, or None
            context_data: Named enums and regexps for lookups

        Returns:
            Rules in declared order (empty when ``specifiers`` is None)
        """
        if specifiers is None:
            return ()
        return tuple(self.create_rule(specifier, context_data) for specifier in specifiers)

    def create_rule(self, specifier: str, context_data: EventGroupContextData) -> Rule:
        parts = split_specifier(specifier)
        matches = [_SPECIFIER_RE.match(part) for part in parts]
        if not any(matches):
            return EnumRule([specifier])
        if len(parts) == 1:
            return self._create_part_rule(specifier, matches[0], context_data)
        return self._create_expression_rule(specifier, parts, matches, context_data)

    def _create_part_rule(
        self, specifier: str, match: re.Match, context_data: EventGroupContextData
    ) -> Rule:
        kind, separator, body = match.group("kind"), match.group("sep"), match.group("body")

        if kind == "enum":
            values = body.split("|") if separator == ":" else context_data.get_enum(body)
            if values is not None:
                return EnumRule(values)
        elif kind in ("regexp", "regex"):
            pattern = body if separator == ":" else context_data.get_regexp(body)
            if pattern is not None:
                try:
                    return RegexpRule(pattern)
                except re.error:
                    pass
        elif kind == "util" and separator == "#":
            rule = self._util_rules.get(body)
            if rule is not None:
                return rule

        logger.warning("rule_specifier_unresolved", kind=kind, specifier=specifier)
        return IncorrectRule(specifier)

    def _create_expression_rule(
        self,
        specifier: str,
        parts: list[str],
        matches: list[Optional[re.Match]],
        context_data: EventGroupContextData,
    ) -> Rule:
        fragments = []
        for part, match in zip(parts, matches):
            if match is None:
                fragments.append(re.escape(part))
                continue
            fragment = _part_pattern(match, context_data)
            if fragment is None:
                logger.warning("rule_specifier_unresolved", kind=match.group("kind"), specifier=specifier)
                return IncorrectRule(specifier)
            fragments.append(fragment)

        try:
            return RegexpRule("".join(fragments))
        except re.error:
            logger.warning("rule_specifier_unresolved", kind="expression", specifier=specifier)
            return IncorrectRule(specifier)


def split_specifier(specifier: str) -> list[str]:
    """
    Split a specifier into literal text and balanced ``{...}`` parts.

    Braces nested inside a part (``{regexp:\\d{3}}``) belong to that part;
    an unclosed ``{`` starts literal text.
    """
    parts = []
    literal_start = 0
    index = 0
    while index < len(specifier):
        if specifier[index] != "{":
            index += 1
            continue
        end = _find_closing_brace(specifier, index)
        if end is None:
            break
        if index > literal_start:
            parts.append(specifier[literal_start:index])
        parts.append(specifier[index : end + 1])
        index = literal_start = end + 1
    if literal_start < len(specifier):
        parts.append(specifier[literal_start:])
    return parts


def _find_closing_brace(specifier: str, start: int) -> Optional[int]:
    depth = 0
    for index in range(start, len(specifier)):
        if specifier[index] == "{":
            depth += 1
        elif specifier[index] == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def _part_pattern(match: re.Match, context_data: EventGroupContextData) -> Optional[str]:
    """Regular expression fragment of an enum or regexp part of an expression."""
    kind, separator, body = match.group("kind"), match.group("sep"), match.group("body")
    if kind == "enum":
        values = body.split("|") if separator == ":" else context_data.get_enum(body)
        if values is None:
            return None
        return "(?:" + "|".join(re.escape(value) for value in values) + ")"
    if kind in ("regexp", "regex"):
        pattern = body if separator == ":" else context_data.get_regexp(body)
        if pattern is None:
            return None
        return "(?:" + pattern + ")"
    return None


def build_group_rules(
    descriptor: EventGroupRemoteDescriptor,
    global_rules: GlobalRules,
    factory: SimpleRuleFactory,
    excluded_fields: Iterable[str] = (),
) -> GroupRuleSet:
    """
    Resolve a group descriptor into a GroupRuleSet.

    Returns:
        GroupRuleSet.EMPTY if the descriptor declares no rules
    """
    rules = descriptor.rules
    if rules is None:
        return GroupRuleSet.EMPTY

    context_data = EventGroupContextData(
        enums=rules.enums or {},
        regexps=rules.regexps or {},
        global_rules=global_rules,
    )
    event_data_rules = {
        field_path: factory.get_rules(specifiers, context_data)
        for field_path, specifiers in (rules.event_data or {}).items()
    }
    return GroupRuleSet(
        event_id_rules=factory.get_rules(rules.event_id, context_data),
        event_data_rules=event_data_rules,
        excluded_fields=excluded_fields,
    )
