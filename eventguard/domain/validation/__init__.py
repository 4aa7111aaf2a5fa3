"""
Event validation engine.

Validates event ids and nested event data against per-group rule chains,
replacing every value that is not proven safe with a verdict sentinel.
"""

from .chain import evaluate_chain
from .context import EventContext, OutputField
from .group_rules import FIELD_SEPARATOR, GroupRuleSet
from .rules import (
    ACCEPT_ALL,
    REJECT_ALL,
    CallableRule,
    EnumRule,
    IncorrectRule,
    RegexpRule,
    Rule,
)
from .verdicts import SENTINELS, Verdict, is_sentinel

__all__ = [
    # Engine
    "GroupRuleSet",
    "evaluate_chain",
    "FIELD_SEPARATOR",

    # Value objects
    "EventContext",
    "OutputField",

    # Rules
    "Rule",
    "ACCEPT_ALL",
    "REJECT_ALL",
    "EnumRule",
    "RegexpRule",
    "CallableRule",
    "IncorrectRule",

    # Verdicts
    "Verdict",
    "SENTINELS",
    "is_sentinel",
]
