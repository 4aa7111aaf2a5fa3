"""Test configuration and shared fixtures."""

import pytest

from eventguard.domain.validation import (
    EnumRule,
    EventContext,
    GroupRuleSet,
    RegexpRule,
    Verdict,
)


@pytest.fixture
def context() -> EventContext:
    """Context of a plain test event."""
    return EventContext.create("test.event.id", {})


@pytest.fixture
def group_rules() -> GroupRuleSet:
    """Group rules covering a few flat and nested fields."""
    return GroupRuleSet(
        event_id_rules=[EnumRule(["opened", "closed"])],
        event_data_rules={
            "action": [EnumRule(["open", "close"])],
            "count": [RegexpRule(r"\d+")],
            "enabled": [EnumRule(["true", "false"])],
            "settings.theme": [EnumRule(["dark", "light"])],
            "settings.layout.panels": [RegexpRule(r"[a-z_]+")],
        },
        excluded_fields=["password", "system_event_id"],
    )


@pytest.fixture
def undefined() -> str:
    return Verdict.UNDEFINED_RULE.description


@pytest.fixture
def rejected() -> str:
    return Verdict.REJECTED.description
