"""Test rule factory and group rule building."""

import pytest

from eventguard.application.descriptors import (
    EventGroupRemoteDescriptor,
    GlobalRules,
    GroupRemoteRule,
)
from eventguard.application.rule_factory import (
    EventGroupContextData,
    SimpleRuleFactory,
    build_group_rules,
    split_specifier,
)
from eventguard.domain.validation import (
    ACCEPT_ALL,
    CallableRule,
    EnumRule,
    EventContext,
    GroupRuleSet,
    IncorrectRule,
    OutputField,
    RegexpRule,
    Verdict,
)


@pytest.fixture
def context_data() -> EventGroupContextData:
    return EventGroupContextData(
        enums={"actions": ["open", "close"]},
        regexps={"id": r"[a-z]+"},
        global_rules=GlobalRules(
            enums={"actions": ["global"], "langs": ["java", "kotlin"]},
            regexps={"version": r"\d+(\.\d+)*"},
        ),
    )


@pytest.fixture
def factory() -> SimpleRuleFactory:
    plugin_rule = CallableRule(
        "plugin", lambda value, context: Verdict.ACCEPTED if value == "git" else Verdict.THIRD_PARTY
    )
    return SimpleRuleFactory(util_rules={"plugin": plugin_rule})


class TestSimpleRuleFactory:
    def test_none_specifiers_give_empty_chain(self, factory, context_data):
        assert factory.get_rules(None, context_data) == ()

    def test_inline_enum(self, factory, context_data, context):
        rule = factory.create_rule("{enum:a|b|c}", context_data)
        assert isinstance(rule, EnumRule)
        assert rule.values == {"a", "b", "c"}

    def test_named_enum_prefers_group_data(self, factory, context_data):
        rule = factory.create_rule("{enum#actions}", context_data)
        assert rule.values == {"open", "close"}

    def test_named_enum_falls_back_to_global(self, factory, context_data):
        rule = factory.create_rule("{enum#langs}", context_data)
        assert rule.values == {"java", "kotlin"}

    def test_inline_regexp(self, factory, context_data, context):
        rule = factory.create_rule(r"{regexp:\d{3}}", context_data)
        assert isinstance(rule, RegexpRule)
        assert rule.evaluate("123", context) is Verdict.ACCEPTED
        assert rule.evaluate("1234", context) is Verdict.REJECTED

    def test_named_regexp(self, factory, context_data, context):
        assert factory.create_rule("{regexp#id}", context_data).pattern == "[a-z]+"
        assert factory.create_rule("{regexp#version}", context_data).evaluate("2.1", context) is Verdict.ACCEPTED

    def test_util_rule(self, factory, context_data, context):
        rule = factory.create_rule("{util#plugin}", context_data)
        assert rule.evaluate("git", context) is Verdict.ACCEPTED
        assert rule.evaluate("acme", context) is Verdict.THIRD_PARTY

    def test_literal_specifier_is_exact_match(self, factory, context_data, context):
        rule = factory.create_rule("invoked", context_data)
        assert rule.evaluate("invoked", context) is Verdict.ACCEPTED
        assert rule.evaluate("invoked2", context) is Verdict.REJECTED

    @pytest.mark.parametrize(
        "specifier",
        ["{enum#missing}", "{regexp#missing}", "{regexp:[unclosed}", "{util#missing}", "{util:inline}", "{bogus:x}"],
    )
    def test_unresolved_specifiers_become_incorrect_rules(self, factory, context_data, context, specifier):
        rule = factory.create_rule(specifier, context_data)
        assert isinstance(rule, IncorrectRule)
        assert rule.evaluate("x", context) is Verdict.INCORRECT_RULE

    def test_declared_order_is_kept(self, factory, context_data):
        rules = factory.get_rules(["{util#plugin}", "{enum:a}", "{regexp:b}"], context_data)
        assert [type(rule) for rule in rules] == [CallableRule, EnumRule, RegexpRule]


class TestExpressionSpecifiers:
    """Specifiers that mix literal text with enum and regexp parts."""

    @pytest.fixture
    def expression_data(self) -> EventGroupContextData:
        return EventGroupContextData(enums={"myEnum": ["REF_AAA", "REF_BBB"]})

    def test_split_keeps_nested_braces_in_part(self):
        assert split_specifier(r"{regexp:\d{3}}") == [r"{regexp:\d{3}}"]
        assert split_specifier("{enum:A}_{enum:B}") == ["{enum:A}", "_", "{enum:B}"]
        assert split_specifier("a{enum:b") == ["a{enum:b"]

    def test_two_enum_parts(self, factory, expression_data, context):
        rule = factory.create_rule("{enum:A}_{enum:B}", expression_data)

        assert isinstance(rule, RegexpRule)
        assert rule.evaluate("A_B", context) is Verdict.ACCEPTED
        assert rule.evaluate("A_A", context) is Verdict.REJECTED

    def test_mixed_expression(self, factory, expression_data, context):
        rule = factory.create_rule(
            r"JUST_TEXT[_{regexp:\d+(\+)?}_]_xxx_{enum:AAA|BBB|CCC}_zzz{enum#myEnum}_yyy", expression_data
        )

        assert rule.evaluate("JUST_TEXT[_123456_]_xxx_CCC_zzzREF_AAA_yyy", context) is Verdict.ACCEPTED
        assert rule.evaluate("JUST_TEXT[_FOO_]_xxx_CCC_zzzREF_AAA_yyy", context) is Verdict.REJECTED
        assert rule.evaluate("", context) is Verdict.REJECTED

    @pytest.mark.parametrize(
        "value",
        [
            "JUST_TEXT[_123456_]:xxx_CCC_zzzREF_AAA_yyy",
            "JUST_TEXT[_123456_]_xxx;CCC_zzzREF_AAA_yyy",
            "JUST_TEXT[_123456_]:xxx,CCC_zzzREF_AAA_yyy",
            "JUST TEXT[_123456_]_xxx CCC,zzzREF:AAA;yyy",
        ],
    )
    def test_mixed_expression_with_legacy_separators(self, factory, expression_data, context, value):
        rule = factory.create_rule(
            r"JUST_TEXT[_{regexp:\d+(\+)?}_]_xxx_{enum:AAA|BBB|CCC}_zzz{enum#myEnum}_yyy", expression_data
        )

        assert rule.evaluate(value, context) is Verdict.ACCEPTED
        assert rule.evaluate("JUSTTEXT[_123456_]_xxx!CCC_zzzREF:AAA;yyy", context) is Verdict.REJECTED

    def test_enum_part_with_empty_value(self, factory, expression_data, context):
        rule = factory.create_rule("{enum:AAA|}foo", expression_data)

        assert rule.evaluate("AAAfoo", context) is Verdict.ACCEPTED
        assert rule.evaluate("foo", context) is Verdict.ACCEPTED
        assert rule.evaluate(" foo", context) is Verdict.REJECTED
        assert rule.evaluate(" AAA foo", context) is Verdict.REJECTED

    def test_literal_text_is_escaped(self, factory, expression_data, context):
        rule = factory.create_rule("a.b{enum:x}", expression_data)

        assert rule.evaluate("a.bx", context) is Verdict.ACCEPTED
        assert rule.evaluate("aXbx", context) is Verdict.REJECTED

    @pytest.mark.parametrize("specifier", ["x_{enum#missing}", "x_{util#plugin}", "x_{regexp:[}"])
    def test_unresolved_parts_make_expression_incorrect(self, factory, expression_data, context, specifier):
        assert isinstance(factory.create_rule(specifier, expression_data), IncorrectRule)


class TestBuildGroupRules:
    def test_descriptor_without_rules_gives_empty_group(self):
        descriptor = EventGroupRemoteDescriptor(id="bare")
        assert build_group_rules(descriptor, GlobalRules(), SimpleRuleFactory()) is GroupRuleSet.EMPTY

    def test_builds_id_and_data_chains(self):
        descriptor = EventGroupRemoteDescriptor(
            id="actions",
            rules=GroupRemoteRule(
                event_id=["{enum:invoked}"],
                event_data={"action": ["{enum#actions}"], "password": ["{enum:x}"]},
                enums={"actions": ["open", "close"]},
            ),
        )

        group_rules = build_group_rules(descriptor, GlobalRules(), SimpleRuleFactory(), ["password"])

        context = EventContext.create("invoked", {"action": "open"})
        assert group_rules.validate_event_id(context) is Verdict.ACCEPTED
        assert group_rules.validate_event_data("action", "open", context) == OutputField("action", "open")
        assert group_rules.validate_event_data("action", "delete", context) == OutputField(
            "action", Verdict.REJECTED.description
        )
        assert group_rules.event_data_rules["password"] == (ACCEPT_ALL,)
        assert group_rules.validate_event_data("password", "abc123", context) == OutputField("password", "abc123")

    def test_incorrect_rule_is_overridden_by_later_rule(self):
        descriptor = EventGroupRemoteDescriptor(
            id="g",
            rules=GroupRemoteRule(event_data={"lang": ["{enum#missing}", "{enum:java}"]}),
        )
        group_rules = build_group_rules(descriptor, GlobalRules(), SimpleRuleFactory())
        context = EventContext.create("e")

        assert group_rules.validate_event_data("lang", "java", context) == OutputField("lang", "java")
        assert group_rules.validate_event_data("lang", "go", context) == OutputField(
            "lang", Verdict.REJECTED.description
        )

    def test_only_incorrect_rules_report_incorrect_rule(self):
        descriptor = EventGroupRemoteDescriptor(
            id="g",
            rules=GroupRemoteRule(event_data={"lang": ["{enum#missing}"]}),
        )
        group_rules = build_group_rules(descriptor, GlobalRules(), SimpleRuleFactory())

        assert group_rules.validate_event_data("lang", "java", EventContext.create("e")) == OutputField(
            "lang", Verdict.INCORRECT_RULE.description
        )
