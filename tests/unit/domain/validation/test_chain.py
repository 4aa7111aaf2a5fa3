"""Test rule chain evaluation."""

from eventguard.domain.validation import (
    ACCEPT_ALL,
    REJECT_ALL,
    EnumRule,
    Verdict,
    evaluate_chain,
)
from tests.fakes import RecordingRule


class TestEvaluateChain:
    """Test short-circuit and default semantics of rule chains."""

    def test_absent_chain_is_undefined(self, context):
        assert evaluate_chain("value", context, None) is Verdict.UNDEFINED_RULE

    def test_empty_chain_is_rejected(self, context):
        """A declared but empty chain proves nothing and defaults to reject."""
        assert evaluate_chain("value", context, []) is Verdict.REJECTED
        assert evaluate_chain("value", context, ()) is Verdict.REJECTED

    def test_first_final_verdict_wins(self, context):
        first = RecordingRule(Verdict.INCORRECT_RULE)
        second = RecordingRule(Verdict.THIRD_PARTY)
        third = RecordingRule(Verdict.ACCEPTED)

        verdict = evaluate_chain("value", context, [first, second, third])

        assert verdict is Verdict.THIRD_PARTY
        assert first.calls == ["value"]
        assert second.calls == ["value"]
        assert third.calls == []

    def test_last_non_final_verdict_is_returned(self, context):
        chain = [
            RecordingRule(Verdict.UNDEFINED_RULE),
            RecordingRule(Verdict.INCORRECT_RULE),
        ]
        assert evaluate_chain("value", context, chain) is Verdict.INCORRECT_RULE

    def test_single_non_final_verdict_is_not_upgraded_to_reject(self, context):
        chain = [RecordingRule(Verdict.PERFORM_ACTION_DURING_VALIDATION)]
        assert evaluate_chain("value", context, chain) is Verdict.PERFORM_ACTION_DURING_VALIDATION

    def test_final_reject_is_not_weakened_by_later_accept(self, context):
        assert evaluate_chain("value", context, [REJECT_ALL, ACCEPT_ALL]) is Verdict.REJECTED

    def test_enum_membership(self, context):
        chain = [EnumRule(["open", "close"])]
        assert evaluate_chain("open", context, chain) is Verdict.ACCEPTED
        assert evaluate_chain("delete", context, chain) is Verdict.REJECTED
