"""Rule chain evaluation with short-circuit on final verdicts."""

from __future__ import annotations

from typing import Optional, Sequence

from .context import EventContext
from .rules import Rule
from .verdicts import Verdict


def evaluate_chain(
    value: str,
    context: EventContext,
    rules: Optional[Sequence[Rule]],
) -> Verdict:
    """
    Evaluate rules in declared order and return a single verdict.

    The first final verdict wins and later rules are never run. If no rule
    is final, the last non-final verdict is returned.

    Args:
        value: String to validate
        context: Whole event context
        rules: Ordered rule chain, or None when no chain is defined

    Returns:
        UNDEFINED_RULE when ``rules`` is None, REJECTED when the chain is
        empty, otherwise the verdict selected as described above
    """
    if rules is None:
        return Verdict.UNDEFINED_RULE

    previous: Optional[Verdict] = None
    for rule in rules:
        verdict = rule.evaluate(value, context)
        if verdict.is_final:
            return verdict
        previous = verdict
    return previous if previous is not None else Verdict.REJECTED
