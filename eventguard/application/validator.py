"""
Event-level sensitive data validation.

Validates a whole log event against the rules of its event group so that
no personal or proprietary data is recorded.
"""

from typing import Any, Iterable, Mapping, Optional

from eventguard.domain.events import LogEvent, new_log_event
from eventguard.domain.validation import (
    EventContext,
    GroupRuleSet,
    OutputField,
    Verdict,
)
from eventguard.shared.logging import get_logger, validation_context

from .ports import ValidationRuleStorage

# Events emitted by the recorder itself; their ids are never validated
DEFAULT_SYSTEM_EVENTS = frozenset({
    "invoked",
    "registered",
    "state.reporting.failed",
    "validation.too_many_events",
})


class SensitiveDataValidator:
    """
    Validates log events according to event group rules.

    Incorrect values are replaced with verdict descriptions instead of
    being dropped, so every accepted event keeps its shape.
    """

    def __init__(
        self,
        storage: ValidationRuleStorage,
        system_events: Iterable[str] = DEFAULT_SYSTEM_EVENTS,
    ):
        """
        Initialize validator.

        Args:
            storage: Source of group rules
            system_events: Event ids recorded without validation
        """
        self.storage = storage
        self.system_events = frozenset(system_events)
        self._logger = get_logger("application.validator")

    def validate_event(self, event: LogEvent) -> Optional[LogEvent]:
        """
        Validate a log event.

        Returns:
            None if the group or its version is not allowed, otherwise a
            validated and escaped copy of the event
        """
        action = event.event
        return self.validate(
            group_id=event.group.id,
            group_version=event.group.version,
            build=event.build,
            session_id=event.session,
            bucket=event.bucket,
            event_time=event.time,
            recorder_version=event.recorder_version,
            event_id=action.id,
            data=action.data,
            is_state=action.state,
            count=action.count,
        )

    def validate(
        self,
        group_id: str,
        group_version: str,
        build: str,
        session_id: str,
        bucket: str,
        event_time: int,
        recorder_version: str,
        event_id: str,
        data: Mapping[str, Any],
        is_state: bool,
        count: int = 1,
    ) -> Optional[LogEvent]:
        """
        Validate event fields and build the resulting log event.

        Returns:
            None if the group or its version is not allowed, otherwise the
            validated event
        """
        with validation_context(group_id):
            validators = self.storage.get_group_validators(group_id)
            if not self.storage.is_unreachable() and not validators.accepts(group_version, build):
                self._logger.debug(
                    "event_group_not_allowed",
                    known_group=validators.known,
                    group_version=group_version,
                    build=build,
                )
                return None

            context = EventContext.create(event_id, data)
            group_rules = validators.group_rules
            validated_event_id = self.guarantee_correct_event_id(context, group_rules)
            validated_data = self.guarantee_correct_event_data(context, group_rules)

            return new_log_event(
                session=session_id,
                build=build,
                bucket=bucket,
                time=event_time,
                group_id=group_id,
                group_version=group_version,
                recorder_version=recorder_version,
                event_id=validated_event_id,
                is_state=is_state,
                event_data=validated_data,
                count=count,
            )

    def guarantee_correct_event_id(
        self, context: EventContext, group_rules: Optional[GroupRuleSet]
    ) -> str:
        """Return the event id if accepted, otherwise the verdict description."""
        if self.storage.is_unreachable():
            return Verdict.UNREACHABLE_METADATA.description
        if context.event_id in self.system_events:
            return context.event_id

        verdict = validate_event_id(context, group_rules)
        if verdict is not Verdict.ACCEPTED:
            self._logger.debug("event_id_replaced", verdict=verdict.name)
            return verdict.description
        return context.event_id

    def guarantee_correct_event_data(
        self, context: EventContext, group_rules: Optional[GroupRuleSet]
    ) -> dict[str, Any]:
        """Validate every top-level field of the event data."""
        validated: dict[str, Any] = {}
        for key, value in (context.event_data or {}).items():
            name, validated_value = self._validate_event_data(context, group_rules, key, value)
            validated[name] = validated_value
        return validated

    def _validate_event_data(
        self,
        context: EventContext,
        group_rules: Optional[GroupRuleSet],
        key: str,
        value: Any,
    ) -> OutputField:
        if self.storage.is_unreachable():
            unreachable = Verdict.UNREACHABLE_METADATA.description
            return OutputField(unreachable, unreachable)
        if group_rules is None:
            undefined = Verdict.UNDEFINED_RULE.description
            return OutputField(undefined, undefined)
        return group_rules.validate_event_data(key, value, context)


def validate_event_id(context: EventContext, group_rules: Optional[GroupRuleSet]) -> Verdict:
    """
    Validate an event id against group rules.

    Returns:
        UNDEFINED_RULE when the group declares no event id rules
    """
    if group_rules is None or not group_rules.has_event_id_rules:
        return Verdict.UNDEFINED_RULE
    return group_rules.validate_event_id(context)
