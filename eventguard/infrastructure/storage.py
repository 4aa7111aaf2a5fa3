"""In-memory validation rule storage.

Holds one GroupRuleSet per event group, built from already-loaded
descriptors. Updates replace every group at once under a lock.
"""

import threading
from typing import Iterable, Mapping, Optional

from eventguard.application.descriptors import EventGroupRemoteDescriptors
from eventguard.application.ports import GroupValidators, ValidationRuleStorage
from eventguard.application.rule_factory import SimpleRuleFactory, build_group_rules
from eventguard.domain.validation import Rule
from eventguard.shared.logging import get_logger


class InMemoryRuleStorage(ValidationRuleStorage):
    """
    Rule storage backed by in-process dictionaries.

    Lookups and updates may happen concurrently from any thread.
    """

    def __init__(
        self,
        descriptors: EventGroupRemoteDescriptors,
        excluded_fields: Iterable[str] = (),
        util_rules: Optional[Mapping[str, Rule]] = None,
    ):
        """
        Initialize storage.

        Args:
            descriptors: Initial descriptors, may be replaced by update()
            excluded_fields: Event data fields exempt from validation
            util_rules: Custom rules addressable as ``{util#name}``
        """
        self._logger = get_logger("infrastructure.rule_storage")
        self._excluded_fields = tuple(excluded_fields)
        self._factory = SimpleRuleFactory(util_rules)
        self._lock = threading.Lock()
        self._validators: dict[str, GroupValidators] = {}  # guarded by _lock
        self.update(descriptors)

    def update(self, descriptors: EventGroupRemoteDescriptors) -> None:
        """Replace all group rules with ones built from new descriptors."""
        validators = self._create_validators(descriptors)
        with self._lock:
            self._validators = validators

        self._logger.info(
            "validation_rules_updated",
            groups=len(validators),
            excluded_fields=len(self._excluded_fields),
        )

    def get_group_validators(self, group_id: str) -> GroupValidators:
        with self._lock:
            validators = self._validators.get(group_id)
        return validators if validators is not None else GroupValidators()

    def is_unreachable(self) -> bool:
        return False

    def _create_validators(self, descriptors: EventGroupRemoteDescriptors) -> dict[str, GroupValidators]:
        validators = {}
        for group in descriptors.groups:
            validators[group.id] = GroupValidators(
                group_rules=build_group_rules(
                    group, descriptors.rules, self._factory, self._excluded_fields
                ),
                version_ranges=tuple(group.versions),
                build_ranges=tuple(group.builds),
                known=True,
            )
        return validators


class UnreachableRuleStorage(ValidationRuleStorage):
    """Storage used when rule metadata could not be obtained."""

    def get_group_validators(self, group_id: str) -> GroupValidators:
        return GroupValidators()

    def is_unreachable(self) -> bool:
        return True
