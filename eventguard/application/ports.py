"""Application ports (interfaces) for eventguard.

This module defines the contracts between the application layer and the
rule storage backing it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from eventguard.domain.validation import GroupRuleSet

from .descriptors import BuildRange, GroupVersionRange


@dataclass(frozen=True)
class GroupValidators:
    """Rules of one event group plus the group versions and builds they apply to."""

    group_rules: Optional[GroupRuleSet] = None
    version_ranges: Optional[tuple[GroupVersionRange, ...]] = None
    build_ranges: Optional[tuple[BuildRange, ...]] = None
    known: bool = False

    def accepts(self, version: str, build: str) -> bool:
        """
        Check whether an event of the given group version and build may be recorded.

        Unknown groups are never accepted. Version and build are checked
        independently; a known group without declared ranges of a kind
        accepts every value of that kind.
        """
        if not self.known:
            return False
        if self.build_ranges and not any(build_range.contains(build) for build_range in self.build_ranges):
            return False
        if self.version_ranges and not any(
            version_range.contains(version) for version_range in self.version_ranges
        ):
            return False
        return True


class ValidationRuleStorage(ABC):
    """Port for looking up validation rules by event group."""

    @abstractmethod
    def get_group_validators(self, group_id: str) -> GroupValidators:
        """
        Get rules for an event group.

        Args:
            group_id: Event group identifier

        Returns:
            Group validators; ``known`` is False for unknown groups
        """
        pass

    @abstractmethod
    def is_unreachable(self) -> bool:
        """
        Check whether rule metadata could not be obtained.

        Returns:
            True if every value must be marked as unreachable metadata
        """
        pass
