"""Pydantic models for event group rule descriptors.

Descriptors arrive already decoded (fetching and caching them is done
elsewhere); this module only gives them a typed shape.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from eventguard.domain.errors import RuleDescriptorError


class GroupVersionRange(BaseModel):
    """Range of group versions a descriptor applies to."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_: Optional[str] = Field(None, alias="from", description="First version, inclusive")
    to: Optional[str] = Field(None, description="Last version, exclusive")

    def contains(self, version: str) -> bool:
        """Check an integer group version against the range; open ends match anything."""
        try:
            value = int(version)
            lower = int(self.from_) if self.from_ else None
            upper = int(self.to) if self.to else None
        except (TypeError, ValueError):
            return False
        if lower is not None and value < lower:
            return False
        if upper is not None and value >= upper:
            return False
        return True


def parse_build_number(build: Optional[str]) -> Optional[tuple[int, ...]]:
    """Parse a dotted build number such as ``241.15989.150``; None if not numeric."""
    if not build:
        return None
    try:
        return tuple(int(component) for component in build.split("."))
    except ValueError:
        return None


class BuildRange(BaseModel):
    """Range of product builds a descriptor applies to."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_: Optional[str] = Field(None, alias="from", description="First build, inclusive")
    to: Optional[str] = Field(None, description="Last build, exclusive")

    def contains(self, build: str) -> bool:
        """Compare dotted build numbers component-wise; open ends match anything."""
        value = parse_build_number(build)
        if value is None:
            return False
        if self.from_:
            lower = parse_build_number(self.from_)
            if lower is None or value < lower:
                return False
        if self.to:
            upper = parse_build_number(self.to)
            if upper is None or value >= upper:
                return False
        return True


class GroupRemoteRule(BaseModel):
    """Rule specifiers of one event group."""

    model_config = ConfigDict(frozen=True)

    event_id: Optional[List[str]] = Field(None, description="Specifiers for the event id")
    event_data: Optional[Dict[str, List[str]]] = Field(None, description="Field path to specifiers")
    enums: Optional[Dict[str, List[str]]] = Field(None, description="Named enumerations")
    regexps: Optional[Dict[str, str]] = Field(None, description="Named regular expressions")


class EventGroupRemoteDescriptor(BaseModel):
    """Descriptor of one event group."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Event group id")
    builds: List[BuildRange] = Field(default_factory=list)
    versions: List[GroupVersionRange] = Field(default_factory=list)
    rules: Optional[GroupRemoteRule] = None


class GlobalRules(BaseModel):
    """Enumerations and regexps shared by all groups."""

    model_config = ConfigDict(frozen=True)

    enums: Dict[str, List[str]] = Field(default_factory=dict)
    regexps: Dict[str, str] = Field(default_factory=dict)


class EventGroupRemoteDescriptors(BaseModel):
    """All event group descriptors plus shared rule data."""

    model_config = ConfigDict(frozen=True)

    groups: List[EventGroupRemoteDescriptor] = Field(default_factory=list)
    rules: GlobalRules = Field(default_factory=GlobalRules)


def load_descriptors(data: Mapping[str, Any]) -> EventGroupRemoteDescriptors:
    """
    Build typed descriptors from a decoded mapping.

    Args:
        data: Decoded descriptor document

    Returns:
        Validated descriptors

    Raises:
        RuleDescriptorError: If the mapping does not describe valid groups
    """
    try:
        return EventGroupRemoteDescriptors.model_validate(data)
    except ValidationError as error:
        # Only report locations, never the offending input values
        locations = ", ".join(".".join(str(part) for part in err["loc"]) for err in error.errors())
        raise RuleDescriptorError(f"Invalid rule descriptors at: {locations}") from error
