"""Domain errors for eventguard."""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize domain error.

        Args:
            message: Error message (must not contain event payload values)
        """
        super().__init__(message)
        self.message = message


class RuleDescriptorError(DomainError):
    """Raised when a rule descriptor mapping cannot be turned into descriptors."""

    def __init__(self, message: str, group_id: str | None = None) -> None:
        super().__init__(message)
        self.group_id = group_id
