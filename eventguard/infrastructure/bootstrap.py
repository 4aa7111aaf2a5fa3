"""
Composition root: wires configuration, logging, rule storage and validator.
"""

from functools import partial
from typing import Callable, Mapping, Optional

from eventguard.application.config import Config, get_config
from eventguard.application.descriptors import EventGroupRemoteDescriptors
from eventguard.application.validator import SensitiveDataValidator
from eventguard.domain.validation import Rule
from eventguard.domain.validation.anonymizer import anonymize
from eventguard.shared.logging import configure_logging

from .storage import InMemoryRuleStorage, UnreachableRuleStorage


def bootstrap_logging(config: Config) -> None:
    """Configure logging from application configuration."""
    configure_logging(
        environment=config.ENVIRONMENT.value,
        log_level=config.LOG_LEVEL,
        json_logs=config.json_logs,
        include_caller_info=config.ENVIRONMENT.value == "development",
    )


def bootstrap_validator(
    descriptors: Optional[EventGroupRemoteDescriptors],
    util_rules: Optional[Mapping[str, Rule]] = None,
    config: Optional[Config] = None,
) -> SensitiveDataValidator:
    """
    Build a validator for the given descriptors.

    Args:
        descriptors: Loaded descriptors, or None when they could not be obtained
        util_rules: Custom rules addressable as ``{util#name}``
        config: Configuration, defaults to the global instance

    Returns:
        Validator backed by in-memory storage, or by unreachable storage
        when no descriptors are available
    """
    config = config or get_config()
    if descriptors is None:
        storage = UnreachableRuleStorage()
    else:
        storage = InMemoryRuleStorage(
            descriptors,
            excluded_fields=config.VALIDATION_EXCLUDED_FIELDS,
            util_rules=util_rules,
        )
    return SensitiveDataValidator(storage, system_events=config.VALIDATION_SYSTEM_EVENTS)


def bootstrap_anonymizer(config: Optional[Config] = None) -> Callable[[str], str]:
    """Return an anonymizer bound to the configured salt."""
    config = config or get_config()
    return partial(anonymize, config.ANONYMIZATION_SALT)
