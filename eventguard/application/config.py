"""Application configuration for eventguard."""

import os
from enum import Enum
from typing import Mapping, Optional

from .validator import DEFAULT_SYSTEM_EVENTS


class Environment(Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class LogFormat(Enum):
    """Log output format."""

    JSON = "json"
    CONSOLE = "console"


class Config:
    """Application configuration read from environment-style settings."""

    def __init__(self, source: Optional[Mapping[str, str]] = None):
        """Initialize configuration from a settings mapping (defaults to os.environ)."""
        self._source = os.environ if source is None else source
        self._load_config()

    def _get(self, key: str, default: str = "") -> str:
        return self._source.get(key, default)

    def _load_config(self) -> None:
        """Load configuration values."""
        # Environment
        self.ENVIRONMENT = Environment(self._get("ENVIRONMENT", "development").lower())

        # Logging
        self.LOG_LEVEL = self._get("LOG_LEVEL", "INFO").upper()
        self.LOG_FORMAT = self._get("LOG_FORMAT", "json").lower()

        # Validation
        self.VALIDATION_EXCLUDED_FIELDS = _split_list(self._get("VALIDATION_EXCLUDED_FIELDS"))
        system_events = _split_list(self._get("VALIDATION_SYSTEM_EVENTS"))
        self.VALIDATION_SYSTEM_EVENTS = (
            system_events if system_events else sorted(DEFAULT_SYSTEM_EVENTS)
        )

        # Anonymization
        self.ANONYMIZATION_SALT = self._get("ANONYMIZATION_SALT")

    @property
    def json_logs(self) -> bool:
        return self.LOG_FORMAT == LogFormat.JSON.value

    def reload(self) -> None:
        """Reload configuration from the settings source."""
        self._load_config()
        self.validate()

    def validate(self) -> None:
        """Validate critical configuration values."""
        if self.LOG_FORMAT not in {log_format.value for log_format in LogFormat}:
            raise ValueError(f"LOG_FORMAT {self.LOG_FORMAT} not supported. Use json or console")

        if self.ENVIRONMENT == Environment.PRODUCTION and not self.ANONYMIZATION_SALT:
            raise ValueError("ANONYMIZATION_SALT must be set in production")


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


# Global configuration instance
_config: Optional[Config] = None


def get_config(source: Optional[Mapping[str, str]] = None) -> Config:
    """
    Get or create global configuration instance.

    Args:
        source: Settings mapping used when the instance is first created

    Returns:
        Validated configuration instance
    """
    global _config
    if _config is None:
        _config = Config(source)
        _config.validate()
    return _config
