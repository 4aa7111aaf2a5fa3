"""Unit tests for application configuration."""

import pytest

from eventguard.application import config as config_module
from eventguard.application.config import Config, Environment, get_config
from eventguard.application.validator import DEFAULT_SYSTEM_EVENTS


@pytest.fixture(autouse=True)
def reset_global_config():
    config_module._config = None
    yield
    config_module._config = None


class TestConfig:
    def test_defaults(self):
        config = Config({})

        assert config.ENVIRONMENT is Environment.DEVELOPMENT
        assert config.LOG_LEVEL == "INFO"
        assert config.LOG_FORMAT == "json"
        assert config.json_logs is True
        assert config.VALIDATION_EXCLUDED_FIELDS == []
        assert config.VALIDATION_SYSTEM_EVENTS == sorted(DEFAULT_SYSTEM_EVENTS)
        assert config.ANONYMIZATION_SALT == ""

    def test_values_are_normalized(self):
        config = Config({"ENVIRONMENT": "Staging", "LOG_LEVEL": "debug", "LOG_FORMAT": "CONSOLE"})

        assert config.ENVIRONMENT is Environment.STAGING
        assert config.LOG_LEVEL == "DEBUG"
        assert config.LOG_FORMAT == "console"
        assert config.json_logs is False

    def test_list_values(self):
        config = Config(
            {
                "VALIDATION_EXCLUDED_FIELDS": "password, system_event_id,,",
                "VALIDATION_SYSTEM_EVENTS": "invoked,heartbeat",
            }
        )

        assert config.VALIDATION_EXCLUDED_FIELDS == ["password", "system_event_id"]
        assert config.VALIDATION_SYSTEM_EVENTS == ["invoked", "heartbeat"]

    def test_unknown_environment_fails(self):
        with pytest.raises(ValueError):
            Config({"ENVIRONMENT": "moon"})

    def test_unsupported_log_format_fails_validation(self):
        config = Config({"LOG_FORMAT": "xml"})

        with pytest.raises(ValueError, match="LOG_FORMAT xml not supported"):
            config.validate()

    def test_production_requires_salt(self):
        with pytest.raises(ValueError, match="ANONYMIZATION_SALT must be set in production"):
            Config({"ENVIRONMENT": "production"}).validate()

        Config({"ENVIRONMENT": "production", "ANONYMIZATION_SALT": "pepper"}).validate()

    def test_reload_reads_source_again(self):
        source = {"LOG_LEVEL": "INFO"}
        config = Config(source)

        source["LOG_LEVEL"] = "warning"
        config.reload()

        assert config.LOG_LEVEL == "WARNING"


class TestGetConfig:
    def test_returns_same_instance(self):
        first = get_config({"LOG_LEVEL": "DEBUG"})
        second = get_config({"LOG_LEVEL": "ERROR"})

        assert first is second
        assert second.LOG_LEVEL == "DEBUG"

    def test_validates_on_creation(self):
        with pytest.raises(ValueError):
            get_config({"LOG_FORMAT": "xml"})
