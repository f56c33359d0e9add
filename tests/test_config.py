"""Tests for settings, engine parameters and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from ruleflow import DEFAULT_PRIORITY, EngineParameters, Settings, configure_logging, get_settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "RULEFLOW_LOG_LEVEL",
        "RULEFLOW_PRIORITY_THRESHOLD",
        "RULEFLOW_SKIP_ON_FIRST_APPLIED_RULE",
        "RULEFLOW_SKIP_ON_FIRST_FAILED_RULE",
        "RULEFLOW_SKIP_ON_FIRST_NON_TRIGGERED_RULE",
        "RULEFLOW_RULES_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.log_level == "WARNING"
        assert settings.priority_threshold == DEFAULT_PRIORITY
        assert settings.skip_on_first_applied_rule is False
        assert settings.rules_dir is None

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("RULEFLOW_PRIORITY_THRESHOLD", "5")
        clean_env.setenv("RULEFLOW_SKIP_ON_FIRST_FAILED_RULE", "true")
        clean_env.setenv("RULEFLOW_RULES_DIR", "/tmp/rules")

        settings = Settings(_env_file=None)

        assert settings.priority_threshold == 5
        assert settings.skip_on_first_failed_rule is True
        assert settings.rules_dir == "/tmp/rules"

    def test_get_settings_is_cached(self, clean_env):
        assert get_settings() is get_settings()


class TestEngineParameters:
    def test_from_settings(self):
        settings = Settings(_env_file=None, priority_threshold=3, skip_on_first_applied_rule=True)

        parameters = EngineParameters.from_settings(settings)

        assert parameters.priority_threshold == 3
        assert parameters.skip_on_first_applied_rule is True
        assert parameters.skip_on_first_non_triggered_rule is False

    def test_assignment_is_validated(self):
        parameters = EngineParameters()
        with pytest.raises(ValidationError):
            parameters.priority_threshold = "not a number"

    def test_str(self):
        text = str(EngineParameters(priority_threshold=10))
        assert "priority_threshold = 10" in text
        assert "skip_on_first_applied_rule = False" in text


@pytest.fixture
def package_logger():
    logger = logging.getLogger("ruleflow")
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    logger.setLevel(level)
    logger.handlers[:] = handlers


@pytest.mark.usefixtures("package_logger")
class TestConfigureLogging:
    def test_configures_package_logger_once(self):
        logger = configure_logging("DEBUG")
        configure_logging("INFO")

        handlers = [h for h in logger.handlers if getattr(h, "_ruleflow_handler", False)]
        assert logger.name == "ruleflow"
        assert len(handlers) == 1
        assert logger.level == logging.INFO

    def test_level_from_settings(self, clean_env):
        clean_env.setenv("RULEFLOW_LOG_LEVEL", "error")
        assert configure_logging().level == logging.ERROR
