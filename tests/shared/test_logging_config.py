"""Tests for settings-driven logging configuration."""

import logging

import pytest
import structlog
from shared.config import get_settings
from shared.utils.logging import add_context, clear_context, configure_logging, get_log_level


@pytest.fixture()
def settings_env(monkeypatch):
    def _apply(**env):
        for key, value in env.items():
            monkeypatch.setenv(f"SHOPPING_{key.upper()}", value)
        get_settings.cache_clear()

    yield _apply
    monkeypatch.undo()
    get_settings.cache_clear()


class TestLogLevel:
    @pytest.mark.parametrize(
        "environment, level",
        [("production", "INFO"), ("staging", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("other", "INFO")],
    )
    def test_level_by_environment(self, settings_env, environment, level):
        settings_env(environment=environment)
        assert get_log_level() == level

    def test_explicit_override(self, settings_env):
        settings_env(environment="production", log_level="error")
        assert get_log_level() == "ERROR"


class TestConfigureLogging:
    def test_file_handlers_written_to_log_dir(self, settings_env, tmp_path):
        settings_env(environment="test", log_dir=str(tmp_path / "logs"))
        configure_logging()

        handlers = logging.getLogger().handlers
        assert len(handlers) == 3
        assert (tmp_path / "logs").is_dir()

    def test_context_binding(self):
        clear_context()
        add_context(request_id="req-1")
        assert structlog.contextvars.get_contextvars() == {"request_id": "req-1"}
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}


class TestSettings:
    def test_defaults(self, settings_env):
        settings_env()
        settings = get_settings()
        assert settings.default_currency == "USD"
        assert settings.pricing_zone == "global"

    def test_env_prefix(self, settings_env):
        settings_env(default_currency="EUR")
        assert get_settings().default_currency == "EUR"
