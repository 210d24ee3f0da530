"""Tests for settings and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from vibe_agents.config import Settings, get_settings
from vibe_agents.logging import NOISY_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "LLM_PROVIDER",
        "LLM_MODEL",
        "LLM_TEMPERATURE",
        "CORS_ORIGINS",
        "VIBE_AGENTS_LOG_LEVEL",
        "VIBE_AGENTS_HISTORY_LIMIT",
        "SESSION_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.llm_provider is None
    assert settings.history_limit == 50
    assert settings.session_timeout == 3600
    assert settings.log_level == "WARNING"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "anthropic")
    monkeypatch.setenv("VIBE_AGENTS_HISTORY_LIMIT", "10")

    settings = Settings(_env_file=None)

    assert settings.llm_provider == "anthropic"
    assert settings.history_limit == 10


def test_history_limit_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, history_limit=0)


def test_api_key_for_provider():
    settings = Settings(_env_file=None, anthropic_api_key="a-key", openai_api_key="o-key")
    assert settings.get_api_key_for_provider("anthropic") == "a-key"
    assert settings.get_api_key_for_provider("openai") == "o-key"
    assert settings.get_api_key_for_provider("other") is None


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_setup_logging_level():
    logger = setup_logging("DEBUG")
    assert logger.name == "vibe_agents"
    assert logger.level == logging.DEBUG


def test_setup_logging_from_env(monkeypatch):
    monkeypatch.setenv("VIBE_AGENTS_LOG_LEVEL", "error")
    assert setup_logging().level == logging.ERROR


def test_setup_logging_invalid_level():
    assert setup_logging("LOUD").level == logging.WARNING


def test_generation_disabled_without_provider():
    assert Settings(_env_file=None).generation_enabled is False
    assert Settings(_env_file=None, llm_provider="openai").generation_enabled is True


def test_client_config_only_carries_set_options():
    assert Settings(_env_file=None).client_config() == {}
    assert Settings(_env_file=None, llm_temperature=0.5).client_config() == {"temperature": 0.5}


def test_temperature_range():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, llm_temperature=3.0)


def test_cors_defaults_to_any_origin():
    assert Settings(_env_file=None).cors_origins == ["*"]


def test_setup_logging_quiets_provider_sdks():
    setup_logging("DEBUG")
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING
