from __future__ import annotations

import pytest
from pydantic import ValidationError

from canonguard.core import config
from canonguard.core.config import LEVENSHTEIN_THRESHOLD, Settings, get_settings
from canonguard.core.logging import configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LOG_LEVEL", "ENVIRONMENT", "DEDUP_SIMILARITY_THRESHOLD", "DEFAULT_COUNTRY"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    configure_logging("INFO")


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.LOG_LEVEL == "INFO"
    assert settings.ENVIRONMENT == "production"
    assert settings.DEDUP_SIMILARITY_THRESHOLD == LEVENSHTEIN_THRESHOLD
    assert settings.DEFAULT_COUNTRY is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DEDUP_SIMILARITY_THRESHOLD", "0.9")
    monkeypatch.setenv("DEFAULT_COUNTRY", "FR")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.DEDUP_SIMILARITY_THRESHOLD == 0.9
    assert settings.DEFAULT_COUNTRY == "fr"
    assert settings.LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize(
    "overrides",
    [
        {"DEDUP_SIMILARITY_THRESHOLD": 0.0},
        {"DEDUP_SIMILARITY_THRESHOLD": 1.5},
        {"DEFAULT_COUNTRY": "XX"},
        {"LOG_LEVEL": "LOUD"},
    ],
)
def test_invalid_values_fail_fast(overrides):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_blank_default_country_is_unset():
    assert Settings(_env_file=None, DEFAULT_COUNTRY="  ").DEFAULT_COUNTRY is None


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_get_settings_applies_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    get_settings()

    assert config.logging.getLogger("canonguard").level == config.logging.WARNING
