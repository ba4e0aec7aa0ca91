from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from core.settings import DEFAULT_QUOTE_PROVIDER_URL, Settings, get_settings


def test_settings_defaults() -> None:
    settings = Settings()
    assert settings.quote_provider_url == DEFAULT_QUOTE_PROVIDER_URL
    assert settings.quote_timeout_seconds == 3.0
    assert settings.live_quotes_enabled is True
    assert "Mozilla" in settings.quote_user_agent


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUOTE_PROVIDER_URL", "http://quotes.test/v7/finance/quote")
    monkeypatch.setenv("QUOTE_TIMEOUT_SECONDS", "1.5")
    monkeypatch.setenv("QUOTE_LIVE_ENABLED", "false")

    settings = Settings()

    assert settings.quote_provider_url == "http://quotes.test/v7/finance/quote"
    assert settings.quote_timeout_seconds == 1.5
    assert settings.live_quotes_enabled is False


def test_settings_reject_non_positive_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUOTE_TIMEOUT_SECONDS", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_settings_reject_non_http_provider_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUOTE_PROVIDER_URL", "ftp://quotes.test")
    with pytest.raises(ValidationError):
        Settings()


def test_settings_warn_on_unknown_quote_env(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setenv("QUOTE_TIMEOUT_MS", "3000")
    with caplog.at_level(logging.WARNING, logger="core.settings"):
        Settings()
    assert "QUOTE_TIMEOUT_MS" in caplog.text


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
