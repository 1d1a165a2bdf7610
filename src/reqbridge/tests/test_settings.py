"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from reqbridge import (
    DEFAULT_GRACE_PERIOD,
    DEFAULT_URL_TIMEOUT,
    DEFAULT_WAIT_SLICE,
    ReqbridgeSettings,
    RequestExecutor,
    clear_settings_cache,
    get_settings,
)


def test_defaults() -> None:
    settings = ReqbridgeSettings()
    assert settings.url_timeout == DEFAULT_URL_TIMEOUT == 15.0
    assert settings.grace_period == DEFAULT_GRACE_PERIOD == 5.0
    assert settings.wait_slice == DEFAULT_WAIT_SLICE == 1.0
    assert settings.follow_redirects is True
    assert settings.verify_ssl is True


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REQBRIDGE_GRACE_PERIOD", "2.5")
    monkeypatch.setenv("REQBRIDGE_VERIFY_SSL", "false")
    clear_settings_cache()

    settings = get_settings()
    assert settings.grace_period == 2.5
    assert settings.verify_ssl is False


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


def test_rejects_non_positive_timeouts() -> None:
    with pytest.raises(ValidationError):
        ReqbridgeSettings(wait_slice=0)
    with pytest.raises(ValidationError):
        ReqbridgeSettings(url_timeout=-1)


def test_executor_uses_global_settings_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REQBRIDGE_URL_TIMEOUT", "7")
    clear_settings_cache()

    executor = RequestExecutor()
    prepared = executor.prepare("https://example.com")

    assert executor.settings is get_settings()
    assert prepared is not None
    assert prepared.timeout == 7.0
