"""Tests for environment-driven settings and logging setup."""

from __future__ import annotations

import logging

import pytest

from tonepicker.config import Settings
from tonepicker.logging_utils import configure_logging


def test_default_cors_origin(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    settings = Settings(_env_file=None)
    assert settings.cors_origins == ["https://tonepicker.vercel.app"]


def test_single_cors_origin_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """A plain URL is accepted without JSON quoting."""
    monkeypatch.setenv("CORS_ORIGINS", "https://example.com")
    settings = Settings(_env_file=None)
    assert settings.cors_origins == ["https://example.com"]


def test_comma_separated_cors_origins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, http://localhost:5173 ,")
    settings = Settings(_env_file=None)
    assert settings.cors_origins == ["https://a.example", "http://localhost:5173"]


def test_model_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MISTRAL_API_KEY", "secret")
    monkeypatch.setenv("CACHE_TTL_MS", "1500")
    settings = Settings(_env_file=None)

    model_config = settings.get_model_config()

    assert model_config.api_key == "secret"
    assert model_config.temperature == 0.4
    assert settings.cache_ttl_ms == 1500


def test_configure_logging_quiets_http_loggers() -> None:
    configure_logging(level="debug", quiet=("tonepicker.test.noisy",))
    assert logging.getLogger("tonepicker.test.noisy").level == logging.WARNING
