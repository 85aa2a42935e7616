"""Tests for environment-based settings."""

from __future__ import annotations

import pytest

from glean_mcp.config import clear_settings_cache, get_settings, load_settings
from glean_mcp.errors import ConfigurationError

ENV_VARS = ("GLEAN_SUBDOMAIN", "GLEAN_API_TOKEN", "GLEAN_ACT_AS", "GLEAN_TIMEOUT", "GLEAN_BASE_URL",
            "GLEAN_LOG_LEVEL", "GLEAN_LOG_FORMAT")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> object:
    """Isolate from the real environment and any .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()


def test_requires_subdomain(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GLEAN_API_TOKEN", "tok")
    with pytest.raises(ConfigurationError, match="GLEAN_SUBDOMAIN environment variable is required"):
        load_settings()


def test_requires_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GLEAN_SUBDOMAIN", "acme")
    with pytest.raises(ConfigurationError, match="GLEAN_API_TOKEN environment variable is required"):
        load_settings()


def test_loads_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GLEAN_SUBDOMAIN", "acme")
    monkeypatch.setenv("GLEAN_API_TOKEN", "tok")
    monkeypatch.setenv("GLEAN_ACT_AS", "ada@example.com")
    monkeypatch.setenv("GLEAN_TIMEOUT", "45")
    monkeypatch.setenv("GLEAN_LOG_LEVEL", "debug")
    monkeypatch.setenv("GLEAN_LOG_FORMAT", "JSON")

    settings = load_settings()
    assert settings.base_url == "https://acme-be.glean.com/rest"
    assert settings.api_token is not None
    assert settings.api_token.get_secret_value() == "tok"
    assert "'tok'" not in repr(settings)
    assert str(settings.api_token) == "**********"
    assert settings.act_as == "ada@example.com"
    assert settings.timeout == 45.0
    assert settings.logging.level == "DEBUG"
    assert settings.logging.format == "json"


def test_base_url_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GLEAN_SUBDOMAIN", "acme")
    monkeypatch.setenv("GLEAN_API_TOKEN", "tok")
    monkeypatch.setenv("GLEAN_BASE_URL", "http://localhost:8080/rest/")
    assert load_settings().base_url == "http://localhost:8080/rest"


def test_invalid_value_is_a_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GLEAN_SUBDOMAIN", "acme")
    monkeypatch.setenv("GLEAN_API_TOKEN", "tok")
    monkeypatch.setenv("GLEAN_TIMEOUT", "soon")
    with pytest.raises(ConfigurationError):
        load_settings()


def test_settings_are_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GLEAN_SUBDOMAIN", "acme")
    first = get_settings()
    assert get_settings() is first
    monkeypatch.setenv("GLEAN_SUBDOMAIN", "other")
    assert get_settings().subdomain == "acme"
    clear_settings_cache()
    assert get_settings().subdomain == "other"


def test_cli_exits_on_missing_configuration(capsys: pytest.CaptureFixture[str]) -> None:
    from glean_mcp.cli import main

    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 1
    assert "GLEAN_SUBDOMAIN environment variable is required" in capsys.readouterr().err
