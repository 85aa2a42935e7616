"""Environment-based configuration using pydantic-settings.

Settings are read from GLEAN_* environment variables (and a .env file when
present). The subdomain and API token are mandatory; their absence is a
start-up failure reported by `load_settings()`, not a per-request error.

Example:
    >>> # GLEAN_SUBDOMAIN=acme GLEAN_API_TOKEN=... GLEAN_LOG_LEVEL=DEBUG
    >>> settings = load_settings()
    >>> settings.base_url
    'https://acme-be.glean.com/rest'
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveFloat, SecretStr, ValidationError, ValidationInfo, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from glean_mcp.errors import ConfigurationError


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GLEAN_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", "format", mode="before")
    @classmethod
    def _normalize(cls, v: str, info: ValidationInfo) -> str:
        if not isinstance(v, str):
            return v
        return v.upper() if info.field_name == "level" else v.lower()


class GleanSettings(BaseSettings):
    """Root settings for the Glean MCP server.

    Example environment variables:
        GLEAN_SUBDOMAIN=acme
        GLEAN_API_TOKEN=glean_xxx
        GLEAN_ACT_AS=alice@acme.com
        GLEAN_TIMEOUT=60
        GLEAN_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="GLEAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    subdomain: str | None = Field(default=None, description="Glean instance subdomain")
    api_token: SecretStr | None = Field(default=None, description="Glean API bearer token")
    act_as: str | None = Field(default=None, description="Identity to impersonate (X-Scio-Actas)")
    timeout: PositiveFloat = Field(default=30.0, description="Upstream request timeout in seconds")
    base_url_override: str | None = Field(
        default=None,
        validation_alias="GLEAN_BASE_URL",
        description="Full REST base URL, replacing the one derived from the subdomain",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("subdomain", "act_as", "base_url_override", mode="before")
    @classmethod
    def _blank_is_unset(cls, v: object) -> object:
        return v.strip() or None if isinstance(v, str) else v

    @computed_field
    @property
    def base_url(self) -> str:
        """REST base URL for the configured instance."""
        if self.base_url_override:
            return self.base_url_override.rstrip("/")
        return f"https://{self.subdomain}-be.glean.com/rest"


@lru_cache(maxsize=1)
def get_settings() -> GleanSettings:
    """Get the global settings instance (cached)."""
    return GleanSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()


def load_settings() -> GleanSettings:
    """Return settings, raising ConfigurationError when a mandatory value is missing."""
    try:
        settings = get_settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    if not settings.subdomain:
        raise ConfigurationError("GLEAN_SUBDOMAIN environment variable is required")
    if settings.api_token is None or not settings.api_token.get_secret_value():
        raise ConfigurationError("GLEAN_API_TOKEN environment variable is required")
    return settings
