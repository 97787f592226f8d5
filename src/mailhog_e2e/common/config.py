"""
Configuration management for mailhog-e2e.

This module provides configuration loading from environment variables
and TOML configuration files, with type-safe settings classes.
"""

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import InvalidConfigError, MissingConfigError

URL_EXAMPLE = "http://localhost:8025/api"


class MailHogAPISettings(BaseSettings):
    """MailHog API connection settings."""

    model_config = SettingsConfigDict(
        env_prefix="MAILHOG_",
        extra="ignore",
    )

    url: Optional[str] = Field(
        None, description=f"Base URL of the MailHog API, e.g. {URL_EXAMPLE}"
    )
    timeout: Optional[float] = Field(
        None, gt=0, description="Request timeout in seconds (transport default when unset)"
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate MailHog URL format."""
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="MAILHOG_LOG_",
        extra="ignore",
    )

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )
    file: Optional[str] = Field(None, description="Log file path")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MAILHOG_",
        extra="ignore",
    )

    api: MailHogAPISettings = Field(default_factory=MailHogAPISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_toml(cls, path: str | Path) -> "Settings":
        """
        Load settings from a TOML configuration file.

        Args:
            path: Path to the TOML configuration file.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            ConfigurationError: If the file cannot be read or parsed.
        """
        path = Path(path)
        if not path.exists():
            raise MissingConfigError("MAILHOG_CONFIG_FILE", {"path": str(path)})

        try:
            with open(path, "rb") as f:
                config_data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise InvalidConfigError(
                config_key="config_file",
                value=str(path),
                reason=f"Failed to parse TOML: {e}",
            ) from e

        return cls._from_dict(config_data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Settings":
        """Create settings from a dictionary of TOML sections."""
        settings_kwargs: dict[str, Any] = {}

        if "mailhog" in data:
            settings_kwargs["api"] = MailHogAPISettings(**data["mailhog"])

        if "logging" in data:
            settings_kwargs["logging"] = LoggingSettings(**data["logging"])

        return cls(**settings_kwargs)

    def with_url(self, url: Optional[str]) -> "Settings":
        """Return a copy whose API URL is replaced by ``url`` when one is given."""
        if not url:
            return self
        api = MailHogAPISettings(url=url, timeout=self.api.timeout)
        return Settings(api=api, logging=self.logging)

    def require_url(self) -> str:
        """
        Return the MailHog base URL.

        Raises:
            MissingConfigError: If no URL has been configured.
        """
        if not self.api.url:
            raise MissingConfigError(
                "MAILHOG_URL",
                {"expected": f"a URL to the MailHog API endpoint, e.g. {URL_EXAMPLE}"},
            )
        return self.api.url


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings.

    Settings come from environment variables, or from the TOML file named
    by ``MAILHOG_CONFIG_FILE`` when that file exists.

    Returns:
        Settings instance.
    """
    config_file = os.getenv("MAILHOG_CONFIG_FILE")

    if config_file and Path(config_file).exists():
        settings = Settings.from_toml(config_file)
    else:
        settings = Settings()

    return settings


def reload_settings() -> Settings:
    """
    Reload settings, clearing the cache.

    Returns:
        Fresh Settings instance.
    """
    get_settings.cache_clear()
    return get_settings()
