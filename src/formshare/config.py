"""
Configuration management for formshare.

Configuration is loaded from:
1. Environment variables (highest priority)
2. formshare.yaml file
3. Default values (lowest priority)
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from formshare.exceptions import ConfigurationError


class ShareSettings(BaseSettings):
    """
    Default inclusion flags for shareable forms.

    The default is to include locations, but not providers.
    """

    include_mapped_concepts: bool = True
    include_drugs_by_name: bool = True
    include_locations: bool = True
    include_providers: bool = False


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["development", "json"] = "development"
    file: str | None = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level


class Settings(BaseSettings):
    """Main settings class that combines all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="FORMSHARE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    share: ShareSettings = Field(default_factory=ShareSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_yaml_config(path: Path | None = None) -> dict:
    """Load configuration from YAML file."""
    if path is None:
        env_path = os.environ.get("FORMSHARE_CONFIG")
        candidates = [Path(env_path)] if env_path else []
        candidates += [
            Path("formshare.yaml"),
            Path("config/formshare.yaml"),
        ]
        for candidate in candidates:
            if candidate.exists():
                path = candidate
                break

    if path and path.exists():
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "Unable to parse settings file", config_path=str(path)
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Settings file must contain a mapping", config_path=str(path)
            )
        return data

    return {}


def _merge_env_over_yaml(yaml_config: dict) -> dict:
    """Drop YAML keys that an environment variable overrides."""
    merged: dict = {}
    for section, values in yaml_config.items():
        if not isinstance(values, dict):
            merged[section] = values
            continue
        prefix = f"FORMSHARE_{section.upper()}__"
        merged[section] = {
            key: value
            for key, value in values.items()
            if f"{prefix}{key.upper()}" not in os.environ
        }
    return merged


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    yaml_config = load_yaml_config()

    # Environment variables take precedence
    return Settings(**_merge_env_over_yaml(yaml_config))


def reload_settings() -> Settings:
    """Force reload of settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()
