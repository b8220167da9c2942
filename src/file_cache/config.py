"""
Configuration management for the file cache service.

Loads configuration from YAML with explicit values for every setting.
Only `storage.path` may be `null`, in which case the store falls back to
the environment variable named by `storage.env_var`, then to the
platform temporary directory.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from file_cache.services.content_store import StoreOptions


class ServiceConfig(BaseModel):
    """Service identity configuration."""

    model_config = ConfigDict(extra="forbid")

    name: str
    version: str


class StorageConfig(BaseModel):
    """Content store configuration."""

    model_config = ConfigDict(extra="forbid")

    path: str | None
    """Root directory of the store. Null defers to env_var, then the temp directory."""

    env_var: str
    """Environment variable consulted when path is null."""

    chunk_size: int = Field(gt=0)
    """Bytes read per iteration while hashing."""

    content_type: str
    """Media type served for stored files."""

    @field_validator("path")
    @classmethod
    def _reject_blank_path(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("storage.path must be null or a non-empty path")
        return value

    def to_store_options(self) -> StoreOptions:
        """Build the options a ContentStore is constructed with."""
        return StoreOptions(root_dir=self.path, env_var=self.env_var, chunk_size=self.chunk_size)


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    model_config = ConfigDict(extra="forbid")

    host: str
    port: int


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: str
    format: str


class Settings(BaseModel):
    """
    Root configuration container.

    All sections are REQUIRED. Missing fields cause immediate startup failure.

    Usage:
        from file_cache.config import get_settings
        settings = get_settings()
    """

    model_config = ConfigDict(extra="forbid")

    service: ServiceConfig
    storage: StorageConfig
    server: ServerConfig
    logging: LoggingConfig


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""

    pass


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """
    Load and parse YAML configuration file.

    Args:
        config_path: Path to config.yaml

    Returns:
        Parsed configuration dictionary

    Raises:
        ConfigurationError: If file is missing, empty, or invalid
    """
    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}\n"
            f"Expected location: {config_path.absolute()}\n"
            f"Create the file or set CONFIG_PATH environment variable."
        )

    try:
        with config_path.open() as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if config is None:
        raise ConfigurationError(
            f"Configuration file is empty: {config_path}\n"
            f"All configuration values must be explicitly specified."
        )

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Configuration must be a YAML mapping, got {type(config).__name__}"
        )

    return config


def get_config_path() -> Path:
    """
    Determine configuration file path.

    Uses CONFIG_PATH environment variable if set, otherwise defaults
    to ./config.yaml relative to working directory.
    """
    config_path_str = os.environ.get("CONFIG_PATH")
    if config_path_str is None:
        config_path_str = "config.yaml"
    return Path(config_path_str)


@lru_cache
def get_settings() -> Settings:
    """
    Load and validate configuration.

    Cached to ensure single instance across application.

    Raises:
        ConfigurationError: Config file missing, invalid, or failing validation
    """
    yaml_config = load_yaml_config(get_config_path())
    try:
        return Settings(**yaml_config)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e}\n"
            f"All configuration values must be explicitly specified."
        ) from e


def clear_settings_cache() -> None:
    """Clear the settings cache. Used in testing."""
    get_settings.cache_clear()
