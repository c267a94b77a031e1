"""Configuration for masking defaults and logging.

Configuration is loaded from a YAML file (a top-level ``piimask:`` section)
or from ``PIIMASK_*`` environment variables, and validated with pydantic.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_VALID_LOG_FORMATS = {"json", "console"}


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(default="console", description="Log format (json or console)")

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _VALID_LOG_LEVELS:
            raise ValueError(f"level must be one of {sorted(_VALID_LOG_LEVELS)}")
        return level

    @field_validator("format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        fmt = value.lower()
        if fmt not in _VALID_LOG_FORMATS:
            raise ValueError(f"format must be one of {sorted(_VALID_LOG_FORMATS)}")
        return fmt


class MaskingConfig(BaseModel):
    """Masking defaults applied by ``MaskingEngine`` and the CLI.

    Attributes:
        phone_keep_last: Trailing phone digits left readable
        zipcode_keep_last: Trailing zip code characters left readable
        financial_keep_last: Trailing digits left readable on financial ids
        email_show_first: Leading local-part characters kept by display masking
        email_show_last: Trailing local-part characters kept by display masking
        preserve_chars: Characters ``mask_text`` never replaces
        validate_urls: Whether ``mask_url`` rejects malformed URLs
        logging: Logging configuration
    """

    phone_keep_last: int = Field(default=4, ge=0)
    zipcode_keep_last: int = Field(default=3, ge=0)
    financial_keep_last: int = Field(default=4, ge=0)
    email_show_first: int = Field(default=1, ge=0)
    email_show_last: int = Field(default=1, ge=0)
    preserve_chars: str = Field(default=" .@-")
    validate_urls: bool = Field(default=True)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_path: Path | str) -> MaskingConfig:
        """Load configuration from a YAML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                config_file=str(config_path),
            )

        try:
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}",
                config_file=str(config_path),
            ) from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                config_file=str(config_path),
            )

        section = config_data.get("piimask", {}) or {}
        try:
            config = cls(**section)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}", config_file=str(config_path)
            ) from e

        logger.debug("Loaded masking configuration from %s", config_path)
        return config

    @classmethod
    def from_env(cls) -> MaskingConfig:
        """Load configuration from environment variables."""
        data: dict[str, Any] = {}
        logging_data: dict[str, Any] = {}

        if level := os.getenv("PIIMASK_LOG_LEVEL"):
            logging_data["level"] = level
        if fmt := os.getenv("PIIMASK_LOG_FORMAT"):
            logging_data["format"] = fmt

        for field_name, env_name in (
            ("phone_keep_last", "PIIMASK_PHONE_KEEP_LAST"),
            ("zipcode_keep_last", "PIIMASK_ZIPCODE_KEEP_LAST"),
            ("financial_keep_last", "PIIMASK_FINANCIAL_KEEP_LAST"),
        ):
            if raw := os.getenv(env_name):
                try:
                    data[field_name] = int(raw)
                except ValueError as e:
                    raise ConfigurationError(
                        f"{env_name} must be an integer, got {raw!r}",
                        config_key=env_name,
                    ) from e

        if raw := os.getenv("PIIMASK_VALIDATE_URLS"):
            data["validate_urls"] = raw.lower() in {"1", "true", "yes", "on"}

        if logging_data:
            data["logging"] = logging_data

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()


# Global configuration instance
_config: MaskingConfig | None = None


def get_config() -> MaskingConfig:
    """Get the global masking configuration."""
    global _config
    if _config is None:
        _config = MaskingConfig.from_env()
    return _config


def set_config(config: MaskingConfig | None) -> None:
    """Set (or with ``None``, reset) the global masking configuration."""
    global _config
    _config = config


def load_config(config_path: Path | str | None = None) -> MaskingConfig:
    """Load and set the global configuration."""
    if config_path:
        config = MaskingConfig.from_file(config_path)
    else:
        config = MaskingConfig.from_env()
    set_config(config)
    return config
