"""Decoder settings using Pydantic for type validation and configuration.

Settings come from three layers, later layers winning:
defaults, ICSDECODE_* environment variables, then an optional YAML file
passed to load_settings().
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "icsdecode.yaml"

# Streaming configuration defaults
DEFAULT_READ_CHUNK_SIZE_BYTES = 8192  # 8KB chunks for stream reading
DEFAULT_MAX_LINE_LENGTH_BYTES = 32768  # 32KB max logical line length

LOG_LEVELS = ("NOTSET", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def normalize_log_level(value: str) -> str:
    """Return the uppercase standard level name, or raise ValueError."""
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {value}")
    return level


class DecoderSettings(BaseSettings):
    """Lexer and decoder settings with environment variable support."""

    allow_extensions: bool = Field(
        default=False,
        description="Accept property/parameter names outside the registry as extensions",
    )
    skip_invalid_lines: bool = Field(
        default=False,
        description="Skip records with recoverable lexer errors instead of stopping",
    )
    read_chunk_size_bytes: int = Field(
        default=DEFAULT_READ_CHUNK_SIZE_BYTES,
        ge=1,
        le=1024 * 1024,
        description="Size of each read from the byte source",
    )
    max_line_length_bytes: int = Field(
        default=DEFAULT_MAX_LINE_LENGTH_BYTES,
        ge=1,
        description="Longest accepted unfolded name or value",
    )
    log_level: str = Field(default="INFO", description="Logging level name")
    debug: bool = Field(default=False, description="Enable debug logging for icsdecode modules")

    model_config = SettingsConfigDict(
        env_prefix="ICSDECODE_",
        case_sensitive=False,
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return normalize_log_level(value)


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    """Load a YAML mapping, treating an empty file as an empty mapping."""
    with path.open(encoding="utf-8") as f:
        loaded = yaml.safe_load(f)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        logger.warning("Config file %s parsed but top-level is not a mapping: %r", path, loaded)
        raise ValueError("Config file must contain a mapping at top level")  # noqa: TRY004
    return loaded


def load_settings(path: Optional[Union[str, Path]] = None) -> DecoderSettings:
    """Load settings from a YAML file layered over environment variables.

    Args:
        path: Optional path to the config file. Defaults to ./icsdecode.yaml.

    Returns:
        DecoderSettings instance

    Behavior:
    - If the file is missing: returns settings from defaults and environment.
    - Unknown keys in the file are ignored with a warning.
    - If the top level is not a mapping: raises ValueError.
    """
    p = Path(path) if path else Path.cwd() / DEFAULT_CONFIG_FILENAME
    logger.debug("Attempting to load settings from %s", p)
    if not p.exists():
        logger.info("Config file %s not found; using defaults", p)
        return DecoderSettings()

    raw = _load_yaml_mapping(p)
    known = set(DecoderSettings.model_fields)
    overrides: dict[str, Any] = {}
    for key, value in raw.items():
        if key in known:
            overrides[key] = value
        else:
            logger.warning("Ignoring unknown config key %r in %s", key, p)

    settings = DecoderSettings(**overrides)
    logger.info("Loaded configuration from %s", p)
    logger.debug("Configuration values: %s", settings)
    return settings


# Global settings management
_settings_instance: Optional[DecoderSettings] = None


def get_settings() -> DecoderSettings:
    """Get the global settings instance, creating it lazily if needed."""
    if globals()["_settings_instance"] is None:
        globals()["_settings_instance"] = DecoderSettings()
    return globals()["_settings_instance"]


def reset_settings() -> None:
    """Reset the global settings instance (primarily for testing)."""
    globals()["_settings_instance"] = None
