"""Configuration management for qadd."""

from .manager import (
    DEFAULT_CONFIG,
    ENV_OVERRIDES,
    ConfigError,
    load_config,
    validate_config,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ENV_OVERRIDES",
    "ConfigError",
    "load_config",
    "validate_config",
]
