"""Configuration loading, schema, and defaults."""

from spatch.config.loader import ConfigError, load_config, validate_config
from spatch.config.schema import SpatchConfig

__all__ = [
    "ConfigError",
    "SpatchConfig",
    "load_config",
    "validate_config",
]
