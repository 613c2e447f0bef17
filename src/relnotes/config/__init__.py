"""Configuration loading, schema, and defaults."""

from relnotes.config.loader import CONFIG_FILENAME, ConfigError, load_config
from relnotes.config.schema import RelnotesConfig

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "RelnotesConfig",
    "load_config",
]
