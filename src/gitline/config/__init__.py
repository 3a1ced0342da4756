"""Configuration loading, schema, and defaults."""

from gitline.config.loader import ConfigError, find_config_file, load_config
from gitline.config.schema import GitlineConfig, GitStatusConfig, OutputConfig

__all__ = [
    "ConfigError",
    "GitStatusConfig",
    "GitlineConfig",
    "OutputConfig",
    "find_config_file",
    "load_config",
]
