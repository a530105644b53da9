"""Configuration for the symref command-line tool."""

from settings.config import CONFIG_FILENAME, ConfigError, SymrefConfig, load_config

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "SymrefConfig",
    "load_config",
]
