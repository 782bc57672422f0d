"""Configuration module."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    ParserSettings,
    clear_settings_cache,
    get_settings,
    load_config_file,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ParserSettings",
    "get_settings",
    "clear_settings_cache",
    "load_config_file",
]
