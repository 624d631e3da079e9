"""Configuration management for Wikifeeds."""

from .loader import DEFAULT_CONFIG_PATH, Config, load_config, save_config
from .models import (
    ConfigModel,
    MostReadConfig,
    SiteInfoCacheConfig,
    UpstreamConfig,
    default_deny_list,
)

__all__ = [
    "Config",
    "ConfigModel",
    "DEFAULT_CONFIG_PATH",
    "MostReadConfig",
    "SiteInfoCacheConfig",
    "UpstreamConfig",
    "default_deny_list",
    "load_config",
    "save_config",
]
