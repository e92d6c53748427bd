"""
Configuration for BootstrapKit.
"""

from bootstrapkit.config.settings import (
    DEFAULT_CONFIG_FILE,
    BootstrapConfig,
    load_config,
    load_post_settings,
    load_yaml_config,
    parse_tags,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "BootstrapConfig",
    "load_config",
    "load_post_settings",
    "load_yaml_config",
    "parse_tags",
]
