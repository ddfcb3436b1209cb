"""
Configuration package
TOML defaults shipped with densify plus user overrides
"""

from .loader import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH, ConfigLoader, get_config

__all__ = ["CONFIG_ENV_VAR", "DEFAULT_CONFIG_PATH", "ConfigLoader", "get_config"]
