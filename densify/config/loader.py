"""
Configuration loader
Loads the packaged default TOML configuration and merges an optional user file on top
"""

import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml

CONFIG_ENV_VAR = "DENSIFY_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.toml"


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into a copy of base, recursing into nested tables"""
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_toml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return toml.load(f)


class ConfigLoader:
    """Holds the merged configuration for one process"""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Args:
            config_path: User config file. Falls back to the DENSIFY_CONFIG
                environment variable, then to the packaged defaults only.
        """
        if config_path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            config_path = env_path or None

        self.config_path: Optional[Path] = (
            Path(config_path).expanduser() if config_path else None
        )
        self._config: Dict[str, Any] = {}
        self.load()

    def load(self) -> Dict[str, Any]:
        """(Re)load defaults and user overrides"""
        config = _read_toml(DEFAULT_CONFIG_PATH)
        if self.config_path is not None:
            config = _deep_merge(config, _read_toml(self.config_path))
        self._config = config
        return self._config

    @property
    def data(self) -> Dict[str, Any]:
        return self._config

    def section(self, name: str) -> Dict[str, Any]:
        """Return a top-level table, empty when missing"""
        value = self._config.get(name, {})
        return value if isinstance(value, dict) else {}


_config_loader: Optional[ConfigLoader] = None


def get_config(
    config_path: Optional[Union[str, Path]] = None, reload: bool = False
) -> ConfigLoader:
    """Get the process-wide config loader

    Passing a path (or reload=True) replaces the cached instance.
    """
    global _config_loader

    if _config_loader is None or reload or config_path is not None:
        _config_loader = ConfigLoader(config_path)

    return _config_loader
