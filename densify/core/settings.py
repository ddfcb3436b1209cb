"""
Settings access
Dotted-key lookups over the merged TOML configuration and typed section views
"""

from pathlib import Path
from typing import Any, Optional, Union

from densify.config.loader import ConfigLoader, get_config
from densify.core.logger import get_logger
from densify.models.requests import ResizeConfig

logger = get_logger(__name__)


class Settings:
    """Read-only view over the loaded configuration"""

    def __init__(self, loader: ConfigLoader):
        self._loader = loader

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as 'resize.max_workers'"""
        node: Any = self._loader.data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_resize_config(self, **overrides: Any) -> ResizeConfig:
        """Validated [resize] section

        Args:
            **overrides: Values taking precedence over the file (None values are ignored)

        Raises:
            pydantic.ValidationError: if the configuration is invalid
        """
        values = dict(self._loader.section("resize"))
        values.update({key: value for key, value in overrides.items() if value is not None})
        config = ResizeConfig(**values)
        logger.debug(f"Resize config: {config.model_dump(by_alias=False)}")
        return config


_settings: Optional[Settings] = None


def get_settings(
    config_path: Optional[Union[str, Path]] = None, reload: bool = False
) -> Settings:
    """Get or create the global settings instance"""
    global _settings

    if _settings is None or reload or config_path is not None:
        _settings = Settings(get_config(config_path, reload=reload))

    return _settings
