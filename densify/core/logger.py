"""
Unified logging system
Console and optional rotating file output, configured from the [logging] table
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional

from densify.config.loader import get_config

ROOT_LOGGER_NAME = "densify"


def _load_logging_config() -> Dict[str, Any]:
    """Read the [logging] table, empty on any config problem"""
    try:
        return get_config().section("logging")
    except Exception:
        # If config loading fails, use defaults
        return {}


def _init_package_logger_early():
    """Set the package logger level before any handler is attached"""
    log_level = _load_logging_config().get("level", "INFO")
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(
        getattr(logging, str(log_level).upper(), logging.INFO)
    )


_init_package_logger_early()


class LoggerManager:
    """Log manager"""

    def __init__(self):
        self._loggers: dict = {}
        self._setup_package_logger()

    def _setup_package_logger(self):
        """Attach handlers to the `densify` logger

        The root logger is left untouched.
        """
        logging_config = _load_logging_config()
        log_level = str(logging_config.get("level", "INFO"))
        logs_dir = logging_config.get("logs_dir", "")
        max_file_size = str(logging_config.get("max_file_size", "10MB"))
        backup_count = int(logging_config.get("backup_count", 5))

        package_logger = logging.getLogger(ROOT_LOGGER_NAME)
        package_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Clear existing handlers
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_format = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
        )
        console_handler.setFormatter(console_format)
        package_logger.addHandler(console_handler)

        if not logs_dir:
            return

        # Create log directory
        Path(logs_dir).expanduser().mkdir(parents=True, exist_ok=True)

        # File handler
        log_file = Path(logs_dir).expanduser() / "densify.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=self._parse_size(max_file_size),
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s"
        )
        file_handler.setFormatter(file_format)
        package_logger.addHandler(file_handler)

        # Error log file handler
        error_log_file = Path(logs_dir).expanduser() / "error.log"
        error_handler = logging.handlers.RotatingFileHandler(
            error_log_file,
            maxBytes=self._parse_size(max_file_size),
            backupCount=backup_count,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(file_format)
        package_logger.addHandler(error_handler)

    def _parse_size(self, size_str: str) -> int:
        """Parse file size string"""
        size_str = size_str.upper()
        if size_str.endswith("KB"):
            return int(size_str[:-2]) * 1024
        elif size_str.endswith("MB"):
            return int(size_str[:-2]) * 1024 * 1024
        elif size_str.endswith("GB"):
            return int(size_str[:-2]) * 1024 * 1024 * 1024
        else:
            return int(size_str)

    def get_logger(self, name: str) -> logging.Logger:
        """Get logger with specified name"""
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)
        return self._loggers[name]


# Global log manager instance (lazy initialization to avoid circular imports)
_logger_manager: Optional[LoggerManager] = None


def get_logger(name: str) -> logging.Logger:
    """Convenience function to get logger"""
    global _logger_manager

    # Lazy initialization: create instance on first call
    if _logger_manager is None:
        _logger_manager = LoggerManager()

    return _logger_manager.get_logger(name)


def setup_logging(level: Optional[str] = None):
    """Setup logging system (for initialization or reloading)

    Args:
        level: Optional level overriding the configured one (e.g. from a CLI flag)
    """
    global _logger_manager

    if _logger_manager is None:
        _logger_manager = LoggerManager()
    else:
        _logger_manager._setup_package_logger()

    if level:
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(
            getattr(logging, level.upper(), logging.INFO)
        )
