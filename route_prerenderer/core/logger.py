"""
Centralized logging setup for the route prerenderer.

This module provides functions to configure and obtain logger instances
throughout the package. It reads the 'logging' section of the active
`ConfigurationManager`, supporting console and rotating file handlers.

Key Functions:
- `setup_logging()`: Initializes the logging system based on external configuration.
                     Should be called once by the host at startup.
- `get_logger(name)`: Returns a logger instance for the specified module name.
                      Never configures handlers; until the host calls
                      `setup_logging()` (or configures logging itself), records
                      go to the package's NullHandler.
"""
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Dict, Any

from route_prerenderer.core.config import ConfigurationManager

# PROJECT_ROOT: Used to resolve relative log file paths from the configuration.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logging_initialized = False

PACKAGE_LOGGER = "route_prerenderer"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def setup_logging(config: Optional[ConfigurationManager] = None) -> None:
    """
    Sets up logging using the 'logging' section of the given configuration.

    Falls back to `logging.basicConfig` when no configuration is available or
    the section is missing. Calling it again after a successful setup is a no-op.

    Args:
        config (Optional[ConfigurationManager]): Configuration to read. If None,
            the global `config_manager` is used.
    """
    global _logging_initialized
    if _logging_initialized:
        logging.getLogger(__name__).debug("setup_logging: already initialized.")
        return

    current_config = config
    if current_config is None:
        from route_prerenderer.core.config import config_manager as global_config_manager
        current_config = global_config_manager

    log_settings: Optional[Dict[str, Any]] = current_config.get("logging")

    if not log_settings:
        logging.basicConfig(level=logging.INFO, format=DEFAULT_FORMAT)
        logging.warning("Logging setup: 'logging' section not found in configuration. Using basicConfig.")
        _logging_initialized = True
        return

    log_level_str = str(log_settings.get("level", "INFO")).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    log_format = log_settings.get("format", DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    # Drop handlers installed by basicConfig or a previous setup.
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)
    formatter = logging.Formatter(log_format)

    handlers = log_settings.get("handlers", {}) or {}

    console_handler_settings = handlers.get("console", {}) or {}
    if console_handler_settings.get("enabled", False):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    file_handler_settings = handlers.get("file", {}) or {}
    if file_handler_settings.get("enabled", False):
        log_file_path = file_handler_settings.get("path", "logs/route_prerenderer.log")
        if not os.path.isabs(log_file_path):
            log_file_path = os.path.join(PROJECT_ROOT, log_file_path)

        max_bytes = int(file_handler_settings.get("max_bytes", 10 * 1024 * 1024))
        backup_count = int(file_handler_settings.get("backup_count", 5))

        try:
            os.makedirs(os.path.dirname(log_file_path), exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=log_file_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            logging.error(f"Logging setup: Failed to configure file logging at '{log_file_path}': {e}. File logging disabled.", exc_info=True)

    _logging_initialized = True
    logging.info(f"Logging system initialized. Level: {log_level_str}.")


def reset_logging() -> None:
    """Allows `setup_logging` to run again (used when the configuration is reloaded)."""
    global _logging_initialized
    _logging_initialized = False


def get_logger(name: str) -> logging.Logger:
    """
    Retrieves a logger instance with the specified name.

    Safe to call at import time: it leaves the root logger and its handlers
    alone. Only an explicit `setup_logging()` call changes root logging.

    Args:
        name (str): The name for the logger, typically `__name__` of the calling module.
    """
    return logging.getLogger(name)
