from .config import get_config, config_manager, ConfigurationManager, ConfigError, ConfigFileNotFoundError, InvalidYamlError
from .exceptions import (
    PrerendererError,
    ConfigurationError,
    ComponentError,
    RendererError,
    InitializationError,
    NavigationError,
)
from .logger import setup_logging, get_logger

__all__ = [
    # Config
    "get_config",
    "config_manager",
    "ConfigurationManager",
    "ConfigError",
    "ConfigFileNotFoundError",
    "InvalidYamlError",
    # Logger
    "setup_logging",
    "get_logger",
    # Exceptions
    "PrerendererError",
    "ConfigurationError",
    "ComponentError",
    "RendererError",
    "InitializationError",
    "NavigationError",
]
