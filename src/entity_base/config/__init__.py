"""Configuration package with clean public API."""

from .defaults import DEFAULT_CONFIG, LogFormat, LogLevel
from .schemas import AppConfig, EntityConfig, LoggingConfig
from .manager import ConfigurationManager, get_config_manager

__all__ = [
    # Defaults
    'DEFAULT_CONFIG',
    'LogLevel',
    'LogFormat',

    # Typed configuration
    'AppConfig',
    'EntityConfig',
    'LoggingConfig',

    # Configuration management
    'ConfigurationManager',
    'get_config_manager',
]
