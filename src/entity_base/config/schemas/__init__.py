"""Configuration schemas."""

from .app_schema import AppConfig
from .entity_schema import EntityConfig
from .logging_schema import LoggingConfig

__all__ = [
    "AppConfig",
    "EntityConfig",
    "LoggingConfig",
]
