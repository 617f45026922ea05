"""Unified configuration management for the entity layer."""
from __future__ import annotations

import copy
import os
import threading
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from entity_base.config.defaults import DEFAULT_CONFIG
from entity_base.config.schemas import AppConfig, EntityConfig, LoggingConfig
from entity_base.domain.base.exceptions import ConfigurationError

T = TypeVar("T")


class ConfigurationManager:
    """
    Configuration manager that serves as the single source of truth.

    Configuration is assembled from DEFAULT_CONFIG, optional user overrides
    and ``${VAR:default}`` environment placeholders, then validated into a
    typed AppConfig. Loading is lazy and protected by a lock.
    """

    def __init__(self, user_config: Optional[Dict[str, Any]] = None):
        """Initialize configuration manager with lazy loading."""
        self._lock = threading.RLock()
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._app_config: Optional[AppConfig] = None
        self._config_cache: Dict[Type, Any] = {}
        if user_config:
            self.update_config(user_config)

    @property
    def app_config(self) -> AppConfig:
        """Lazy load application configuration."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    self._app_config = self._load_app_config()
        return self._app_config

    def _load_app_config(self) -> AppConfig:
        """Validate the interpolated configuration."""
        try:
            return AppConfig.from_dict(self.get_config())
        except PydanticValidationError as e:
            raise ConfigurationError(
                "Invalid entity_base configuration",
                "INVALID_CONFIGURATION",
                {"errors": e.errors()},
            ) from e

    def _interpolate_values(self, config: Any) -> Any:
        """Interpolate variables in configuration values."""
        if isinstance(config, str):
            if config.startswith("${") and config.endswith("}"):
                var_name = config[2:-1]
                if ":" in var_name:
                    var_name, default = var_name.split(":", 1)
                    return os.environ.get(var_name, default)
                return os.environ.get(var_name, config)
            return config
        elif isinstance(config, dict):
            return {k: self._interpolate_values(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._interpolate_values(v) for v in config]
        return config

    def update_config(self, user_config: Dict[str, Any]) -> None:
        """
        Update configuration with user-provided values.

        Args:
            user_config: Partial configuration using the DEFAULT_CONFIG layout
        """
        def deep_update(target: Dict[str, Any], source: Dict[str, Any]) -> None:
            for key, value in source.items():
                if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                    deep_update(target[key], value)
                else:
                    target[key] = value

        with self._lock:
            deep_update(self._config, user_config)
            self._app_config = None
            self._config_cache.clear()

    def get_config(self) -> Dict[str, Any]:
        """
        Get the complete configuration with all interpolations applied.

        Returns:
            Dict containing the complete configuration
        """
        return self._interpolate_values(self._config)

    def get_typed(self, config_type: Type[T]) -> T:
        """Get typed configuration with caching."""
        if config_type not in self._config_cache:
            with self._lock:
                if config_type not in self._config_cache:
                    self._config_cache[config_type] = self._create_typed_config(config_type)
        return self._config_cache[config_type]

    def _create_typed_config(self, config_type: Type[T]) -> T:
        """Create typed configuration instance."""
        type_mapping = {
            LoggingConfig: "logging",
            EntityConfig: "entity",
        }

        if config_type in type_mapping:
            return getattr(self.app_config, type_mapping[config_type])
        raise ConfigurationError(f"Unknown configuration type: {config_type.__name__}")

    def reload(self) -> None:
        """Reload configuration from sources."""
        with self._lock:
            self._app_config = None
            self._config_cache.clear()


_manager: Optional[ConfigurationManager] = None
_manager_lock = threading.Lock()


def get_config_manager() -> ConfigurationManager:
    """Return the process-wide configuration manager."""
    global _manager
    if _manager is None:
        with _manager_lock:
            # Double-checked locking pattern
            if _manager is None:
                _manager = ConfigurationManager()
    return _manager
