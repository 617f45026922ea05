"""Main application configuration schema."""

from typing import Any, Dict

from pydantic import BaseModel, Field

from .entity_schema import EntityConfig
from .logging_schema import LoggingConfig


class AppConfig(BaseModel):
    """Application configuration."""

    logging: LoggingConfig = Field(default_factory=lambda: LoggingConfig())
    entity: EntityConfig = Field(default_factory=lambda: EntityConfig())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create configuration from the raw DEFAULT_CONFIG layout."""
        return cls(
            logging=LoggingConfig(**data.get("LOGGING_CONFIG", {})),
            entity=EntityConfig(**data.get("ENTITY_CONFIG", {})),
        )
