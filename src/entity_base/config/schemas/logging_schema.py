"""Logging configuration schema."""

from pydantic import BaseModel, Field, field_validator

from entity_base.config.defaults import LogFormat, LogLevel


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.WARNING, description="Minimum log level")
    format: LogFormat = Field(LogFormat.CONSOLE, description="Renderer used by structlog")
    logger_name: str = Field("entity_base", description="Name of the package logger")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("format", mode="before")
    @classmethod
    def normalize_format(cls, v):
        """Accept uppercase format names."""
        if isinstance(v, str):
            return v.lower()
        return v
