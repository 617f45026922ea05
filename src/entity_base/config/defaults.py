# src/entity_base/config/defaults.py
from enum import Enum


class LogLevel(str, Enum):
    """Log level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log rendering enumeration."""
    CONSOLE = "console"
    JSON = "json"


DEFAULT_CONFIG = {
    # Logging configuration
    "LOGGING_CONFIG": {
        "level": "${ENTITY_BASE_LOG_LEVEL:WARNING}",
        "format": "${ENTITY_BASE_LOG_FORMAT:console}",
        "logger_name": "entity_base"
    },

    # Entity behaviour
    "ENTITY_CONFIG": {
        "strict_attributes": "${ENTITY_BASE_STRICT_ATTRIBUTES:false}"
    }
}
