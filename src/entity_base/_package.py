"""Package metadata and naming constants."""

PACKAGE_NAME = "entity-base"
__version__ = "1.0.0"
