"""Helper utilities."""

from entity_base.helpers.logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
