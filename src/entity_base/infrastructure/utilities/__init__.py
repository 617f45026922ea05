"""Infrastructure utilities."""

from entity_base.infrastructure.utilities.common import (
    create_unique_token,
    humanize_string,
    is_blank,
    is_present,
)

__all__ = [
    "is_blank",
    "is_present",
    "humanize_string",
    "create_unique_token",
]
