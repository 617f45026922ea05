"""Common utilities consumed by the domain layer."""

from entity_base.infrastructure.utilities.common.presence import is_blank, is_present
from entity_base.infrastructure.utilities.common.string_utils import humanize_string
from entity_base.infrastructure.utilities.common.token_utils import create_unique_token

__all__ = [
    # Presence predicates
    "is_blank",
    "is_present",
    # String utilities
    "humanize_string",
    # Identity
    "create_unique_token",
]
