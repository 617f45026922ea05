"""Base domain layer - entity engine shared by every entity type."""

from .exceptions import (
    ConfigurationError,
    DomainException,
    ImmutableEntityError,
    InvalidRelationKeyError,
    RuleDefinitionError,
    SchemaError,
    UndeclaredRelationError,
)
from .schema import FIXED_PROPERTIES, EntitySchema
from .relations import RelationCollection, resolve_belongs_to, resolve_has_many
from .entity import EntityBase

__all__ = [
    # Entities
    "EntityBase",
    "EntitySchema",
    "FIXED_PROPERTIES",
    # Relations
    "RelationCollection",
    "resolve_belongs_to",
    "resolve_has_many",
    # Exceptions
    "DomainException",
    "SchemaError",
    "UndeclaredRelationError",
    "RuleDefinitionError",
    "InvalidRelationKeyError",
    "ImmutableEntityError",
    "ConfigurationError",
]
