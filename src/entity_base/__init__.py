"""Entity Base - Root Package.

Immutable domain entities with typed attributes, belongs_to and has_many
relations, copy-on-write updates and declarative validation.

Key Components:
    - domain.base: entity engine, schema compilation and relation resolution
    - domain.validation: errors aggregator, rules and validation engine
    - config: configuration defaults, schemas and manager
    - helpers: structured logging setup

Usage:
    >>> class Car(EntityBase):
    ...     default_attributes = {"name": "", "price": 0}
    >>> class Person(EntityBase):
    ...     default_attributes = {"name": ""}
    ...     has_many = {"cars": Car}
    ...     validates = {"name": [required()]}
    >>> person = Person({"cars": [{"name": "Civic", "price": 90000}]})
    >>> person.validate().is_valid()
    False
"""

from ._package import PACKAGE_NAME, __version__
from .domain.base.exceptions import (
    ConfigurationError,
    DomainException,
    ImmutableEntityError,
    InvalidRelationKeyError,
    RuleDefinitionError,
    SchemaError,
    UndeclaredRelationError,
)
from .domain.base.entity import EntityBase
from .domain.base.relations import resolve_belongs_to, resolve_has_many
from .domain.validation import BASE, Errors, ValidationState, required, satisfies, validate

__package_name__ = PACKAGE_NAME

__all__ = [
    "__version__",
    # Entities
    "EntityBase",
    "resolve_belongs_to",
    "resolve_has_many",
    # Validation
    "BASE",
    "Errors",
    "ValidationState",
    "required",
    "satisfies",
    "validate",
    # Exceptions
    "DomainException",
    "SchemaError",
    "UndeclaredRelationError",
    "RuleDefinitionError",
    "InvalidRelationKeyError",
    "ImmutableEntityError",
    "ConfigurationError",
]
