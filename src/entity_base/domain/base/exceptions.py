"""Domain exceptions for the entity layer."""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class SchemaError(DomainException):
    """Raised when an entity type is declared or used inconsistently."""


class UndeclaredRelationError(SchemaError):
    """Raised when an operation references a relation the type does not declare."""

    def __init__(self, entity_type: str, relation_name: str, kind: str = "has_many"):
        message = f"{entity_type} does not declare a {kind} relation named '{relation_name}'"
        super().__init__(
            message,
            "UNDECLARED_RELATION",
            {"entity_type": entity_type, "relation_name": relation_name, "kind": kind},
        )
        self.entity_type = entity_type
        self.relation_name = relation_name
        self.kind = kind


class RuleDefinitionError(SchemaError):
    """Raised when a validation rule is not callable or returns an unusable result."""


class InvalidRelationKeyError(DomainException, KeyError):
    """Raised when a nested update addresses a key missing from the relation collection."""

    def __init__(self, relation_name: str, key: Any):
        message = f"Invalid relation key {key!r} for relation '{relation_name}'"
        super().__init__(
            message,
            "INVALID_RELATION_KEY",
            {"relation_name": relation_name, "key": key},
        )
        self.relation_name = relation_name
        self.key = key

    def __str__(self) -> str:
        return self.message


class ImmutableEntityError(DomainException, AttributeError):
    """Raised when code tries to assign to an entity instance in place."""

    def __init__(self, entity_type: str, name: str):
        message = f"{entity_type} is immutable; use set() or update_attributes() to change '{name}'"
        super().__init__(
            message, "IMMUTABLE_ENTITY", {"entity_type": entity_type, "name": name}
        )

    def __str__(self) -> str:
        return self.message


class ConfigurationError(DomainException):
    """Raised when there's an issue with configuration."""
