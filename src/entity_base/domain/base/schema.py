"""Entity type schema - the field-access table compiled once per entity type."""
from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from entity_base.domain.base.exceptions import RuleDefinitionError, SchemaError

# Names of the model fields holding the attribute and relation maps
RESERVED_FIELDS = frozenset({"attribute_map", "relation_map"})

# Metadata every entity carries besides its declared attributes
FIXED_PROPERTIES: Dict[str, Any] = {
    "_token": None,
    "_is_checked": False,
    "_destroy": False,
    "_created_at": None,
    "errors": None,
    "id": None,
    "updated_at": None,
    "created_at": None,
}


class EntitySchema(BaseModel):
    """Immutable description of an entity type's fields and relations."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    primary_key: str = "id"
    default_attributes: Dict[str, Any] = Field(default_factory=dict)
    belongs_to: Dict[str, Any] = Field(default_factory=dict)
    has_many: Dict[str, Any] = Field(default_factory=dict)
    validates: Dict[str, Tuple[Callable[..., Any], ...]] = Field(default_factory=dict)
    attribute_names: Dict[str, str] = Field(default_factory=dict)
    strict_attributes: Optional[bool] = None

    @field_validator("primary_key")
    @classmethod
    def validate_primary_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("primary_key must be a non-empty field name")
        return v

    @field_validator("validates", mode="before")
    @classmethod
    def validate_rules(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        normalized = {}
        for attr, rules in v.items():
            if callable(rules):
                rules = (rules,)
            for rule in rules:
                if not callable(rule):
                    raise RuleDefinitionError(
                        f"Validation rule {rule!r} for '{attr}' is not callable",
                        "INVALID_RULE",
                        {"attribute": attr},
                    )
            normalized[attr] = tuple(rules)
        return normalized

    @model_validator(mode="after")
    def validate_relations(self) -> EntitySchema:
        overlap = set(self.belongs_to) & set(self.has_many)
        if overlap:
            raise ValueError(
                f"Fields declared as both belongs_to and has_many: {sorted(overlap)}"
            )
        reserved = RESERVED_FIELDS & (set(self.default_attributes) | set(self.relation_names))
        if reserved:
            raise ValueError(f"Field names reserved by the entity container: {sorted(reserved)}")
        return self

    @property
    def relation_names(self) -> Tuple[str, ...]:
        return tuple(self.belongs_to) + tuple(self.has_many)

    @property
    def default_properties(self) -> Dict[str, Any]:
        """Fixed metadata, primary key, relations and declared defaults, in that order."""
        properties = dict(FIXED_PROPERTIES)
        properties.setdefault(self.primary_key, None)
        for relation in self.relation_names:
            properties[relation] = None
        properties.update(self.default_attributes)
        return properties

    @property
    def accessor_fields(self) -> Tuple[str, ...]:
        """Fields exposed as read properties on the entity type."""
        fields = list(self.default_attributes)
        fields.extend(name for name in self.relation_names if name not in fields)
        return tuple(fields)

    def is_belongs_to(self, key: str) -> bool:
        return key in self.belongs_to

    def is_has_many(self, key: str) -> bool:
        return key in self.has_many

    def is_relation(self, key: str) -> bool:
        return key in self.belongs_to or key in self.has_many

    def is_declared(self, key: str) -> bool:
        return key in FIXED_PROPERTIES or key == self.primary_key or \
            key in self.default_attributes or self.is_relation(key)


def build_schema(entity_type: type, base_class: type) -> EntitySchema:
    """
    Compile the class-level declarations of an entity type.

    Args:
        entity_type: The entity subclass being declared
        base_class: Root entity class that relation targets must derive from

    Returns:
        Frozen schema for the entity type

    Raises:
        SchemaError: If the declarations are inconsistent
    """
    for kind in ("belongs_to", "has_many"):
        for field, target in (getattr(entity_type, kind, None) or {}).items():
            if not (isinstance(target, type) and issubclass(target, base_class)):
                raise SchemaError(
                    f"{entity_type.__name__}.{kind}['{field}'] must be a "
                    f"{base_class.__name__} subclass, got {target!r}",
                    "INVALID_RELATION_TARGET",
                    {"entity_type": entity_type.__name__, "field": field, "kind": kind},
                )

    try:
        return EntitySchema(
            name=entity_type.__name__,
            primary_key=entity_type.primary_key,
            default_attributes=entity_type.default_attributes or {},
            belongs_to=entity_type.belongs_to or {},
            has_many=entity_type.has_many or {},
            validates=entity_type.validates or {},
            attribute_names=entity_type.attribute_names or {},
            strict_attributes=entity_type.strict_attributes,
        )
    except ValidationError as e:
        raise SchemaError(
            f"Invalid declaration for entity type {entity_type.__name__}",
            "INVALID_ENTITY_SCHEMA",
            {"entity_type": entity_type.__name__, "errors": e.errors()},
        ) from e
