"""Base domain entity - immutable, copy-on-write attribute/relation container."""
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable, ClassVar, Dict, List, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from entity_base.config.manager import get_config_manager
from entity_base.config.schemas import EntityConfig
from entity_base.domain.base.exceptions import (
    ImmutableEntityError,
    InvalidRelationKeyError,
    SchemaError,
    UndeclaredRelationError,
)
from entity_base.domain.base.relations import RelationCollection, resolve_belongs_to, resolve_has_many
from entity_base.domain.base.schema import EntitySchema, build_schema
from entity_base.domain.validation.errors import BASE, Errors
from entity_base.domain.validation.validator import validate as run_validation
from entity_base.helpers.logger import get_logger
from entity_base.infrastructure.utilities.common.presence import is_blank, is_present
from entity_base.infrastructure.utilities.common.string_utils import humanize_string
from entity_base.infrastructure.utilities.common.token_utils import create_unique_token

T = TypeVar("T", bound="EntityBase")

_MISSING = object()

logger = get_logger(__name__)


def _field_accessor(field: str) -> property:
    return property(lambda self: self.get(field), doc=f"Read access to '{field}'.")


class EntityBase(BaseModel):
    """
    Base class for all immutable domain entities.

    Subclasses declare their schema with class attributes::

        class Person(EntityBase):
            default_attributes = {"name": "", "age": 0}
            has_many = {"cars": Car}
            validates = {"name": [required()]}

    Instances are frozen models. ``set``, ``update_attributes`` and the
    nested helpers return copies that share every unaffected attribute
    map, relation and child with the original.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    attribute_map: Dict[str, Any] = Field(default_factory=dict)
    relation_map: Dict[str, Any] = Field(default_factory=dict)

    default_attributes: ClassVar[Dict[str, Any]] = {}
    primary_key: ClassVar[str] = "id"
    belongs_to: ClassVar[Dict[str, Type["EntityBase"]]] = {}
    has_many: ClassVar[Dict[str, Type["EntityBase"]]] = {}
    validates: ClassVar[Dict[str, Sequence[Callable[[Any, Any], Any]]]] = {}
    attribute_names: ClassVar[Dict[str, str]] = {}
    strict_attributes: ClassVar[Optional[bool]] = None

    _schema: ClassVar[Optional[EntitySchema]] = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        cls._schema = build_schema(cls, EntityBase)

        # Accessors are generated once per type, never per instance
        for field in cls._schema.accessor_fields:
            if not hasattr(cls, field):
                setattr(cls, field, _field_accessor(field))

    def __init__(self, attributes: Optional[Mapping] = None, **kwargs: Any):
        raw = dict(attributes) if is_present(attributes) else {}
        raw.update(kwargs)

        schema = self.entity_schema()
        if self._strict():
            unknown = [key for key in raw if not schema.is_declared(key)]
            if unknown:
                raise SchemaError(
                    f"Unknown attributes for {schema.name}: {unknown}",
                    "UNKNOWN_ATTRIBUTES",
                    {"entity_type": schema.name, "fields": unknown},
                )

        data = {**schema.default_properties, **raw}
        data["_token"] = create_unique_token()
        data["_created_at"] = data.get("_created_at") or datetime.now(timezone.utc)
        data["errors"] = Errors(type(self))

        attribute_map: Dict[str, Any] = {}
        relation_map: Dict[str, Any] = {}
        for key, value in data.items():
            if schema.is_belongs_to(key):
                relation_map[key] = resolve_belongs_to(schema.belongs_to[key], value)
            elif schema.is_has_many(key):
                relation_map[key] = resolve_has_many(schema.has_many[key], value)
            else:
                attribute_map[key] = value

        super().__init__(attribute_map=attribute_map, relation_map=relation_map)

    def _copy_with(self: T, **update: Any) -> T:
        """Copy sharing every map not named in ``update``."""
        return self.model_copy(update=update)

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except ValidationError as e:
            raise ImmutableEntityError(type(self).__name__, name) from e

    def __delattr__(self, name: str) -> None:
        try:
            super().__delattr__(name)
        except ValidationError as e:
            raise ImmutableEntityError(type(self).__name__, name) from e

    def __hash__(self) -> int:
        return hash((type(self), self.get("_token")))

    # -- schema -----------------------------------------------------------

    @classmethod
    def entity_schema(cls) -> EntitySchema:
        if cls._schema is None:
            raise SchemaError(
                "EntityBase must be subclassed to declare an entity type",
                "ABSTRACT_ENTITY",
            )
        return cls._schema

    @classmethod
    def default_properties(cls) -> Dict[str, Any]:
        return cls.entity_schema().default_properties

    @classmethod
    def human_attribute_name(cls, attr: str) -> str:
        """Display label of an attribute; empty for the ``base`` bucket."""
        if attr == BASE:
            return ""
        return cls.attribute_names.get(attr) or humanize_string(str(attr))

    @classmethod
    def _strict(cls) -> bool:
        strict = cls.entity_schema().strict_attributes
        if strict is None:
            strict = get_config_manager().get_typed(EntityConfig).strict_attributes
        return strict

    @property
    def belongs_to_keys(self) -> List[str]:
        return list(self.entity_schema().belongs_to)

    @property
    def has_many_keys(self) -> List[str]:
        return list(self.entity_schema().has_many)

    @property
    def validations(self) -> Dict[str, Tuple[Callable[[Any, Any], Any], ...]]:
        return self.entity_schema().validates

    def is_belongs_to(self, key: str) -> bool:
        return self.entity_schema().is_belongs_to(key)

    def is_has_many(self, key: str) -> bool:
        return self.entity_schema().is_has_many(key)

    # -- identity ---------------------------------------------------------

    @property
    def entity_id(self) -> Any:
        return self.get(self.entity_schema().primary_key)

    @property
    def id_or_token(self) -> Any:
        """Primary key when present, otherwise the session-unique token."""
        entity_id = self.entity_id
        if is_present(entity_id):
            return entity_id
        return self.get("_token")

    @property
    def errors(self) -> Errors:
        return self.get("errors")

    def is_new_entity(self) -> bool:
        return is_blank(self.entity_id)

    def is_persisted(self) -> bool:
        return not self.is_new_entity()

    # -- reading ----------------------------------------------------------

    def get(self, attr: str) -> Any:
        """Relation value for declared relations, attribute value otherwise, None if unknown."""
        if self.entity_schema().is_relation(attr):
            return self.relation_map.get(attr)
        return self.attribute_map.get(attr)

    def array(self, relation_name: str) -> List["EntityBase"]:
        """Children of a has_many relation in collection order."""
        self._require_has_many(relation_name)
        return list((self.relation_map.get(relation_name) or {}).values())

    # -- copy-on-write updates --------------------------------------------

    def set(self: T, key: str, value: Any) -> T:
        """
        Return an instance with one field replaced.

        Setting an ordinary attribute to its current value returns this very
        instance. Relation fields are always resolved again and always give a
        new instance.
        """
        schema = self.entity_schema()

        if schema.is_belongs_to(key):
            relations = {**self.relation_map, key: resolve_belongs_to(schema.belongs_to[key], value)}
            return self._copy_with(relation_map=relations)

        if schema.is_has_many(key):
            relations = {**self.relation_map, key: resolve_has_many(schema.has_many[key], value)}
            return self._copy_with(relation_map=relations)

        current = self.attribute_map.get(key, _MISSING)
        if current is value or (type(current) is type(value) and current == value):
            return self

        if current is _MISSING and not schema.is_declared(key) and self._strict():
            raise SchemaError(
                f"Unknown attribute for {schema.name}: {key}",
                "UNKNOWN_ATTRIBUTES",
                {"entity_type": schema.name, "fields": [key]},
            )

        return self._copy_with(attribute_map={**self.attribute_map, key: value})

    def update_attributes(self: T, patch: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> T:
        """Apply ``set`` for every key of the patch, in order."""
        changes = {**(patch or {}), **kwargs}
        updated = self
        for key, value in changes.items():
            updated = updated.set(key, value)
        return updated

    def add_nested(
        self: T, relation_name: str, attrs: Optional[Mapping[str, Any]] = None
    ) -> Tuple[T, "EntityBase"]:
        """
        Append a new child to a has_many relation.

        Returns:
            (new parent, new child)
        """
        target = self._require_has_many(relation_name)
        child = attrs if isinstance(attrs, target) else target(attrs)

        collection = dict(self._collection(relation_name))
        collection[child.id_or_token] = child

        logger.debug(
            "Nested entity added",
            entity_type=type(self).__name__,
            relation=relation_name,
            key=child.id_or_token,
        )
        return self._with_collection(relation_name, collection), child

    def update_nested(
        self: T, relation_name: str, key: Any, patch: Optional[Mapping[str, Any]] = None
    ) -> Tuple[T, "EntityBase"]:
        """
        Patch the child stored under ``key`` in a has_many relation.

        The child stays under the same key even if the patch changes its
        identity. A blank patch returns this instance and the current child.

        Returns:
            (new parent, updated child)

        Raises:
            InvalidRelationKeyError: If ``key`` is not in the collection
        """
        self._require_has_many(relation_name)
        collection = self._collection(relation_name)

        if key not in collection:
            logger.warning(
                "Invalid relation key",
                entity_type=type(self).__name__,
                relation=relation_name,
                key=key,
            )
            raise InvalidRelationKeyError(relation_name, key)

        child = collection[key]
        if is_blank(patch):
            return self, child

        updated_child = child.update_attributes(patch)
        new_collection = dict(collection)
        new_collection[key] = updated_child

        return self._with_collection(relation_name, new_collection), updated_child

    def update_many_nested(
        self: T,
        relation_name: str,
        patch: Optional[Mapping[str, Any]] = None,
        keys: Optional[Sequence[Any]] = None,
    ) -> Tuple[T, List["EntityBase"]]:
        """
        Patch every child of a has_many relation, or only those whose
        ``id_or_token`` is listed in ``keys``.

        Returns:
            (new parent, changed children in collection order)
        """
        self._require_has_many(relation_name)
        if is_blank(patch):
            return self, []

        select_all = is_blank(keys)
        new_collection: RelationCollection = {}
        changed: List["EntityBase"] = []

        for key, child in self._collection(relation_name).items():
            if select_all or child.id_or_token in keys:
                child = child.update_attributes(patch)
                changed.append(child)
            new_collection[key] = child

        logger.debug(
            "Nested entities updated",
            entity_type=type(self).__name__,
            relation=relation_name,
            changed=len(changed),
        )
        return self._with_collection(relation_name, new_collection), changed

    def _require_has_many(self, relation_name: str) -> Type["EntityBase"]:
        schema = self.entity_schema()
        if not schema.is_has_many(relation_name):
            raise UndeclaredRelationError(schema.name, relation_name, "has_many")
        return schema.has_many[relation_name]

    def _collection(self, relation_name: str) -> RelationCollection:
        return self.relation_map.get(relation_name) or {}

    def _with_collection(self: T, relation_name: str, collection: RelationCollection) -> T:
        return self._copy_with(relation_map={**self.relation_map, relation_name: collection})

    # -- validation -------------------------------------------------------

    def validate(self: T) -> T:
        """Run the declared rules; returns a new instance carrying fresh errors."""
        return run_validation(self)

    def is_valid(self) -> bool:
        errors = self.get("errors")
        return errors is None or errors.is_empty()

    # -- serialization ----------------------------------------------------

    def to_object(self) -> Dict[str, Any]:
        """Attributes and relations, one level deep."""
        return {**self.attribute_map, **self.relation_map}

    def to_params(self) -> Dict[str, Any]:
        """Attributes plus recursively flattened relations."""
        params = dict(self.attribute_map)
        for key, relation in self.relation_map.items():
            if self.is_has_many(key):
                params[key] = [child.to_params() for child in relation.values()]
            else:
                params[key] = relation.to_params() if relation is not None else None
        return params

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id_or_token={self.id_or_token!r}>"
