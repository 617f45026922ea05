"""Relation resolution - coerce raw input into nested entities."""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Dict, Optional, Type, TypeVar

from entity_base.helpers.logger import get_logger

if TYPE_CHECKING:
    from entity_base.domain.base.entity import EntityBase

E = TypeVar("E", bound="EntityBase")

# Ordered, identity-keyed container of nested entities
RelationCollection = Dict[Any, "EntityBase"]

logger = get_logger(__name__)


def resolve_belongs_to(target: Type[E], value: Any) -> Optional[E]:
    """
    Coerce a value into a single nested entity.

    Args:
        target: Entity type declared for the relation
        value: None, an instance of ``target`` or raw attributes

    Returns:
        None for None and other falsy scalars, the same instance when it
        already has the target type, otherwise a new ``target`` built from
        ``value`` (an empty mapping gives a child with default attributes)
    """
    if value is None or (not value and not isinstance(value, Mapping)):
        return None
    if isinstance(value, target):
        return value
    return target(value)


def resolve_has_many(target: Type[E], value: Any) -> RelationCollection:
    """
    Build an identity-keyed collection of nested entities.

    Accepts a list or tuple of items, an existing collection, or any
    mapping (its values are used and its keys ignored). Every item is
    coerced like a belongs_to value and keyed by its ``id_or_token``;
    None items are skipped and empty mappings become default children.
    When two items share an identity the later one wins.

    Args:
        target: Entity type declared for the relation
        value: Items to resolve

    Returns:
        New collection in input order
    """
    collection: RelationCollection = {}
    if not value:
        return collection

    items = value.values() if isinstance(value, Mapping) else value
    for item in items:
        entity = resolve_belongs_to(target, item)
        if entity is None:
            continue
        key = entity.id_or_token
        if key in collection:
            logger.debug(
                "Relation identity collision, keeping last entry",
                entity_type=target.__name__,
                key=key,
            )
        collection[key] = entity
    return collection
