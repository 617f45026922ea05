"""Validation engine - runs declared rules against an entity."""
from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from entity_base.domain.validation.errors import Errors
from entity_base.domain.validation.rules import ValidationState
from entity_base.helpers.logger import get_logger

if TYPE_CHECKING:
    from entity_base.domain.base.entity import EntityBase

E = TypeVar("E", bound="EntityBase")

logger = get_logger(__name__)


def validate(entity: E) -> E:
    """
    Run the entity type's rules and return a copy carrying fresh errors.

    The current errors are cloned and cleared, every rule of every
    attribute runs in declaration order with ``(value, entity)``, and each
    failing rule adds its message under the attribute. The original entity
    is left untouched; the result goes stale as soon as any field changes.

    Args:
        entity: Entity to validate

    Returns:
        New entity whose ``errors`` attribute holds the refreshed aggregator
    """
    current = entity.get("errors")
    errors = current.clone() if isinstance(current, Errors) else Errors(type(entity))
    errors.clear()

    for attr, rules in entity.validations.items():
        value = entity.get(attr)
        for rule in rules:
            state = ValidationState.coerce(rule(value, entity))
            if not state.is_valid:
                errors.add(attr, state.message)

    logger.debug(
        "Entity validated",
        entity_type=type(entity).__name__,
        token=entity.get("_token"),
        error_count=len(errors),
    )
    return entity.set("errors", errors)
