"""Validation subsystem: errors aggregation, rules and the validation engine."""

from entity_base.domain.validation.errors import BASE, Errors
from entity_base.domain.validation.rules import ValidationState, required, satisfies
from entity_base.domain.validation.validator import validate

__all__ = [
    "BASE",
    "Errors",
    "ValidationState",
    "required",
    "satisfies",
    "validate",
]
