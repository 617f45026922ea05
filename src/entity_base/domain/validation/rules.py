"""Validation rule results and built-in rule factories."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

from entity_base.domain.base.exceptions import RuleDefinitionError
from entity_base.infrastructure.utilities.common.presence import is_blank

Rule = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class ValidationState:
    """Outcome of a single rule invocation."""
    is_valid: bool
    message: str = ""

    @classmethod
    def coerce(cls, result: Any) -> ValidationState:
        """Accept a ValidationState or a mapping with is_valid/isValid and message."""
        if isinstance(result, cls):
            return result
        if isinstance(result, Mapping):
            if "is_valid" in result:
                is_valid = result["is_valid"]
            elif "isValid" in result:
                is_valid = result["isValid"]
            else:
                raise RuleDefinitionError(
                    f"Rule result {result!r} has no is_valid entry", "INVALID_RULE_RESULT"
                )
            return cls(is_valid=bool(is_valid), message=result.get("message", ""))
        raise RuleDefinitionError(
            f"Rule returned {type(result).__name__}, expected ValidationState or mapping",
            "INVALID_RULE_RESULT",
        )


def required(message: str = "is required") -> Rule:
    """Rule failing for blank values."""
    def rule(value: Any, entity: Any) -> ValidationState:
        return ValidationState(is_valid=not is_blank(value), message=message)

    rule.__name__ = "required"
    return rule


def satisfies(predicate: Callable[[Any, Any], bool], message: str) -> Rule:
    """Rule wrapping a ``(value, entity) -> bool`` predicate."""
    def rule(value: Any, entity: Any) -> ValidationState:
        return ValidationState(is_valid=bool(predicate(value, entity)), message=message)

    rule.__name__ = getattr(predicate, "__name__", "satisfies")
    return rule
