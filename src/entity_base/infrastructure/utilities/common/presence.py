"""Blank/presence predicates used across the entity layer."""

import math
from collections.abc import Mapping
from datetime import date
from typing import Any


def is_blank(value: Any) -> bool:
    """
    Check whether a value carries no meaningful content.

    Blank values are None, False, empty or whitespace-only strings, NaN,
    empty sequences (or sequences made only of blank items), empty mappings
    and empty sets. Dates are never blank.

    Args:
        value: Value to check

    Returns:
        True if the value is blank
    """
    if value is None or value is False:
        return True

    if isinstance(value, str):
        return value.strip() == ""

    if isinstance(value, float):
        return math.isnan(value)

    if isinstance(value, (date, bool, int)):
        return False

    if isinstance(value, (list, tuple)):
        return len(value) == 0 or all(is_blank(item) for item in value)

    if isinstance(value, (set, frozenset, Mapping)):
        return len(value) == 0

    return False


def is_present(value: Any) -> bool:
    """Negation of is_blank."""
    return not is_blank(value)
