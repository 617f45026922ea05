"""String utility functions."""

import re

_SEPARATORS = re.compile(r"[_\-]+")
_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_WHITESPACE = re.compile(r"\s+")


def humanize_string(text: str = "") -> str:
    """
    Turn an identifier into a display string.

    Underscores and hyphens become spaces, camelCase boundaries are split,
    whitespace is collapsed and the first character is capitalized.

    Args:
        text: Identifier or free text

    Returns:
        Humanized string
    """
    result = _SEPARATORS.sub(" ", str(text))
    result = _CAMEL_BOUNDARY.sub(r"\1 \2", result)
    result = _WHITESPACE.sub(" ", result).strip()
    return result[:1].upper() + result[1:]
