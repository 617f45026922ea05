"""Errors aggregator - per-attribute validation messages."""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from entity_base.infrastructure.utilities.common.presence import is_blank, is_present
from entity_base.infrastructure.utilities.common.string_utils import humanize_string

BASE = "base"

# Keys such as "items[0]" or "[3]" describe errors of array positions
_INDEXED_KEY = re.compile(r"\[\d+\]")


class Errors:
    """
    Ordered mapping from attribute name to a list of messages.

    Messages that concern the entity as a whole live under the ``base``
    bucket. The aggregator is bound to an entity type (``model``) so that
    full messages can use its human attribute names.
    """

    def __init__(self, model: Optional[type] = None, messages: Any = None):
        self.model = model
        self._messages: Dict[str, Any] = _initial_messages(messages)

    @property
    def messages(self) -> Dict[str, Any]:
        return self._messages

    def add(self, attr: str, message: str) -> List[str]:
        """Append a message to an attribute, creating its bucket if needed."""
        if attr in self._messages:
            bucket = self._messages[attr]
            if not isinstance(bucket, list):
                bucket = [bucket]
                self._messages[attr] = bucket
            bucket.append(message)
        else:
            self._messages[attr] = [message]
        return self._messages[attr]

    def add_from_external_format(self, entries: Iterable[Mapping[str, Any]] = ()) -> None:
        """Ingest errors reported as ``{"field": ..., "detail": ...}`` pairs."""
        for entry in entries:
            self.add(entry["field"], entry["detail"])

    def clear(self) -> None:
        self._messages = {}

    def full_messages(self, force_base: bool = False) -> List[str]:
        """
        Build display strings for every message.

        Each message is prefixed with the attribute's human name (empty for
        ``base`` or when ``force_base`` is set), then humanized.

        Args:
            force_base: Drop attribute labels from every message

        Returns:
            Messages in attribute insertion order, then message order
        """
        full = []
        for attr, msgs in self._messages.items():
            label = self._human_attribute_name(BASE if force_base else attr)
            if not isinstance(msgs, list):
                msgs = [msgs]
            for message in msgs:
                full.append(humanize_string(f"{label} {message}".strip()))
        return full

    def is_empty(self) -> bool:
        """True when no bucket exists, not even an empty one, and ``base`` is blank."""
        return not self._messages and is_blank(self._messages.get(BASE))

    def clone(self) -> Errors:
        """Copy with an independent message map, so clearing the clone leaves this one intact."""
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone._messages = {
            attr: list(msgs) if isinstance(msgs, list) else msgs
            for attr, msgs in self._messages.items()
        }
        return clone

    def _human_attribute_name(self, attr: str) -> str:
        if self.model is not None:
            return self.model.human_attribute_name(attr)
        if attr == BASE:
            return ""
        return humanize_string(str(attr))

    def __contains__(self, attr: str) -> bool:
        return is_present(self._messages.get(attr))

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self._messages.items())

    def __len__(self) -> int:
        return sum(
            len(msgs) if isinstance(msgs, list) else 1
            for msgs in self._messages.values()
        )

    def __repr__(self) -> str:
        model_name = self.model.__name__ if self.model is not None else None
        return f"Errors(model={model_name}, messages={self._messages!r})"


def _initial_messages(msg: Any) -> Dict[str, Any]:
    """Normalize the supported initial shapes into a message map."""
    messages: Dict[str, Any] = {}

    if isinstance(msg, Mapping):
        messages = _messages_from_mapping(msg)
    elif isinstance(msg, (list, tuple)):
        for item in msg:
            if isinstance(item, str):
                messages.setdefault(BASE, []).append(item)
            else:
                for attr, msgs in _initial_messages(item).items():
                    messages.setdefault(attr, []).extend(msgs)
    elif isinstance(msg, str) and is_present(msg):
        messages = {BASE: [msg.strip()]}
    return messages


def _messages_from_mapping(msg: Mapping) -> Dict[str, Any]:
    messages: Dict[str, Any] = {BASE: []}
    for key, value in msg.items():
        values = list(value) if isinstance(value, (list, tuple)) else [value]
        if _INDEXED_KEY.search(str(key)):
            messages[BASE].extend(values)
        elif key == BASE:
            messages[BASE].extend(values)
        else:
            messages[key] = values
    return messages
