"""Conversion of arbitrary payloads into plain, serializable data."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from responsekit.core.errors import SerializationError


def to_plain(value: Any) -> Any:
    """Recursively convert ``value`` into dicts, lists and scalars.

    Dataclass instances and objects exposing ``__dict__`` become dicts (private
    attributes are skipped), tuples and sets become lists, dates become ISO
    strings, ``Decimal`` and ``UUID`` become strings and enums their value.
    Anything else is returned unchanged and left for the formatter to judge.

    :raises SerializationError: ``value`` contains itself.
    """

    return _convert(value, set())


def _convert(value: Any, active: set[int]) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, Enum):
        return _convert(value.value, active)

    marker = id(value)
    if marker in active:
        raise SerializationError(f"Circular reference detected in {type(value).__name__} payload")
    active.add(marker)
    try:
        return _convert_container(value, active)
    finally:
        active.discard(marker)


def _convert_container(value: Any, active: set[int]) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _convert(v, active) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_convert(v, active) for v in value]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _convert(getattr(value, f.name), active) for f in dataclasses.fields(value)}
    if hasattr(value, "__dict__") and not isinstance(value, type):
        return {k: _convert(v, active) for k, v in vars(value).items() if not k.startswith("_")}
    return value


__all__ = ["to_plain"]
