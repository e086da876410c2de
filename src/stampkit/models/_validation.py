"""Shared validation helpers for frozen stamp dataclasses.

Private module -- not part of the public API. Used by ``__post_init__``
methods in sibling model modules. Every helper raises
[InvalidField][stampkit.core.exceptions.InvalidField] so a bad value always
surfaces as the same error kind, whether it came from a caller or from a
decoded record.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from stampkit.core.exceptions import InvalidField

from .constants import PROPERTIES_MAX, ServerProperties


def _type_name(expected: type) -> str:
    article = "an" if expected.__name__[0] in "AEIOUaeiou" else "a"
    return f"{article} {expected.__name__}"


def validate_instance(value: Any, expected: type, name: str) -> None:
    """Raise if *value* is not an instance of *expected*."""
    if not isinstance(value, expected):
        raise InvalidField(f"{name} must be {_type_name(expected)}, got {type(value).__name__}")


def validate_str(value: Any, name: str, *, allow_empty: bool = True) -> None:
    """Raise if *value* is not a ``str`` (or is empty when not allowed)."""
    validate_instance(value, str, name)
    if not allow_empty and not value:
        raise InvalidField(f"{name} must not be empty")


def coerce_bytes(value: Any, name: str) -> bytes:
    """Return *value* as immutable ``bytes``; accepts ``bytes``-like objects."""
    if isinstance(value, bytes):
        return value
    if isinstance(value, bytearray | memoryview):
        return bytes(value)
    raise InvalidField(f"{name} must be bytes, got {type(value).__name__}")


def coerce_bytes_tuple(value: Any, name: str) -> tuple[bytes, ...]:
    """Return a sequence of byte strings as a tuple of ``bytes``."""
    if isinstance(value, str | bytes | bytearray) or not isinstance(value, Iterable):
        raise InvalidField(f"{name} must be a sequence of bytes, got {type(value).__name__}")
    return tuple(coerce_bytes(item, f"{name}[{i}]") for i, item in enumerate(value))


def coerce_str_tuple(value: Any, name: str) -> tuple[str, ...]:
    """Return a sequence of strings as a tuple, rejecting a bare ``str``."""
    if isinstance(value, str | bytes) or not isinstance(value, Iterable):
        raise InvalidField(f"{name} must be a sequence of str, got {type(value).__name__}")
    items = tuple(value)
    for i, item in enumerate(items):
        validate_instance(item, str, f"{name}[{i}]")
    return items


def coerce_properties(value: Any) -> ServerProperties:
    """Return *value* as ``ServerProperties``, keeping reserved bits.

    ``bool`` is rejected: a flag set is never a truth value.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidField(f"properties must be an int, got {type(value).__name__}")
    if not 0 <= value <= PROPERTIES_MAX:
        raise InvalidField(f"properties out of range for 64 bits: {int(value)}")
    return ServerProperties(value)
