"""Helpers for reading untyped TOML/JSON tables.

Settings files are parsed into plain dicts; these helpers narrow values at
that boundary. Each getter distinguishes "missing" (``None``) from "present
but wrong type" so the caller can report the latter as a config error.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]

_MISSING = object()


class WrongType(Exception):
    """A table value exists but has an unexpected type.

    Attributes:
        key: The offending key
        expected: Human-readable expected type
        actual: The value found
    """

    def __init__(self, key: str, expected: str, actual: object) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(f"{key}: expected {expected}, got {type(actual).__name__}")


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    """Return obj as StrDict if it matches, else None."""
    if is_str_dict(obj):
        return obj
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping.

    Raises:
        WrongType: If the key exists but is not a table.
    """
    value = table.get(key, _MISSING)
    if value is _MISSING:
        return None
    result = as_str_dict(value)
    if result is None:
        raise WrongType(key, "table", value)
    return result


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a non-empty string, stripped of surrounding whitespace.

    Raises:
        WrongType: If the key exists but is not a string.
    """
    value = table.get(key, _MISSING)
    if value is _MISSING:
        return None
    if not isinstance(value, str):
        raise WrongType(key, "string", value)
    return value.strip() or None


def get_int(table: Mapping[str, object], key: str) -> int | None:
    """Get an integer. Booleans are rejected even though they subclass int.

    Raises:
        WrongType: If the key exists but is not an integer.
    """
    value = table.get(key, _MISSING)
    if value is _MISSING:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise WrongType(key, "integer", value)
    return value
