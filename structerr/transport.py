"""Safe transport serialization.

``transport`` reduces an arbitrary value to plain dicts, lists and scalars so
it can be logged or sent to another process. Callables are dropped, the
``stack`` field is dropped unless explicitly requested, and exceptions become
dicts carrying their class name.

Reference cycles are cut: a container that is already being serialized
further up the current path is emitted as ``"[Circular]"``.
"""

from __future__ import annotations

import dataclasses
import json
from collections import deque
from collections.abc import Iterable, Mapping
from enum import Enum, auto
from types import ModuleType
from typing import Any, cast

from structerr.core.exceptions import TransportError

__all__ = [
    "Category",
    "CIRCULAR",
    "classify",
    "transport",
    "TransportEncoder",
    "dumps",
]

CIRCULAR = "[Circular]"

_SEQUENCE_TYPES = (list, tuple, set, frozenset, deque)


class Category(Enum):
    """Runtime categories the serializer distinguishes."""

    ERROR = auto()
    MAPPING = auto()
    OBJECT = auto()
    SEQUENCE = auto()
    SCALAR = auto()


def _is_plain_object(value: object) -> bool:
    if isinstance(value, (type, ModuleType, Enum)) or callable(value):
        return False
    if dataclasses.is_dataclass(value):
        return True
    return hasattr(value, "__dict__")


def classify(value: object) -> Category:
    """Return the serialization category of ``value``."""
    if isinstance(value, BaseException):
        return Category.ERROR
    if isinstance(value, Mapping):
        return Category.MAPPING
    if isinstance(value, _SEQUENCE_TYPES):
        return Category.SEQUENCE
    if _is_plain_object(value):
        return Category.OBJECT
    return Category.SCALAR


def _own_fields(value: object) -> Iterable[tuple[str, object]]:
    if hasattr(value, "__dict__"):
        return list(vars(value).items())
    # slotted dataclass
    return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]  # type: ignore[arg-type]


def _copy_safe(
    dst: dict[Any, object],
    items: Iterable[tuple[Any, object]],
    serialize_stack: bool,
    path: set[int],
) -> dict[Any, object]:
    for key, item in items:
        if not serialize_stack and key == "stack":
            continue
        if callable(item):
            continue
        dst[key] = _transport(item, serialize_stack, path)
    return dst


def _transport(value: object, serialize_stack: bool, path: set[int]) -> object:
    category = classify(value)
    if category is Category.SCALAR:
        return value

    marker = id(value)
    if marker in path:
        return CIRCULAR
    path.add(marker)
    try:
        match category:
            case Category.ERROR:
                seed: dict[Any, object] = {"name": type(value).__name__}
                fields = vars(value)
                if "message" not in fields:
                    seed["message"] = str(value)
                return _copy_safe(seed, list(fields.items()), serialize_stack, path)
            case Category.MAPPING:
                mapping = cast(Mapping[Any, object], value)
                return _copy_safe({}, list(mapping.items()), serialize_stack, path)
            case Category.OBJECT:
                return _copy_safe({}, _own_fields(value), serialize_stack, path)
            case Category.SEQUENCE:
                items = cast(Iterable[object], value)
                return [_transport(item, serialize_stack, path) for item in items]
            case _:
                raise TransportError(f"unhandled value category: {category}")
    finally:
        path.discard(marker)


def transport(value: object, serialize_stack: bool = False) -> object:
    """Convert ``value`` into a JSON-safe structure.

    Args:
        value: Anything; exceptions, mappings, plain objects and sequences are
            reduced recursively, other values are returned as-is
        serialize_stack: Keep ``stack`` fields instead of dropping them

    Returns:
        A new structure sharing no containers with ``value``.

    Raises:
        TransportError: If a category is classified but not handled.
    """
    return _transport(value, serialize_stack, set())


class TransportEncoder(json.JSONEncoder):
    """JSON encoder that understands structured errors.

    Objects exposing ``to_json()`` are encoded through it; any other object
    the stock encoder rejects is passed through ``transport`` first.
    """

    def default(self, o: Any) -> Any:
        to_json = getattr(o, "to_json", None)
        if callable(to_json):
            return to_json()
        reduced = transport(o)
        if reduced is o:
            return super().default(o)
        return reduced


def dumps(obj: object, **kwargs: Any) -> str:
    """``json.dumps`` using ``TransportEncoder``."""
    kwargs.setdefault("cls", TransportEncoder)
    return json.dumps(obj, **kwargs)
