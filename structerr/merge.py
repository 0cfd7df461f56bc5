"""Spec and event merging for type extension.

A child type's spec is the parent's spec with the child's overrides applied;
its event map is the parent's handler lists with the child's handlers
appended. Declaring a hook as ``None`` clears the inherited handlers for that
event before anything is appended.

Usage:
    merged = merge_specs(parent, {"name": "DiskFull", "on_push": log_value})
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from structerr.core.exceptions import HandlerTypeError, ReservedFieldError
from structerr.events import HOOK_KEYS, Event, Handler

if TYPE_CHECKING:
    from structerr.hierarchy import TypeDescriptor

__all__ = ["MergedSpec", "RESERVED_FIELDS", "merge_specs", "freeze_spec", "freeze_events"]

# Methods every instance must keep; dunder names are rejected as well.
RESERVED_FIELDS = frozenset({"push", "on", "has_values", "transport", "to_json", "extend"})


@dataclass(frozen=True, slots=True)
class MergedSpec:
    """Result of merging a parent descriptor with child properties.

    Attributes:
        spec: Read-only field mapping, in declaration order
        events: Read-only map from event to its ordered handlers
    """

    spec: Mapping[str, object]
    events: Mapping[Event, tuple[Handler, ...]]


def freeze_spec(spec: Mapping[str, object]) -> Mapping[str, object]:
    """Return a read-only copy of ``spec``."""
    return MappingProxyType(dict(spec))


def freeze_events(events: Mapping[Event, list[Handler]]) -> Mapping[Event, tuple[Handler, ...]]:
    """Return a read-only copy of ``events`` with tuple handler lists."""
    return MappingProxyType({event: tuple(handlers) for event, handlers in events.items()})


def merge_specs(parent: TypeDescriptor, props: Mapping[str, object]) -> MergedSpec:
    """Merge ``props`` onto ``parent``'s spec and events.

    Keys listed in ``HOOK_KEYS`` declare event handlers; every other key
    overrides (or adds) a spec field. Keys are applied in mapping order.

    Args:
        parent: Descriptor of the type being extended
        props: Child declarations

    Returns:
        A MergedSpec sharing no mutable state with ``parent``.

    Raises:
        HandlerTypeError: If a hook value is neither callable nor None.
        ReservedFieldError: If a field would hide an instance attribute.
    """
    spec: dict[str, object] = dict(parent.spec)
    events: dict[Event, list[Handler]] = {
        event: list(handlers) for event, handlers in parent.events.items()
    }

    for key, value in props.items():
        event = HOOK_KEYS.get(key)
        if event is None:
            if key in RESERVED_FIELDS or key.startswith("__"):
                raise ReservedFieldError(key)
            spec[key] = value
            continue
        if value is None:
            events[event] = []
        elif callable(value):
            events.setdefault(event, []).append(value)
        else:
            raise HandlerTypeError(value)

    return MergedSpec(spec=freeze_spec(spec), events=freeze_events(events))
