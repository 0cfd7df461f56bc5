"""Type hierarchy construction.

Each structured error type carries one immutable ``TypeDescriptor``: its
merged spec, its merged event map and a link to its parent's descriptor.
Instances read only their own type's descriptor; nothing walks the chain at
construction time.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from structerr.core.config import get_settings
from structerr.core.exceptions import InheritanceLimitError
from structerr.events import Event, Handler
from structerr.merge import MergedSpec, freeze_events, freeze_spec

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    "TypeDescriptor",
    "root_descriptor",
    "count_ancestors",
    "check_depth",
    "build_type",
    "descriptor_of",
    "spec_of",
    "events_of",
    "parent_of",
]

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Immutable per-type record.

    Attributes:
        name: Type label (the spec's ``name`` when it is a string)
        spec: Read-only merged spec
        events: Read-only merged event map
        parent: Descriptor of the parent type, None for the root
    """

    name: str
    spec: Mapping[str, object]
    events: Mapping[Event, tuple[Handler, ...]]
    parent: TypeDescriptor | None = None

    @property
    def depth(self) -> int:
        return count_ancestors(self)


def root_descriptor(
    spec: Mapping[str, object],
    events: Mapping[Event, list[Handler]] | None = None,
) -> TypeDescriptor:
    """Create the descriptor of a hierarchy root."""
    name = spec.get("name")
    return TypeDescriptor(
        name=name if isinstance(name, str) and name else "StructuredError",
        spec=freeze_spec(spec),
        events=freeze_events(events or {}),
    )


def count_ancestors(descriptor: TypeDescriptor) -> int:
    """Number of ancestors above ``descriptor`` (0 for a root)."""
    count = 0
    parent = descriptor.parent
    while parent is not None:
        count += 1
        parent = parent.parent
    return count


def check_depth(descriptor: TypeDescriptor) -> None:
    """Ensure a type with ``descriptor`` may be extended once more.

    Raises:
        InheritanceLimitError: If the new type would exceed
            ``Settings.inheritance_limit`` types in the chain.
    """
    limit = get_settings().inheritance_limit
    if count_ancestors(descriptor) >= limit - 1:
        logger.warning("inheritance_limit_reached", type_name=descriptor.name, limit=limit)
        raise InheritanceLimitError(descriptor.name, limit)


def build_type[T: type](parent: T, merged: MergedSpec) -> T:
    """Mint a subclass of ``parent`` bound to ``merged``.

    The subclass is created with the parent's metaclass, so ``isinstance``
    holds against every ancestor, the root and ``Exception``.

    Raises:
        InheritanceLimitError: If ``parent`` is already at the depth limit.
    """
    parent_descriptor = descriptor_of(parent)
    check_depth(parent_descriptor)

    label = merged.spec.get("name")
    name = label if isinstance(label, str) and label else f"{parent_descriptor.name}Extension"
    descriptor = TypeDescriptor(
        name=name,
        spec=merged.spec,
        events=merged.events,
        parent=parent_descriptor,
    )
    namespace: dict[str, object] = {
        "_descriptor": descriptor,
        "__module__": parent.__module__,
        "__qualname__": name,
    }
    return type(parent)(name, (parent,), namespace)


def descriptor_of(cls: type) -> TypeDescriptor:
    """Return the descriptor bound to a structured error type.

    Raises:
        TypeError: If ``cls`` is not a structured error type.
    """
    descriptor = getattr(cls, "_descriptor", None)
    if not isinstance(descriptor, TypeDescriptor):
        raise TypeError(f"{cls!r} is not a structured error type")
    return descriptor


def spec_of(cls: type) -> Mapping[str, object]:
    """Return the merged, read-only spec of ``cls``."""
    return descriptor_of(cls).spec


def events_of(cls: type) -> Mapping[Event, tuple[Callable[..., object], ...]]:
    """Return the merged, read-only event map of ``cls``."""
    return descriptor_of(cls).events


def parent_of(cls: type) -> type | None:
    """Return the structured error type ``cls`` was extended from.

    Returns None for a hierarchy root.
    """
    if descriptor_of(cls).parent is None:
        return None
    return cls.__base__
