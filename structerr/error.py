"""The structured error root type.

``StructuredError`` is an ``Exception`` whose fields come from a declarative
spec, whose message is a template, and which accumulates auxiliary values
after creation.

Usage:
    DiskFull = StructuredError.extend(
        name="DiskFull",
        message="{{name}}: no space left",
        on_push=lambda err, value: audit(err.name, value),
    )

    err = DiskFull("/var is full", "/var")   # message, then values
    err.push({"free_bytes": 0})               # audit() runs now
    payload = err.to_json()                   # JSON-safe dict

Construction protocol:
    1. Rendered spec fields become instance attributes.
    2. A string argument replaces the templated ``message``; all other
       arguments are collected into ``values``.
    3. ``stack`` records the constructing call site.
    4. Type-level handlers are bound to the instance.
    5. ``constructed`` fires before the constructor returns, unless the spec
       sets ``async_construct``.
    6. On the next scheduler turn: ``constructed`` fires if it was deferred,
       then one ``push`` per value given to the constructor.
       The pending task holds the instance weakly; an instance collected
       before that turn gets no deferred events.

Handlers are called with the instance first: ``fn(error)`` for
``constructed`` and ``fn(error, value)`` for ``push``.
"""

from __future__ import annotations

import sys
import traceback
import weakref
from collections.abc import Callable, Mapping
from functools import partial
from types import FrameType
from typing import ClassVar, Self

from structerr.args import parse_args
from structerr.core.config import get_settings
from structerr.core.exceptions import HandlerTypeError, UnsupportedEventError
from structerr.events import Emitter, Event
from structerr.hierarchy import TypeDescriptor, build_type, root_descriptor
from structerr.merge import merge_specs
from structerr.scheduler import get_scheduler
from structerr.template import render_spec
from structerr.transport import transport as transport_value

__all__ = ["StructuredError", "ROOT_SPEC"]

ROOT_SPEC: Mapping[str, object] = {
    "name": "StructuredError",
    "message": "{{name}} aggregated error",
    "serialize_stack": False,
}

# Events an instance may subscribe to after construction.
_SUBSCRIBABLE = (Event.PUSH,)


def _capture_stack(error: StructuredError, frame: FrameType | None) -> str:
    limit = get_settings().stack_limit or None
    header = f"{getattr(error, 'name', type(error).__name__)}: {error.message}\n"
    return header + "".join(traceback.format_stack(frame, limit=limit))


def _deferred_phase(
    ref: weakref.ref[StructuredError],
    async_construct: bool,
    initial_values: tuple[object, ...],
) -> None:
    error = ref()
    if error is None:
        return
    emitter = error._emitter
    if async_construct:
        emitter.emit(Event.CONSTRUCTED)
    for value in initial_values:
        emitter.emit(Event.PUSH, value)


class StructuredError(Exception):
    """Root of every structured error hierarchy.

    Attributes:
        message: Rendered message template, or the string passed at construction
        values: Auxiliary values, in the order they were supplied or pushed
        stack: Formatted back-trace of the constructing call site
    """

    __slots__ = ("_emitter", "__weakref__")

    _descriptor: ClassVar[TypeDescriptor] = root_descriptor(ROOT_SPEC)

    message: str
    values: list[object]
    stack: str

    def __init__(self, *args: object) -> None:
        super().__init__(*args)
        descriptor = type(self)._descriptor
        spec = descriptor.spec

        for key, value in render_spec(spec).items():
            setattr(self, key, value)

        parsed = parse_args(args)
        if parsed.message:
            self.message = parsed.message
        self.values = parsed.values

        self.stack = _capture_stack(self, sys._getframe(1))

        emitter = Emitter()
        for event, handlers in descriptor.events.items():
            for fn in handlers:
                emitter.on(event, partial(fn, self))
        self._emitter = emitter

        async_construct = bool(spec.get("async_construct"))
        if not async_construct:
            emitter.emit(Event.CONSTRUCTED)

        get_scheduler().schedule(
            partial(_deferred_phase, weakref.ref(self), async_construct, tuple(self.values))
        )

    @classmethod
    def extend(cls, props: Mapping[str, object] | None = None, /, **fields: object) -> type[Self]:
        """Derive a new error type from this one.

        Spec overrides and hooks can be given as a mapping, as keywords, or
        both (keywords win). ``on_constructed`` and ``on_push`` declare
        handlers: a callable is appended after the inherited ones, ``None``
        drops the inherited ones.

        Args:
            props: Declarations whose keys need not be identifiers
            **fields: Declarations as keywords

        Returns:
            The new type, itself extendable.

        Raises:
            InheritanceLimitError: If this type is at the inheritance limit.
            HandlerTypeError: If a hook is neither callable nor None.
        """
        declared: dict[str, object] = dict(props or {})
        declared.update(fields)
        return build_type(cls, merge_specs(cls._descriptor, declared))

    def push(self, value: object) -> None:
        """Append ``value`` to ``values`` and notify ``push`` handlers."""
        self.values.append(value)
        self._emitter.emit(Event.PUSH, value)

    def on(self, event: str, fn: Callable[..., object]) -> Self:
        """Register an extra handler on this instance.

        Only ``push`` can be subscribed; ``constructed`` handlers must be
        declared at extension time.

        Raises:
            UnsupportedEventError: For ``constructed`` or an unknown event.
            HandlerTypeError: If ``fn`` is not callable.
        """
        if event not in _SUBSCRIBABLE:
            raise UnsupportedEventError(event)
        if not callable(fn):
            raise HandlerTypeError(fn)
        self._emitter.on(Event(event), partial(fn, self))
        return self

    def has_values(self) -> bool:
        return len(self.values) > 0

    def transport(self) -> object:
        """Return a JSON-safe dict of this error's fields.

        ``stack`` is included only when the spec sets ``serialize_stack``.
        """
        return transport_value(self, bool(getattr(self, "serialize_stack", False)))

    def to_json(self) -> object:
        return self.transport()

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"
