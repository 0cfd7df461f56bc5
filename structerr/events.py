"""Lifecycle events and the per-instance emitter.

Every structured error owns one private ``Emitter``. Handlers are stored
already bound to the instance, so emitting passes only the event payload.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum

__all__ = ["Event", "Handler", "Emitter", "HOOK_KEYS"]

type Handler = Callable[..., object]


class Event(StrEnum):
    """Lifecycle moments a handler can observe."""

    CONSTRUCTED = "constructed"
    PUSH = "push"


# Extension keyword -> event it declares a handler for.
HOOK_KEYS: dict[str, Event] = {
    "on_constructed": Event.CONSTRUCTED,
    "on_push": Event.PUSH,
}


class Emitter:
    """Synchronous, ordered event emitter.

    Handlers run in registration order. An exception raised by a handler
    propagates to whoever called ``emit`` and skips the remaining handlers.
    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: dict[Event, list[Callable[..., object]]] = {}

    def on(self, event: Event, fn: Callable[..., object]) -> None:
        self._handlers.setdefault(event, []).append(fn)

    def listeners(self, event: Event) -> list[Callable[..., object]]:
        """Return a snapshot of the handlers registered for ``event``."""
        return list(self._handlers.get(event, ()))

    def emit(self, event: Event, *args: object) -> bool:
        """Call every handler for ``event`` with ``args``.

        Returns:
            True if at least one handler was registered.
        """
        handlers = self.listeners(event)
        for fn in handlers:
            fn(*args)
        return bool(handlers)
