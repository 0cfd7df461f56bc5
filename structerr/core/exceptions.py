"""Exceptions raised by the structerr framework itself.

These are distinct from the structured error types users declare with
``StructuredError.extend``. They signal misuse of the framework (configuration
errors) or a gap in the transport serializer (internal consistency errors).

Configuration errors subclass ``TypeError`` so callers that only know the
built-in hierarchy can still catch them.
"""

from __future__ import annotations

__all__ = [
    "StructErrError",
    "ConfigurationError",
    "InheritanceLimitError",
    "UnsupportedEventError",
    "HandlerTypeError",
    "ReservedFieldError",
    "TransportError",
]


class StructErrError(Exception):
    """Base class for every exception raised by structerr."""


class ConfigurationError(StructErrError, TypeError):
    """A type or handler was declared in a way the framework rejects."""


class InheritanceLimitError(ConfigurationError):
    """Extending a type would exceed the configured inheritance limit.

    Attributes:
        type_name: Name of the type that could not be extended
        limit: Maximum number of types in a chain, root included
    """

    def __init__(self, type_name: str, limit: int) -> None:
        self.type_name = type_name
        self.limit = limit
        super().__init__(f"inheritance limit reached extending {type_name} (limit {limit})")


class UnsupportedEventError(ConfigurationError):
    """A handler was registered for an event that cannot be subscribed."""

    def __init__(self, event: object) -> None:
        self.event = event
        super().__init__(f"unsupported event {event!r}")


class HandlerTypeError(ConfigurationError):
    """A handler was not callable (and, at extension time, not ``None``)."""

    def __init__(self, handler: object) -> None:
        self.handler = handler
        super().__init__(f"handler must be callable, got {type(handler).__name__}")


class ReservedFieldError(ConfigurationError):
    """A declared field would hide an attribute every instance needs."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"field name {field!r} is reserved")


class TransportError(StructErrError, RuntimeError):
    """The transport serializer met a value category it does not handle."""
