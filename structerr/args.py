"""Constructor argument normalization.

``StructuredError("disk full", path, 507)`` takes a free-form argument list.
The first string is the message; everything else is an auxiliary value.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

__all__ = ["ParsedArgs", "parse_args"]


@dataclass(slots=True)
class ParsedArgs:
    """Normalized constructor arguments.

    Attributes:
        message: The first string argument, if any
        values: Every other argument, in call order
    """

    message: str | None = None
    values: list[object] = field(default_factory=list)


def parse_args(args: Iterable[object]) -> ParsedArgs:
    """Split constructor arguments into a message and values.

    Only the first ``str`` becomes the message; later strings are values.
    The returned ``values`` list is always a fresh list.
    """
    parsed = ParsedArgs()
    for arg in args:
        if parsed.message is None and isinstance(arg, str):
            parsed.message = arg
            continue
        parsed.values.append(arg)
    return parsed
