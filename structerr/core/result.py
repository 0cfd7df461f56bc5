"""Result type for fallible operations that are expected to fail.

Loading settings from disk or parsing CLI field assignments can fail for
ordinary reasons (missing file, typo). Those paths return ``Ok``/``Err``
instead of raising, so callers decide explicitly whether a failure is fatal.

Usage:
    match load_settings(path):
        case Ok(settings):
            configure(settings)
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result carrying ``error`` (usually a small error record)."""

    error: E


type Result[T, E] = Ok[T] | Err[E]
