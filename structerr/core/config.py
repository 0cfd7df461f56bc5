"""Typed settings loading and access.

Settings live under a ``[structerr]`` table in a TOML file:

    [structerr]
    inheritance_limit = 10
    scheduler = "event-loop"
    stack_limit = 0

Every key is optional. The active settings are process-wide; they are read
when a type is extended (``inheritance_limit``) and when an instance captures
its stack (``stack_limit``).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import structlog

from .result import Err, Ok, Result
from .structured import StrDict, WrongType, as_str_dict, get_int, get_str, get_table

__all__ = [
    "Settings",
    "SchedulerKind",
    "ConfigError",
    "CONFIG_ENV_VAR",
    "CONFIG_FILE_NAME",
    "DEFAULT_INHERITANCE_LIMIT",
    "load_settings",
    "load_settings_or_default",
    "discover_settings_path",
    "get_settings",
    "set_settings",
]

logger = structlog.get_logger(__name__)

CONFIG_ENV_VAR = "STRUCTERR_CONFIG"
CONFIG_FILE_NAME = "structerr.toml"

# Total number of types in one chain, root included.
DEFAULT_INHERITANCE_LIMIT = 10

type SchedulerKind = Literal["event-loop", "manual"]

_SCHEDULER_KINDS: tuple[str, ...] = ("event-loop", "manual")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when settings cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Settings:
    """Process-wide framework settings.

    Attributes:
        inheritance_limit: Maximum types in a chain, root included (>= 1)
        scheduler: Which deferred-task scheduler to install
        stack_limit: Maximum frames kept in a captured stack; 0 keeps all
    """

    inheritance_limit: int = DEFAULT_INHERITANCE_LIMIT
    scheduler: SchedulerKind = "event-loop"
    stack_limit: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Settings:
        """Create Settings from a parsed TOML document.

        Raises:
            WrongType: If a key holds a value of the wrong type.
            ValueError: If a value has the right type but is out of range.
        """
        table: StrDict = get_table(data, "structerr") or {}

        limit = get_int(table, "inheritance_limit")
        if limit is None:
            limit = DEFAULT_INHERITANCE_LIMIT
        if limit < 1:
            raise ValueError(f"inheritance_limit must be >= 1, got {limit}")

        scheduler = get_str(table, "scheduler") or "event-loop"
        if scheduler not in _SCHEDULER_KINDS:
            raise ValueError(
                f"scheduler must be one of {', '.join(_SCHEDULER_KINDS)}, got {scheduler!r}"
            )

        stack_limit = get_int(table, "stack_limit") or 0
        if stack_limit < 0:
            raise ValueError(f"stack_limit must be >= 0, got {stack_limit}")

        return cls(
            inheritance_limit=limit,
            scheduler="manual" if scheduler == "manual" else "event-loop",
            stack_limit=stack_limit,
        )

    def as_dict(self) -> dict[str, object]:
        return {
            "inheritance_limit": self.inheritance_limit,
            "scheduler": self.scheduler,
            "stack_limit": self.stack_limit,
        }


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Settings root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Settings file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading settings: {e}", path=path))


def load_settings(path: Path) -> Result[Settings, ConfigError]:
    """Load and validate settings from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(Settings) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Settings.from_dict(result.value))
    except (WrongType, ValueError) as e:
        return Err(ConfigError(f"Invalid settings: {e}", path=path))


def load_settings_or_default(path: Path) -> Settings:
    """Load settings from file, falling back to defaults on any error."""
    result = load_settings(path)
    if isinstance(result, Ok):
        return result.value
    logger.warning("settings_load_failed", path=str(path), reason=result.error.message)
    return Settings()


def discover_settings_path(cwd: Path | None = None) -> Path | None:
    """Locate the settings file.

    Checks ``$STRUCTERR_CONFIG`` first, then ``structerr.toml`` in ``cwd``.
    An environment variable pointing at a missing file is still returned so
    the caller reports it instead of silently using defaults.
    """
    env_value = os.environ.get(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()

    candidate = (cwd or Path.cwd()) / CONFIG_FILE_NAME
    if candidate.is_file():
        return candidate
    return None


_active = Settings()


def get_settings() -> Settings:
    """Return the active settings."""
    return _active


def set_settings(settings: Settings) -> Settings:
    """Replace the active settings, returning the previous ones."""
    global _active
    previous = _active
    _active = settings
    return previous
