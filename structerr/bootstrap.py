"""Apply settings to the running process."""

from __future__ import annotations

from pathlib import Path

from structerr.core.config import (
    ConfigError,
    Settings,
    discover_settings_path,
    load_settings,
    set_settings,
)
from structerr.core.result import Err, Ok, Result
from structerr.scheduler import make_scheduler, set_scheduler

__all__ = ["configure", "configure_from_environment"]


def configure(settings: Settings) -> Settings:
    """Install ``settings`` and the scheduler they name.

    Types extended before this call keep the depth they were created with;
    only later extensions and constructions see the new values.

    Returns:
        The previously active settings.
    """
    previous = set_settings(settings)
    set_scheduler(make_scheduler(settings.scheduler))
    return previous


def configure_from_environment(cwd: Path | None = None) -> Result[Settings, ConfigError]:
    """Discover, load and install settings.

    With no settings file present, the defaults are installed. On a load
    error nothing is changed.
    """
    path = discover_settings_path(cwd)
    if path is None:
        settings = Settings()
        configure(settings)
        return Ok(settings)

    result = load_settings(path)
    if isinstance(result, Err):
        return result
    configure(result.value)
    return result
