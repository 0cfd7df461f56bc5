from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from structerr.bootstrap import configure
from structerr.core.config import Settings, discover_settings_path, load_settings
from structerr.core.errors import ErrorCode
from structerr.core.result import Err
from structerr.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    settings: Settings
    settings_path: Path | None
    console: ConsoleProtocol


def build_context(settings_path: Path | None = None) -> CLIContext:
    """Load and install settings, then build the command context.

    Exits with CONFIG_ERROR if a settings file exists but cannot be loaded.
    """
    path = settings_path or discover_settings_path()
    settings = Settings()
    if path is not None:
        result = load_settings(path)
        if isinstance(result, Err):
            typer.echo(f"error: {result.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))
        settings = result.value

    configure(settings)
    return CLIContext(settings=settings, settings_path=path, console=RichConsole())
