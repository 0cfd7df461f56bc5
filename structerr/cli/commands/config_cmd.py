from __future__ import annotations

from pathlib import Path

import typer

from structerr.cli.context import build_context
from structerr.output.console import Style


def config(
    path: Path | None = typer.Option(
        None,
        "--path",
        help="Settings file (defaults to $STRUCTERR_CONFIG or ./structerr.toml)",
    ),
) -> None:
    """Show the effective settings."""
    ctx = build_context(path)

    source = str(ctx.settings_path) if ctx.settings_path else "defaults"
    ctx.console.print(f"source: {source}", Style.DIM)
    ctx.console.fields(ctx.settings.as_dict())
