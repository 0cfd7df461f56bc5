from __future__ import annotations

import json
from pathlib import Path

import typer

from structerr.cli.context import build_context
from structerr.core.errors import ErrorCode
from structerr.transport import transport


def transport_file(
    file: Path = typer.Argument(..., help="JSON document to reduce"),
    stack: bool = typer.Option(False, "--stack", help="Keep 'stack' fields"),
) -> None:
    """Reduce a JSON document to its transport form and print it."""
    ctx = build_context()

    try:
        data: object = json.loads(file.read_text(encoding="utf-8"))
    except OSError as e:
        ctx.console.error(f"cannot read {file}: {e}")
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))
    except json.JSONDecodeError as e:
        ctx.console.error(f"invalid JSON in {file}: {e}")
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))

    ctx.console.json(transport(data, serialize_stack=stack))
