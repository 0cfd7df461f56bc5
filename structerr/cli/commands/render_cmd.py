from __future__ import annotations

from dataclasses import dataclass

import typer

from structerr.cli.context import build_context
from structerr.core.errors import ErrorCode
from structerr.core.result import Err, Ok, Result
from structerr.template import render_template


@dataclass(frozen=True, slots=True)
class FieldSyntaxError:
    assignment: str

    @property
    def message(self) -> str:
        return f"expected key=value, got {self.assignment!r}"


def parse_fields(assignments: list[str]) -> Result[dict[str, object], FieldSyntaxError]:
    """Parse ``key=value`` pairs; later keys override earlier ones."""
    fields: dict[str, object] = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            return Err(FieldSyntaxError(item))
        fields[key] = value
    return Ok(fields)


def render(
    template: str = typer.Argument(..., help="Template, e.g. '{{name}} failed'"),
    field: list[str] = typer.Option(
        [],
        "--field",
        "-f",
        help="Field available to placeholders, as key=value (repeatable)",
    ),
) -> None:
    """Render a message template against the given fields."""
    ctx = build_context()

    parsed = parse_fields(field)
    if isinstance(parsed, Err):
        ctx.console.error(parsed.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    ctx.console.print(str(render_template(template, parsed.value)))
