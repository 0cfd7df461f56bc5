from __future__ import annotations

import typer

from structerr import __version__
from structerr.cli.commands.config_cmd import config
from structerr.cli.commands.render_cmd import render
from structerr.cli.commands.transport_cmd import transport_file

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    invoke_without_command=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(config)
app.command()(render)
app.command("transport")(transport_file)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def main() -> None:
    app()
