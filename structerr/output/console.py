"""Console output abstraction for the CLI.

Commands write through ``ConsoleProtocol`` so they can be tested with
``MockConsole`` instead of capturing a real terminal.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    DIM = auto()
    HEADER = auto()
    DATA = auto()  # Machine-readable payload (JSON)

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def error(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def fields(self, values: Mapping[str, object]) -> None:
        """Print a two-column key/value listing."""
        ...

    def json(self, data: object) -> None:
        """Print ``data`` as indented JSON."""
        ...


class RichConsole:
    """Console implementation using Rich."""

    def __init__(self, stderr: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(stderr=stderr)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
            Style.DATA: "",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def error(self, message: str) -> None:
        self._console.print(f"[red bold]error:[/red bold] {message}")

    def header(self, message: str) -> None:
        self._console.print(message, style="blue bold", markup=False)

    def fields(self, values: Mapping[str, object]) -> None:
        from rich.table import Table

        table = Table(show_header=False, box=None, pad_edge=False)
        table.add_column(style="cyan")
        table.add_column()
        for key, value in values.items():
            table.add_row(key, str(value))
        self._console.print(table)

    def json(self, data: object) -> None:
        self._console.print_json(json.dumps(data))


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def fields(self, values: Mapping[str, object]) -> None:
        for key, value in values.items():
            self.outputs.append(OutputRecord(f"{key} = {value}", Style.DEFAULT))

    def json(self, data: object) -> None:
        self.outputs.append(OutputRecord(json.dumps(data, indent=2), Style.DATA))

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def data(self) -> list[object]:
        """Decode every JSON payload printed with ``json()``."""
        return [json.loads(o.message) for o in self.outputs if o.style == Style.DATA]
