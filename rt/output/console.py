"""Console output for CLI commands.

Commands write through ``ConsoleProtocol``. ``RichConsole`` renders to the
terminal; ``MockConsole`` records plain text lines for assertions, one line
per message and one line per table row (cells joined by `` | ``).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    DIM = auto()
    HEADER = auto()


_RICH_STYLES: dict[Style, str | None] = {
    Style.DEFAULT: None,
    Style.SUCCESS: "green",
    Style.ERROR: "red",
    Style.WARNING: "yellow",
    Style.DIM: "dim",
    Style.HEADER: "bold blue",
}


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def table(
        self, columns: Sequence[str], rows: Sequence[Sequence[str]], title: str | None = None
    ) -> None: ...


class RichConsole:
    def __init__(self) -> None:
        from rich.console import Console

        self._console = Console(highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        # Versions and iteration names may contain brackets.
        self._console.print(message, style=_RICH_STYLES[style], markup=False)

    def success(self, message: str) -> None:
        self.print(f"OK {message}", Style.SUCCESS)

    def error(self, message: str) -> None:
        self.print(f"error: {message}", Style.ERROR)

    def header(self, message: str) -> None:
        self._console.rule(message, style=_RICH_STYLES[Style.HEADER])

    def table(
        self, columns: Sequence[str], rows: Sequence[Sequence[str]], title: str | None = None
    ) -> None:
        from rich.table import Table

        table = Table(*columns, title=title, header_style="bold")
        for row in rows:
            table.add_row(*row)
        self._console.print(table)


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style


@dataclass
class MockConsole:
    outputs: list[OutputRecord] = field(default_factory=list[OutputRecord])

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.print(f"OK {message}", Style.SUCCESS)

    def error(self, message: str) -> None:
        self.print(f"error: {message}", Style.ERROR)

    def header(self, message: str) -> None:
        self.print(message, Style.HEADER)

    def table(
        self, columns: Sequence[str], rows: Sequence[Sequence[str]], title: str | None = None
    ) -> None:
        if title:
            self.header(title)
        self.print(" | ".join(columns), Style.DIM)
        for row in rows:
            self.print(" | ".join(row))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style is Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
