"""Console output abstraction.

Services report progress through ``ConsoleProtocol`` instead of printing
directly. Normal output goes to stdout; ``error`` goes to a
separate diagnostic stream (stderr) so the rendered notes can be piped.
"""

from __future__ import annotations

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
    INFO = auto()
    DIM = auto()
    RAW = auto()  # Verbatim text, no markup


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message to stdout with optional styling."""
        ...

    def raw(self, text: str) -> None:
        """Print text verbatim to stdout (no markup, no highlighting)."""
        ...

    def success(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def error(self, message: str, hint: str | None = None) -> None:
        """Print an error (and optional hint) to the diagnostic stream."""
        ...


class RichConsole:
    """Console implementation using Rich.

    Messages are escaped before printing; tags and repository names may
    contain square brackets that Rich would otherwise read as markup.
    """

    def __init__(self) -> None:
        from rich.console import Console

        self._console = Console()
        self._err_console = Console(stderr=True)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.INFO: "cyan",
            Style.DIM: "dim",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        from rich.markup import escape

        if style == Style.RAW:
            self.raw(message)
            return
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(escape(message), style=rich_style)
        else:
            self._console.print(escape(message))

    def raw(self, text: str) -> None:
        self._console.out(text, highlight=False, end="")

    def success(self, message: str) -> None:
        from rich.markup import escape

        self._console.print(f"[green]OK[/green] {escape(message)}")

    def info(self, message: str) -> None:
        from rich.markup import escape

        self._console.print(f"[cyan]info:[/cyan] {escape(message)}")

    def error(self, message: str, hint: str | None = None) -> None:
        from rich.markup import escape

        self._err_console.print(f"[red bold]error:[/red bold] {escape(message)}")
        if hint:
            self._err_console.print(f"hint: {escape(hint)}", style="dim")


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style
    stderr: bool = False


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for tests."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def raw(self, text: str) -> None:
        self.outputs.append(OutputRecord(text, Style.RAW))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def error(self, message: str, hint: str | None = None) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR, stderr=True))
        if hint:
            self.outputs.append(OutputRecord(f"hint: {hint}", Style.DIM, stderr=True))

    # Test helpers

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    @property
    def stdout_text(self) -> str:
        return "\n".join(o.message for o in self.outputs if not o.stderr)

    @property
    def stderr_text(self) -> str:
        return "\n".join(o.message for o in self.outputs if o.stderr)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
