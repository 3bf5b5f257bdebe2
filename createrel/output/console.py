"""Console output abstraction.

Services write through `ConsoleProtocol` so they never depend on rich
directly and tests can capture output with `MockConsole`. Plain output
goes to stdout; errors and warnings go to stderr.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rich.text import Text

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    BOLD = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message to stdout, verbatim apart from styling."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None:
        """Print an `error:` line to stderr."""
        ...

    def warning(self, message: str) -> None:
        """Print a `warning:` line to stderr."""
        ...

    def newline(self) -> None: ...


class RichConsole:
    """Console implementation using rich.

    Messages often carry user text (tag annotations, API response bodies),
    so rich markup and highlighting are never applied to them.
    """

    def __init__(self) -> None:
        # Import rich lazily to avoid import-time dependency
        from rich.console import Console

        self._out = Console(highlight=False, emoji=False)
        self._err = Console(stderr=True, highlight=False, emoji=False)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.BOLD: "bold",
        }

    def _text(self, prefix: str, prefix_style: str, message: str) -> Text:
        from rich.text import Text

        text = Text(prefix, style=prefix_style)
        text.append(message)
        return text

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "") or None
        self._out.print(message, style=rich_style, markup=False, soft_wrap=True)

    def success(self, message: str) -> None:
        self._out.print(self._text("OK ", "green", message), soft_wrap=True)

    def error(self, message: str) -> None:
        self._err.print(self._text("error: ", "red bold", message), soft_wrap=True)

    def warning(self, message: str) -> None:
        self._err.print(self._text("warning: ", "yellow", message), soft_wrap=True)

    def newline(self) -> None:
        self._out.print()


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

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        """All output as one newline-separated string."""
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
