"""Console output abstraction.

Services report progress through `ConsoleProtocol` and never import Rich
directly. The CLI hands them a `RichConsole`; tests hand them a `MockConsole`
and inspect what was printed.

Diagnostics and machine-readable output are kept apart: `RichConsole` writes
messages to stderr, and only `emit()` writes to stdout, so `relflow plan
--json | jq` sees nothing but the JSON document.
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
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    BOLD = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def newline(self) -> None: ...

    def emit(self, text: str) -> None:
        """Write program output (plans, JSON) verbatim to stdout."""
        ...


class RichConsole:
    """Production console backed by Rich.

    Markup is off for message text: package names, release notes and tag
    lists routinely contain `[...]`, which Rich would otherwise swallow.
    """

    def __init__(self) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._err = Console(stderr=True)
        self._out = Console(soft_wrap=True)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.BOLD: "bold",
            Style.HEADER: "blue bold",
        }

    def _prefixed(self, prefix: str, prefix_style: str, message: str) -> None:
        from rich.text import Text

        self._err.print(Text.assemble((prefix, prefix_style), " ", message))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        self._err.print(message, style=rich_style or None, markup=False, highlight=False)

    def success(self, message: str) -> None:
        self._prefixed("OK", "green", message)

    def error(self, message: str) -> None:
        self._prefixed("error:", "red bold", message)

    def warning(self, message: str) -> None:
        self._prefixed("warning:", "yellow", message)

    def info(self, message: str) -> None:
        self._prefixed("info:", "cyan", message)

    def header(self, message: str) -> None:
        self._err.print()
        self._err.print(message, style="blue bold", markup=False, highlight=False)

    def newline(self) -> None:
        self._err.print()

    def emit(self, text: str) -> None:
        self._out.print(text, markup=False, highlight=False)


@dataclass
class OutputRecord:
    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


def _empty_lines() -> list[str]:
    return []


@dataclass
class MockConsole:
    """Console that records everything, for tests.

    `outputs` holds diagnostics; `emitted` holds what would go to stdout.
    """

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)
    emitted: list[str] = field(default_factory=_empty_lines)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    def emit(self, text: str) -> None:
        self.emitted.append(text)

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    @property
    def stdout(self) -> str:
        return "\n".join(self.emitted)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
