"""Heading-based splitting of Markdown change documents."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Markdown", "heading_level"]

_FENCE_CHARS = "`~"


def heading_level(line: str) -> tuple[int, str] | None:
    """Return `(level, title)` for an ATX heading line, else None."""
    line = line.strip()
    if not line.startswith("#"):
        return None

    title = line.lstrip("#")
    return len(line) - len(title), title.strip()


def _opening_fence(line: str) -> str | None:
    """The marker run if `line` opens a fenced code block.

    A run of three or more backticks or tildes. A backtick run followed by
    another backtick on the same line is inline code, not a fence.
    """
    if not line or line[0] not in _FENCE_CHARS:
        return None
    marker = line[: len(line) - len(line.lstrip(line[0]))]
    if len(marker) < 3:
        return None
    if marker[0] == "`" and "`" in line[len(marker) :]:
        return None
    return marker


def _closes(line: str, fence: str) -> bool:
    # only the fence character, at least as many as opened the block
    return len(line) >= len(fence) and line == fence[0] * len(line)


@dataclass(frozen=True, slots=True)
class Markdown:
    text: str

    def sections(self, depth: int) -> list[tuple[str, Markdown]]:
        """Split into `(title, body)` pairs at headings of exactly `depth`.

        Shallower and deeper headings stay in the enclosing body. Lines inside
        fenced code blocks never start a section. Returns an empty list when
        there is no heading at this depth.
        """
        lines = self.text.splitlines()
        out: list[tuple[str, Markdown]] = []
        title: str | None = None
        start = 0
        fence: str | None = None

        for index, line in enumerate(lines):
            stripped = line.strip()
            if fence is not None:
                if _closes(stripped, fence):
                    fence = None
                continue
            fence = _opening_fence(stripped)
            if fence is not None:
                continue

            heading = heading_level(line)
            if heading is None or heading[0] != depth:
                continue
            if title is not None:
                out.append((title, Markdown("\n".join(lines[start:index]).strip())))
            title = heading[1]
            start = index + 1

        if title is not None:
            out.append((title, Markdown("\n".join(lines[start:]).strip())))
        return out

    def __str__(self) -> str:
        return self.text
