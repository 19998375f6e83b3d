"""Line-oriented reader for Cargo manifests.

This is not a TOML parser. Release planning only needs three
things from a manifest: scalar fields (`name`, `version`, `publish`), the list
of top-level `[section]` headers, and the raw text under each header. Those
can be pulled out line by line.

Known blind spots: multi-line strings, inline tables spread over several
lines, and array items that start with `[` are not understood and may be
misread.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from relflow.core.result import Err, Ok, Result

__all__ = [
    "Scalar",
    "Manifest",
    "FieldNotFound",
    "UnclosedString",
    "ManifestError",
]

Scalar = str | bool

# Leading run of letters/digits: `true # comment` -> `true`, `truex` -> `truex`.
_ALNUM_PREFIX = re.compile(r"[^\W_]*")
_INLINE_WORKSPACE = re.compile(r"^\{\s*workspace\s*=\s*true\s*\}")


@dataclass(frozen=True, slots=True)
class FieldNotFound:
    field: str

    @property
    def message(self) -> str:
        return f"can't find `{self.field}`"


@dataclass(frozen=True, slots=True)
class UnclosedString:
    """A quoted value that does not close on its own line."""

    field: str
    line: str
    line_number: int

    @property
    def message(self) -> str:
        return f"unclosed string, or multi-line value in '{self.line.strip()}' (line {self.line_number})"


ManifestError = FieldNotFound | UnclosedString


def _section_header(line: str) -> str | None:
    """Return the section name if `line` is a `[name]` or `[[name]]` header."""
    line = line.strip()
    if not line.startswith("["):
        return None

    line = line[2:] if line.startswith("[[") else line[1:]
    name, sep, _ = line.partition("]")
    if not sep:
        return None
    return name.strip()


def _basic_string(value: str) -> str | None:
    """Contents of the `"..."` string `value` starts with, or None if unclosed.

    `\\"` and `\\\\` are unescaped; other escapes are kept as written.
    """
    out: list[str] = []
    index = 1
    while index < len(value):
        char = value[index]
        if char == '"':
            return "".join(out)
        if char == "\\" and value[index + 1 : index + 2] in ('"', "\\"):
            out.append(value[index + 1])
            index += 2
            continue
        out.append(char)
        index += 1
    return None


@dataclass(frozen=True, slots=True)
class Manifest:
    """Manifest text (or the body of one of its sections)."""

    text: str

    def lines(self) -> list[str]:
        return self.text.splitlines()

    def get_field(self, path: str) -> Result[Scalar, ManifestError]:
        """Look up the first `path = value` line.

        `path` is matched literally against the trimmed key, so dotted keys
        such as `package.version` only match when written that way.

        Returns:
            Ok(str) for a quoted value, Ok(bool) for bare true/false,
            Err(UnclosedString) if the quote does not close on the same line,
            Err(FieldNotFound) otherwise.
        """
        for number, line in enumerate(self.lines(), start=1):
            key, sep, value = line.partition("=")
            if not sep or key.strip() != path:
                continue

            value = value.strip()
            if value.startswith('"'):
                text = None if value.startswith('"""') else _basic_string(value)
                if text is None:
                    return Err(UnclosedString(field=path, line=line, line_number=number))
                return Ok(text)

            word = _ALNUM_PREFIX.match(value)
            match word.group() if word else "":
                case "true":
                    return Ok(True)
                case "false":
                    return Ok(False)
                case _:
                    # Tables, arrays, numbers: not a scalar we understand, keep looking.
                    continue

        return Err(FieldNotFound(field=path))

    def inherits(self, key: str) -> Result[bool, ManifestError]:
        """Whether `key` defers to the workspace.

        Both spellings are recognised:

            version.workspace = true
            version = { workspace = true }
        """
        dotted = self.get_field(f"{key}.workspace")
        match dotted:
            case Ok(True):
                return Ok(True)
            case Err(UnclosedString() as e):
                return Err(e)
            case _:
                pass

        for line in self.lines():
            k, sep, value = line.partition("=")
            if sep and k.strip() == key and _INLINE_WORKSPACE.match(value.strip()):
                return Ok(True)
        return Ok(False)

    def sections(self) -> list[tuple[str, Manifest]]:
        """Split into `(name, body)` pairs, one per header, in document order.

        Text before the first header belongs to no section. Bodies are
        trimmed; inline comments after a header are dropped.
        """
        lines = self.lines()
        out: list[tuple[str, Manifest]] = []
        current: str | None = None
        start = 0

        for index, line in enumerate(lines):
            name = _section_header(line)
            if name is None:
                continue
            if current is not None:
                out.append((current, Manifest("\n".join(lines[start:index]).strip())))
            current = name
            start = index + 1

        if current is not None:
            out.append((current, Manifest("\n".join(lines[start:]).strip())))
        return out

    def section(self, name: str) -> Manifest | None:
        """Body of the first section called `name`."""
        for section_name, body in self.sections():
            if section_name == name:
                return body
        return None

    def has_section(self, name: str) -> bool:
        return any(section_name == name for section_name, _ in self.sections())
