from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ChangelogEntryMissing:
    """No heading at any searched depth mentions the version."""

    path: Path
    unit: str

    @property
    def message(self) -> str:
        return f"changelog at '{self.path}' does not contain an entry for {self.unit}"


@dataclass(frozen=True, slots=True)
class ChangelogEntryAmbiguous:
    """Several headings mention both the version and the package name."""

    path: Path
    unit: str
    titles: tuple[str, ...]

    @property
    def message(self) -> str:
        found = ", ".join(repr(t) for t in self.titles)
        return f"changelog at '{self.path}' contains multiple entries for {self.unit}: {found}"


@dataclass(frozen=True, slots=True)
class ChangelogEntryUnnamed:
    """Several headings mention the version, none of them the package name."""

    path: Path
    unit: str
    titles: tuple[str, ...]

    @property
    def message(self) -> str:
        found = ", ".join(repr(t) for t in self.titles)
        return (
            f"changelog at '{self.path}' is missing an entry for {self.unit} "
            f"(entries for this version: {found})"
        )


@dataclass(frozen=True, slots=True)
class MetadataMissing:
    name: str
    field: str

    @property
    def message(self) -> str:
        return f"package `{self.name}` is missing a {self.field} field"


ReleaseError = ChangelogEntryMissing | ChangelogEntryAmbiguous | ChangelogEntryUnnamed | MetadataMissing
