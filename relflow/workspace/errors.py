from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relflow.parse.manifest import ManifestError


@dataclass(frozen=True, slots=True)
class ManifestMissing:
    root: Path

    @property
    def message(self) -> str:
        return f"`Cargo.toml` does not exist in the project directory ({self.root})"


@dataclass(frozen=True, slots=True)
class WorkspaceReadError:
    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"failed to read {self.path}: {self.reason}"


@dataclass(frozen=True, slots=True)
class InvalidManifest:
    path: Path
    error: ManifestError

    @property
    def message(self) -> str:
        return f"{self.path}: {self.error.message}"


@dataclass(frozen=True, slots=True)
class InvalidField:
    path: Path
    field: str
    reason: str

    @property
    def message(self) -> str:
        return f"{self.path}: `{self.field}`: {self.reason}"


@dataclass(frozen=True, slots=True)
class MissingVersion:
    name: str
    path: Path

    @property
    def message(self) -> str:
        return (
            f"package `{self.name}` inherits its version from the workspace, "
            f"but the workspace does not declare one ({self.path})"
        )


@dataclass(frozen=True, slots=True)
class DuplicateUnit:
    name: str
    paths: tuple[Path, ...]

    @property
    def message(self) -> str:
        where = ", ".join(str(p) for p in self.paths)
        return f"package name `{self.name}` is declared more than once: {where}"


@dataclass(frozen=True, slots=True)
class DependencyCycle:
    names: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"dependency cycle detected among: {', '.join(self.names)}"


WorkspaceError = (
    ManifestMissing
    | WorkspaceReadError
    | InvalidManifest
    | InvalidField
    | MissingVersion
    | DuplicateUnit
    | DependencyCycle
)
