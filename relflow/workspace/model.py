from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relflow.core.config import MANIFEST_FILE_NAME
from relflow.parse.manifest import Manifest


@dataclass(frozen=True, slots=True)
class Workspace:
    """The directory a scan starts from, plus what its root manifest declares.

    Built once per invocation by `load_workspace` and never mutated.
    """

    root_path: Path
    # `[workspace.package] version = ...`, used by `version.workspace = true`.
    inherited_version: str | None = None
    shared_changelog_path: Path | None = None

    @property
    def manifest_path(self) -> Path:
        return self.root_path / MANIFEST_FILE_NAME

    def __str__(self) -> str:
        return str(self.root_path)


@dataclass(frozen=True, slots=True)
class Unit:
    """A publishable package discovered in the workspace."""

    name: str
    version: str
    path: Path
    manifest_body: str
    # Only set when the package has a changelog of its own (not the shared one).
    changelog_path: Path | None = None
    release_notes: str | None = None

    @property
    def manifest(self) -> Manifest:
        return Manifest(self.manifest_body)

    @property
    def manifest_path(self) -> Path:
        return self.path / MANIFEST_FILE_NAME

    @property
    def collective_tag(self) -> str:
        return f"v{self.version}"

    @property
    def own_tag(self) -> str:
        return f"{self.name}-v{self.version}"

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"
