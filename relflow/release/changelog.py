"""Locating a package's release notes in its change document.

Two layouts are supported without any configuration:

- one entry per version, `## 1.2.0` (per-package or shared changelog);
- a shared changelog with one entry per package and version,
  `## mylib 1.2.0` / `## mylib-derive 1.2.0`.

Headings are searched from depth 1 down to `max_depth`. The first depth with
at least one heading containing the version wins; when it has several, the
package name (case-insensitive) decides.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from relflow.core.config import Config
from relflow.core.result import Err, Ok, Result
from relflow.parse.markdown import Markdown
from relflow.release.errors import (
    ChangelogEntryAmbiguous,
    ChangelogEntryMissing,
    ChangelogEntryUnnamed,
    ReleaseError,
)
from relflow.workspace.errors import WorkspaceReadError
from relflow.workspace.model import Unit, Workspace
from relflow.workspace.scanner import read_text

__all__ = ["changelog_for", "extract_release_notes", "attach_release_notes"]


def changelog_for(unit: Unit, workspace: Workspace) -> Path | None:
    return unit.changelog_path or workspace.shared_changelog_path


def extract_release_notes(
    unit: Unit,
    document: Markdown,
    *,
    path: Path,
    max_depth: int = 3,
) -> Result[str, ReleaseError]:
    matches: list[tuple[str, Markdown]] = []
    for depth in range(1, max_depth + 1):
        matches = [(title, body) for title, body in document.sections(depth) if unit.version in title]
        if matches:
            break

    if not matches:
        return Err(ChangelogEntryMissing(path=path, unit=str(unit)))
    if len(matches) == 1:
        return Ok(matches[0][1].text)

    named = [(title, body) for title, body in matches if unit.name.lower() in title.lower()]
    if len(named) == 1:
        return Ok(named[0][1].text)
    if named:
        return Err(
            ChangelogEntryAmbiguous(path=path, unit=str(unit), titles=tuple(t for t, _ in named))
        )
    return Err(ChangelogEntryUnnamed(path=path, unit=str(unit), titles=tuple(t for t, _ in matches)))


def attach_release_notes(
    units: list[Unit],
    workspace: Workspace,
    config: Config | None = None,
) -> Result[list[Unit], ReleaseError | WorkspaceReadError]:
    """Return `units` with `release_notes` filled in from their changelogs.

    Units without any changelog are returned unchanged. Each document is read
    once, however many units share it.
    """
    config = config or Config()
    documents: dict[Path, Markdown] = {}
    out: list[Unit] = []

    for unit in units:
        path = changelog_for(unit, workspace)
        if path is None:
            out.append(unit)
            continue

        document = documents.get(path)
        if document is None:
            text = read_text(path)
            if isinstance(text, Err):
                return text
            document = documents[path] = Markdown(text.value)

        notes = extract_release_notes(
            unit, document, path=path, max_depth=config.changelog.max_depth
        )
        if isinstance(notes, Err):
            return notes
        out.append(replace(unit, release_notes=notes.value))

    return Ok(out)
