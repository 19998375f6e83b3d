"""Discovery of publishable packages.

A scan starts at the workspace root, which must hold a `Cargo.toml`, and walks
every subdirectory (minus the configured exclusions). A directory becomes a
`Unit` when its manifest:

- has a `[package]` section (virtual manifests only organise the tree),
- does not say `publish = false`,
- declares a `version`, or inherits one with `version.workspace = true`.

The result is sorted by name. Directory listing order differs between
platforms and filesystems; the name order is also the tie-break the publish
order relies on.
"""

from __future__ import annotations

from pathlib import Path

from relflow.core.config import MANIFEST_FILE_NAME, Config, ScanConfig
from relflow.core.result import Err, Ok, Result
from relflow.parse.manifest import FieldNotFound, Manifest
from relflow.workspace.errors import (
    DuplicateUnit,
    InvalidField,
    InvalidManifest,
    ManifestMissing,
    MissingVersion,
    WorkspaceError,
    WorkspaceReadError,
)
from relflow.workspace.model import Unit, Workspace

__all__ = ["load_workspace", "find_units", "scan_workspace", "read_text"]


def read_text(path: Path) -> Result[str, WorkspaceReadError]:
    try:
        return Ok(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(WorkspaceReadError(path=path, reason=str(e)))


def _string_field(path: Path, body: Manifest, field: str) -> Result[str | None, WorkspaceError]:
    """Read a string field; Ok(None) when the field is absent."""
    match body.get_field(field):
        case Ok(str() as value):
            return Ok(value)
        case Ok(_):
            return Err(InvalidField(path=path, field=field, reason="expected a string"))
        case Err(FieldNotFound()):
            return Ok(None)
        case Err(error):
            return Err(InvalidManifest(path=path, error=error))


def _inherited_version(path: Path, manifest: Manifest) -> Result[str | None, WorkspaceError]:
    if not manifest.has_section("workspace"):
        return Ok(None)

    # `[workspace.package] version = ...` or `[workspace] package.version = ...`
    candidates: list[tuple[Manifest, str]] = []
    table = manifest.section("workspace.package")
    if table is not None:
        candidates.append((table, "version"))
    workspace = manifest.section("workspace")
    if workspace is not None:
        candidates.append((workspace, "package.version"))

    for body, field in candidates:
        version = _string_field(path, body, field)
        if isinstance(version, Err) or version.value is not None:
            return version
    return Ok(None)


def load_workspace(root: Path, config: Config | None = None) -> Result[Workspace, WorkspaceError]:
    """Read the root manifest and build the `Workspace` record."""
    config = config or Config()

    manifest_path = root / MANIFEST_FILE_NAME
    if not manifest_path.is_file():
        return Err(ManifestMissing(root=root))

    text = read_text(manifest_path)
    if isinstance(text, Err):
        return text

    inherited = _inherited_version(manifest_path, Manifest(text.value))
    if isinstance(inherited, Err):
        return inherited

    changelog = root / config.changelog.file
    return Ok(
        Workspace(
            root_path=root,
            inherited_version=inherited.value,
            shared_changelog_path=changelog if changelog.is_file() else None,
        )
    )


def _unit_from_manifest(
    directory: Path,
    text: str,
    workspace: Workspace,
    config: Config,
) -> Result[Unit | None, WorkspaceError]:
    manifest_path = directory / MANIFEST_FILE_NAME
    package = Manifest(text).section("package")
    if package is None:
        return Ok(None)

    match package.get_field("publish"):
        case Ok(False):
            return Ok(None)
        case Err(FieldNotFound()) | Ok(_):
            pass
        case Err(error):
            return Err(InvalidManifest(path=manifest_path, error=error))

    name = _string_field(manifest_path, package, "name")
    if isinstance(name, Err):
        return name
    if name.value is None:
        return Err(InvalidField(path=manifest_path, field="name", reason="package has no name"))

    version = _string_field(manifest_path, package, "version")
    if isinstance(version, Err):
        return version

    resolved = version.value
    if resolved is None:
        inherits = package.inherits("version")
        if isinstance(inherits, Err):
            return Err(InvalidManifest(path=manifest_path, error=inherits.error))
        if not inherits.value:
            return Ok(None)
        if workspace.inherited_version is None:
            return Err(MissingVersion(name=name.value, path=manifest_path))
        resolved = workspace.inherited_version

    changelog = directory / config.changelog.file
    own_changelog = changelog if directory != workspace.root_path and changelog.is_file() else None

    return Ok(
        Unit(
            name=name.value,
            version=resolved,
            path=directory,
            manifest_body=text,
            changelog_path=own_changelog,
        )
    )


def _child_dirs(directory: Path, scan: ScanConfig) -> Result[list[Path], WorkspaceError]:
    try:
        children = [
            p
            for p in directory.iterdir()
            if p.is_dir() and not p.is_symlink() and not scan.is_excluded(p)
        ]
    except OSError as e:
        return Err(WorkspaceReadError(path=directory, reason=str(e)))
    return Ok(sorted(children))


def find_units(workspace: Workspace, config: Config | None = None) -> Result[list[Unit], WorkspaceError]:
    """Walk the workspace and collect every publishable package, sorted by name."""
    config = config or Config()

    units: list[Unit] = []
    pending = [workspace.root_path]
    while pending:
        directory = pending.pop()

        manifest_path = directory / MANIFEST_FILE_NAME
        if manifest_path.is_file():
            text = read_text(manifest_path)
            if isinstance(text, Err):
                return text
            unit = _unit_from_manifest(directory, text.value, workspace, config)
            if isinstance(unit, Err):
                return unit
            if unit.value is not None:
                units.append(unit.value)

        children = _child_dirs(directory, config.scan)
        if isinstance(children, Err):
            return children
        pending.extend(reversed(children.value))

    seen: dict[str, list[Path]] = {}
    for unit in units:
        seen.setdefault(unit.name, []).append(unit.manifest_path)
    for name, paths in seen.items():
        if len(paths) > 1:
            return Err(DuplicateUnit(name=name, paths=tuple(paths)))

    units.sort(key=lambda u: u.name)
    return Ok(units)


def scan_workspace(
    root: Path, config: Config | None = None
) -> Result[tuple[Workspace, list[Unit]], WorkspaceError]:
    """`load_workspace` followed by `find_units`."""
    workspace = load_workspace(root, config)
    if isinstance(workspace, Err):
        return workspace
    units = find_units(workspace.value, config)
    if isinstance(units, Err):
        return units
    return Ok((workspace.value, units.value))
