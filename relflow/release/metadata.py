"""Registry metadata required before a package can be published."""

from __future__ import annotations

from collections.abc import Sequence

from relflow.core.result import Err, Ok, Result
from relflow.parse.manifest import FieldNotFound, Manifest
from relflow.release.errors import MetadataMissing
from relflow.workspace.errors import InvalidManifest
from relflow.workspace.model import Unit

__all__ = ["REQUIRED_FIELDS", "check_metadata"]

# field reported when missing -> keys that satisfy it
REQUIRED_FIELDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("license", ("license", "license-file")),
    ("description", ("description",)),
)


def _declares(unit: Unit, package: Manifest, keys: tuple[str, ...]) -> Result[bool, InvalidManifest]:
    for key in keys:
        match package.get_field(key):
            case Ok(str() as value) if value.strip():
                return Ok(True)
            case Err(FieldNotFound()) | Ok(_):
                pass
            case Err(error):
                return Err(InvalidManifest(path=unit.manifest_path, error=error))

        inherited = package.inherits(key)
        if isinstance(inherited, Err):
            return Err(InvalidManifest(path=unit.manifest_path, error=inherited.error))
        if inherited.value:
            return Ok(True)
    return Ok(False)


def check_metadata(units: Sequence[Unit]) -> Result[None, MetadataMissing | InvalidManifest]:
    """Fail on the first unit lacking a license or a description."""
    for unit in units:
        package = unit.manifest.section("package") or Manifest("")
        for field, keys in REQUIRED_FIELDS:
            declared = _declares(unit, package, keys)
            if isinstance(declared, Err):
                return declared
            if not declared.value:
                return Err(MetadataMissing(name=unit.name, field=field))
    return Ok(None)
