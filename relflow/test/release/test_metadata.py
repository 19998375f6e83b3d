"""Tests for relflow.release.metadata."""

from __future__ import annotations

from pathlib import Path

import pytest

from relflow.core.result import Err, Ok
from relflow.release.errors import MetadataMissing
from relflow.release.metadata import check_metadata
from relflow.workspace.errors import InvalidManifest
from relflow.workspace.model import Unit


def _unit(name: str, package_lines: str) -> Unit:
    body = f'[package]\nname = "{name}"\nversion = "1.0.0"\n{package_lines}\n'
    return Unit(name=name, version="1.0.0", path=Path("/ws") / name, manifest_body=body)


@pytest.mark.parametrize(
    "lines",
    [
        'license = "MIT"\ndescription = "d"',
        'license-file = "LICENSE"\ndescription = "d"',
        "license.workspace = true\ndescription.workspace = true",
        'license = { workspace = true }\ndescription = "d"',
    ],
)
def test_complete_metadata(lines: str) -> None:
    assert check_metadata([_unit("mypkg", lines)]) == Ok(None)


def test_missing_license() -> None:
    result = check_metadata([_unit("mypkg", 'description = "d"')])
    assert result == Err(MetadataMissing(name="mypkg", field="license"))
    assert result.error.message == "package `mypkg` is missing a license field"


def test_missing_description() -> None:
    result = check_metadata([_unit("mypkg", 'license = "MIT"')])
    assert result == Err(MetadataMissing(name="mypkg", field="description"))


def test_blank_license_does_not_count() -> None:
    result = check_metadata([_unit("mypkg", 'license = ""\ndescription = "d"')])
    assert isinstance(result, Err)


def test_only_package_section_counts() -> None:
    lines = '\n[package.metadata.docs]\nlicense = "MIT"\ndescription = "d"'
    result = check_metadata([_unit("mypkg", lines)])
    assert result == Err(MetadataMissing(name="mypkg", field="license"))


def test_first_failing_unit_is_reported() -> None:
    units = [_unit("ok", 'license = "MIT"\ndescription = "d"'), _unit("bad", ""), _unit("worse", "")]
    result = check_metadata(units)
    assert isinstance(result, Err)
    assert isinstance(result.error, MetadataMissing)
    assert result.error.name == "bad"


def test_unclosed_value() -> None:
    result = check_metadata([_unit("mypkg", 'license = "MIT\ndescription = "d"')])
    assert isinstance(result, Err)
    assert isinstance(result.error, InvalidManifest)
