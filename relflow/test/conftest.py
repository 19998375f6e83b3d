from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

WriteTree = Callable[[dict[str, str]], Path]


@pytest.fixture
def write_tree(tmp_path: Path) -> WriteTree:
    """Write `{relative path: content}` under tmp_path and return tmp_path.

    Content is dedented, so manifests can be written as indented literals.
    """

    def _write(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def package_toml() -> Callable[..., str]:
    """Render a minimal publishable `Cargo.toml`."""

    def _render(name: str, version: str | None = "0.1.0", *, deps: tuple[str, ...] = (), extra: str = "") -> str:
        lines = ["[package]", f'name = "{name}"']
        if version is not None:
            lines.append(f'version = "{version}"')
        lines.append('license = "MIT"')
        lines.append(f'description = "the {name} package"')
        if extra:
            lines.append(extra)
        lines.append("")
        lines.append("[dependencies]")
        for dep in deps:
            lines.append(f'{dep} = {{ path = "../{dep}", version = "*" }}')
        return "\n".join(lines) + "\n"

    return _render
