"""Tests for relflow.git.tags."""

from __future__ import annotations

from pathlib import Path

import pytest

from relflow.core.result import Err, Ok, Result
from relflow.git import tags as git_tags
from relflow.git.tags import GitError, list_tags, parse_tag_list
from relflow.platform.process import ProcessError


def test_parse_tag_list() -> None:
    output = "v1.0.0\n  lib-v0.2.0 \n\nv1.1.0\n"
    assert parse_tag_list(output) == frozenset({"v1.0.0", "lib-v0.2.0", "v1.1.0"})


def test_parse_empty_output() -> None:
    assert parse_tag_list("") == frozenset()


def test_list_tags(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[list[str], Path]] = []

    def fake_run(cmd: list[str], cwd: Path, *, timeout: float | None = None) -> Result[str, ProcessError]:
        calls.append((cmd, cwd))
        return Ok("v2.2.2\nsub-v1.0.0\n")

    monkeypatch.setattr(git_tags, "run_process", fake_run)

    assert list_tags(tmp_path) == Ok(frozenset({"v2.2.2", "sub-v1.0.0"}))
    assert calls == [(["git", "tag", "--list"], tmp_path)]


def test_list_tags_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd: list[str], cwd: Path, *, timeout: float | None = None) -> Result[str, ProcessError]:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=128,
                stdout="",
                stderr="fatal: not a git repository\n",
            )
        )

    monkeypatch.setattr(git_tags, "run_process", fake_run)

    assert list_tags(tmp_path) == Err(
        GitError(command="git tag --list", message="fatal: not a git repository", returncode=128)
    )


def test_list_tags_failure_without_stderr(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd: list[str], cwd: Path, *, timeout: float | None = None) -> Result[str, ProcessError]:
        return Err(ProcessError(command=tuple(cmd), returncode=1, stdout="", stderr=""))

    monkeypatch.setattr(git_tags, "run_process", fake_run)

    result = list_tags(tmp_path)
    assert isinstance(result, Err)
    assert result.error.message == "git tag --list failed (exit 1)"
