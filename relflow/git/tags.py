"""Reading existing release markers from git."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relflow.core.result import Err, Ok, Result
from relflow.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = ["GitError", "list_tags", "parse_tag_list"]


@dataclass(frozen=True, slots=True)
class GitError:
    command: str
    message: str
    returncode: int = 1


def parse_tag_list(output: str) -> frozenset[str]:
    return frozenset(line.strip() for line in output.splitlines() if line.strip())


def list_tags(repo_root: Path) -> Result[frozenset[str], GitError]:
    """All tags in the repository at `repo_root`."""
    cmd = ["git", "tag", "--list"]
    result = run_process(cmd, cwd=repo_root, timeout=_GIT_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        error = result.error
        return Err(
            GitError(
                command=" ".join(cmd),
                message=error.stderr.strip() or str(error),
                returncode=error.returncode,
            )
        )
    return Ok(parse_tag_list(result.value))
