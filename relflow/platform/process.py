"""The one place relflow starts child processes.

Only read-only queries go through here (`git tag --list`); relflow never
publishes, tags or pushes itself.

    match run(["git", "tag", "--list"], cwd=workspace_root):
        case Ok(listing):
            ...
        case Err(failure):
            console.error(str(failure))
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from relflow.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]

# returncode used when the child never produced one
NO_EXIT_STATUS = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that could not be started, timed out, or exited non-zero."""

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        shown = self.command[:3]
        ellipsis = " ..." if len(self.command) > len(shown) else ""
        return f"{' '.join(shown)}{ellipsis} failed (exit {self.returncode})"


def _not_run(cmd: list[str], reason: str) -> Err[ProcessError]:
    return Err(ProcessError(tuple(cmd), NO_EXIT_STATUS, "", reason))


def run(cmd: list[str], cwd: Path, *, timeout: float | None = None) -> Result[str, ProcessError]:
    """Run `cmd` in `cwd`; Ok(stdout) on exit status 0.

    `CI=1` is set for the child so nothing waits on a prompt.
    """
    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            env=os.environ | {"CI": "1"},
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return _not_run(cmd, f"Command timed out after {timeout}s")
    except OSError as e:
        return _not_run(cmd, str(e))

    if completed.returncode:
        return Err(ProcessError(tuple(cmd), completed.returncode, completed.stdout, completed.stderr))
    return Ok(completed.stdout)
