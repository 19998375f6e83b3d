"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relflow.core.config import ConfigError
from relflow.core.errors import ErrorCode
from relflow.git.tags import GitError
from relflow.output.console import Style
from relflow.release.errors import (
    ChangelogEntryAmbiguous,
    ChangelogEntryMissing,
    ChangelogEntryUnnamed,
    MetadataMissing,
)
from relflow.release.service import PlanError
from relflow.workspace.errors import (
    DependencyCycle,
    DuplicateUnit,
    InvalidField,
    InvalidManifest,
    ManifestMissing,
    MissingVersion,
    WorkspaceReadError,
)

if TYPE_CHECKING:
    from relflow.output.console import ConsoleProtocol

__all__ = ["AnyError", "print_error", "error_exit_code"]

AnyError = PlanError | ConfigError | GitError


def print_error(error: AnyError, console: ConsoleProtocol) -> None:
    match error:
        case ManifestMissing():
            console.error(error.message)
            console.print("hint: run from the workspace root or pass --workspace", Style.DIM)
        case InvalidManifest():
            console.error(error.message)
            console.print(
                "hint: relflow reads single-line values only; move comments to their own line",
                Style.DIM,
            )
        case MissingVersion():
            console.error(error.message)
            console.print("hint: add `version` under [workspace.package]", Style.DIM)
        case DependencyCycle():
            console.error(error.message)
            console.print("hint: packages in a cycle cannot be published in order", Style.DIM)
        case ChangelogEntryMissing() | ChangelogEntryUnnamed() | ChangelogEntryAmbiguous():
            console.error(error.message)
            console.print("hint: nothing was published; fix the changelog and rerun", Style.DIM)
        case ConfigError(message=message, path=path):
            console.error(message)
            if path is not None:
                console.print(f"config: {path}", Style.DIM)
        case GitError(command=command, message=message):
            console.error(f"{command}: {message}")
        case _:
            console.error(error.message)


def error_exit_code(error: AnyError) -> int:
    match error:
        case ManifestMissing() | InvalidField() | MissingVersion() | DuplicateUnit() | MetadataMissing():
            return int(ErrorCode.CONFIG_ERROR)
        case ConfigError():
            return int(ErrorCode.CONFIG_ERROR)
        case InvalidManifest():
            return int(ErrorCode.PARSE_ERROR)
        case DependencyCycle():
            return int(ErrorCode.GRAPH_ERROR)
        case ChangelogEntryMissing() | ChangelogEntryAmbiguous() | ChangelogEntryUnnamed():
            return int(ErrorCode.CHANGELOG_ERROR)
        case WorkspaceReadError():
            return int(ErrorCode.IO_ERROR)
        case GitError():
            return int(ErrorCode.GIT_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)
