"""Error codes for CLI exit status.

One code per failure family, so a CI pipeline can tell a broken manifest from
a missing changelog entry without scraping the output.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad arguments, invalid --workspace)
    - 2: Configuration error (missing manifest, missing field or metadata, bad relflow.toml)
    - 3: Parse error (unclosed string in a manifest)
    - 4: Graph error (dependency cycle)
    - 5: Changelog error (missing or ambiguous entry)
    - 6: I/O error (workspace could not be read)
    - 7: Git error (tags could not be listed)
    """

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    PARSE_ERROR = 3
    GRAPH_ERROR = 4
    CHANGELOG_ERROR = 5
    IO_ERROR = 6
    GIT_ERROR = 7

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

