"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from relflow.core.result import Err, Result
from relflow.output.errors import AnyError, error_exit_code, print_error

if TYPE_CHECKING:
    from relflow.cli.context import CLIContext

T = TypeVar("T")


def unwrap_or_exit(result: Result[T, AnyError], ctx: CLIContext) -> T:
    """Return the value of an Ok result; report an Err and exit.

    Replaces the pattern:
        if isinstance(result, Err):
            print_error(result.error, ctx.console)
            raise typer.Exit(code=error_exit_code(result.error))
        value = result.value

    The exit code depends on the error type (see `relflow.core.errors`).
    """
    if isinstance(result, Err):
        print_error(result.error, ctx.console)
        raise typer.Exit(code=error_exit_code(result.error))
    return result.value
