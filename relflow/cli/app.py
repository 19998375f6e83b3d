from __future__ import annotations

import os
from pathlib import Path

import typer

from relflow import __version__
from relflow.cli.commands.packages import packages
from relflow.cli.commands.plan import plan
from relflow.cli.context import WORKSPACE_ENV_VAR
from relflow.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Plan releases of the packages in a Cargo workspace.",
)


# Commands
app.command()(packages)
app.command()(plan)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    workspace: Path | None = typer.Option(
        None,
        "--workspace",
        help="Workspace root (defaults to the current directory)",
    ),
) -> None:
    if workspace is not None:
        os.environ[WORKSPACE_ENV_VAR] = str(workspace)


def main() -> None:
    app()
