from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relflow.core.config import Config, load_config_or_default
from relflow.core.errors import ErrorCode
from relflow.core.result import Err
from relflow.output.console import ConsoleProtocol, RichConsole
from relflow.output.errors import error_exit_code, print_error

WORKSPACE_ENV_VAR = "RELFLOW_WORKSPACE"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    console: ConsoleProtocol


def workspace_root() -> Path:
    """`--workspace` (via the environment), else the current directory."""
    env = os.environ.get(WORKSPACE_ENV_VAR)
    return Path(env) if env else Path.cwd()


def build_context() -> CLIContext:
    console = RichConsole()

    try:
        root = workspace_root().expanduser().resolve()
    except OSError as e:
        console.error(f"invalid workspace path: {e}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    if not root.is_dir():
        console.error(f"workspace '{root}' is not a directory")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config = load_config_or_default(root)
    if isinstance(config, Err):
        print_error(config.error, console)
        raise typer.Exit(code=error_exit_code(config.error))

    return CLIContext(root=root, config=config.value, console=console)
