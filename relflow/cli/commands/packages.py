from __future__ import annotations

from relflow.cli.commands._helpers import unwrap_or_exit
from relflow.cli.context import build_context
from relflow.output.console import Style
from relflow.release.service import discover


def packages() -> None:
    """List publishable packages in publish order."""
    ctx = build_context()
    found = unwrap_or_exit(discover(root=ctx.root, config=ctx.config, console=ctx.console), ctx)

    ctx.console.print(f"workspace: {found.workspace.root_path}", Style.DIM)
    if found.workspace.inherited_version is not None:
        ctx.console.print(f"workspace version: {found.workspace.inherited_version}", Style.DIM)

    if not found.units:
        ctx.console.warning("no publishable packages found")
        return

    for unit in found.units:
        deps = found.graph.dependencies(unit.name)
        suffix = f" (after {', '.join(deps)})" if deps else ""
        ctx.console.emit(f"{unit}{suffix}")
