from __future__ import annotations

import typer

from relflow.cli.commands._helpers import unwrap_or_exit
from relflow.cli.context import CLIContext, build_context
from relflow.git.tags import list_tags
from relflow.output.console import Style
from relflow.release.actions import render_action
from relflow.release.plan_file import dumps_plan
from relflow.release.service import ReleasePlan, plan_release


def plan(
    tag: list[str] | None = typer.Option(
        None,
        "--tag",
        help="Existing release tag (repeatable). When given, git is not queried.",
    ),
    no_git: bool = typer.Option(False, "--no-git", help="Assume no existing tags."),
    as_json: bool = typer.Option(False, "--json", help="Print the plan as JSON on stdout."),
) -> None:
    """Show what would be published, tagged and released."""
    ctx = build_context()

    if tag:
        markers = frozenset(t.strip() for t in tag if t.strip())
    elif no_git:
        markers = frozenset[str]()
    else:
        markers = unwrap_or_exit(list_tags(ctx.root), ctx)

    release_plan = unwrap_or_exit(
        plan_release(root=ctx.root, markers=markers, config=ctx.config, console=ctx.console),
        ctx,
    )

    if as_json:
        ctx.console.emit(dumps_plan(release_plan))
        return
    _print_plan(ctx, release_plan)


def _print_plan(ctx: CLIContext, release_plan: ReleasePlan) -> None:
    publish_set = release_plan.publish_set
    if publish_set.is_empty:
        return

    mode = "one tag for the batch" if publish_set.granularity == "collective" else "one tag per package"
    ctx.console.header("Plan")
    ctx.console.print(f"tagging: {publish_set.granularity} ({mode})", Style.DIM)
    for action in release_plan.actions:
        ctx.console.emit(f"> {render_action(action)}")
