from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relflow.core.config import Config
from relflow.core.result import Err, Ok, Result
from relflow.output.console import ConsoleProtocol, Style
from relflow.release.actions import Action, plan_actions
from relflow.release.changelog import attach_release_notes
from relflow.release.errors import ReleaseError
from relflow.release.metadata import check_metadata
from relflow.release.resolver import PublishSet, pending_units, resolve_publish_set
from relflow.workspace.errors import WorkspaceError
from relflow.workspace.graph import DependencyGraph, build_graph, describe_edges, publish_order
from relflow.workspace.model import Unit, Workspace
from relflow.workspace.scanner import scan_workspace

__all__ = ["DiscoveredWorkspace", "ReleasePlan", "PlanError", "discover", "plan_release"]

PlanError = WorkspaceError | ReleaseError


@dataclass(frozen=True, slots=True)
class DiscoveredWorkspace:
    workspace: Workspace
    graph: DependencyGraph
    # publish order
    units: tuple[Unit, ...]


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    workspace: Workspace
    graph: DependencyGraph
    publish_set: PublishSet

    @property
    def units(self) -> tuple[Unit, ...]:
        return tuple(s.unit for s in self.publish_set.statuses)

    @property
    def actions(self) -> list[Action]:
        return plan_actions(self.publish_set)


def _units_list(units: tuple[Unit, ...] | list[Unit]) -> str:
    return "[" + ", ".join(str(u) for u in units) + "]"


def discover(
    *, root: Path, config: Config, console: ConsoleProtocol
) -> Result[DiscoveredWorkspace, WorkspaceError]:
    """Scan the workspace and put its units in publish order."""
    scanned = scan_workspace(root, config)
    if isinstance(scanned, Err):
        return scanned
    workspace, units = scanned.value

    graph = build_graph(units)
    for line in describe_edges(units, graph):
        console.print(line, Style.DIM)

    ordered = publish_order(units, graph)
    if isinstance(ordered, Err):
        return ordered

    return Ok(DiscoveredWorkspace(workspace=workspace, graph=graph, units=tuple(ordered.value)))


def plan_release(
    *,
    root: Path,
    markers: frozenset[str],
    config: Config,
    console: ConsoleProtocol,
) -> Result[ReleasePlan, PlanError]:
    """Build the full release plan for the workspace at `root`.

    Every check (graph, metadata, changelog entries) runs here, so a plan that
    comes back Ok can be executed without discovering a problem halfway.
    """
    found = discover(root=root, config=config, console=console)
    if isinstance(found, Err):
        return found
    discovered = found.value

    console.print(f"existing git tags: {sorted(markers)}", Style.DIM)
    console.print(f"publishable packages in workspace: {_units_list(discovered.units)}")

    pending = pending_units(discovered.units, markers)
    if not pending:
        console.success("no packages need publishing")
        return Ok(
            ReleasePlan(
                workspace=discovered.workspace,
                graph=discovered.graph,
                publish_set=resolve_publish_set(discovered.units, markers),
            )
        )

    noun = "package needs" if len(pending) == 1 else "packages need"
    console.print(f"{len(pending)} {noun} publishing: {_units_list(pending)}", Style.BOLD)

    if config.publish.require_metadata:
        metadata = check_metadata(pending)
        if isinstance(metadata, Err):
            return metadata

    with_notes = attach_release_notes(pending, discovered.workspace, config)
    if isinstance(with_notes, Err):
        return with_notes

    by_name = {u.name: u for u in with_notes.value}
    order = [by_name.get(u.name, u) for u in discovered.units]
    return Ok(
        ReleasePlan(
            workspace=discovered.workspace,
            graph=discovered.graph,
            publish_set=resolve_publish_set(order, markers),
        )
    )
