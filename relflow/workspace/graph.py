"""Intra-workspace dependency graph and publish order.

Edges come from a textual scan of every `*dependencies` section
(`[dependencies]`, `[dev-dependencies]`, `[build-dependencies]`,
`[target.'cfg(unix)'.dependencies]`, and a root package's
`[workspace.dependencies]`). For each `key = ...` line the part of
the key before the first `.` is compared, case-sensitively, with the names of
the discovered units. Dependencies on anything outside the workspace are not
part of the graph.

The match is on the dependency *key*: a renamed dependency
(`alias = { package = "real", ... }`) is seen as `alias`, and tables that span
several lines are only seen through their first line.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from relflow.core.result import Err, Ok, Result
from relflow.workspace.errors import DependencyCycle
from relflow.workspace.model import Unit

__all__ = ["DependencyGraph", "build_graph", "publish_order", "describe_edges"]


@dataclass(frozen=True, slots=True)
class DependencyGraph:
    # unit name -> names of the workspace units it depends on, sorted
    edges: Mapping[str, tuple[str, ...]]

    def dependencies(self, name: str) -> tuple[str, ...]:
        return self.edges.get(name, ())


def _is_dependency_section(name: str) -> bool:
    return name.endswith("dependencies")


def _dependency_keys(unit: Unit) -> list[str]:
    keys: list[str] = []
    for section_name, body in unit.manifest.sections():
        if not _is_dependency_section(section_name):
            continue
        for line in body.lines():
            key, sep, _ = line.partition("=")
            key = key.strip()
            if not sep or not key or key.startswith("#"):
                continue
            keys.append(key.split(".", 1)[0].strip())
    return keys


def build_graph(units: list[Unit]) -> DependencyGraph:
    names = {u.name for u in units}
    edges: dict[str, tuple[str, ...]] = {}
    for unit in units:
        deps = {key for key in _dependency_keys(unit) if key in names and key != unit.name}
        edges[unit.name] = tuple(sorted(deps))
    return DependencyGraph(edges=edges)


def publish_order(units: list[Unit], graph: DependencyGraph) -> Result[list[Unit], DependencyCycle]:
    """Order units so every unit comes after all of its dependencies.

    Kahn's algorithm run from the top of the graph down: a unit is ready once
    nothing left unplaced depends on it. The build order it produces lists
    dependents first, so it is reversed at the end.

    `units` must already be sorted by name; ready units are taken from a stack
    in that order, which makes the result stable for unrelated siblings.
    """
    by_name = {u.name: u for u in units}
    dependents = {u.name: 0 for u in units}
    for unit in units:
        for dep in graph.dependencies(unit.name):
            dependents[dep] += 1

    ready = [u.name for u in units if dependents[u.name] == 0]
    build_order: list[str] = []
    while ready:
        name = ready.pop()
        build_order.append(name)
        for dep in graph.dependencies(name):
            dependents[dep] -= 1
            if dependents[dep] == 0:
                ready.append(dep)

    if len(build_order) != len(units):
        placed = set(build_order)
        return Err(DependencyCycle(names=tuple(sorted(n for n in by_name if n not in placed))))

    build_order.reverse()
    return Ok([by_name[name] for name in build_order])


def describe_edges(units: list[Unit], graph: DependencyGraph) -> list[str]:
    """`b@0.1.0 depends on a@0.1.0` lines, in unit order."""
    by_name = {u.name: u for u in units}
    return [
        f"{unit} depends on {by_name[dep]}"
        for unit in units
        for dep in graph.dependencies(unit.name)
    ]
