"""Workspace discovery and dependency ordering."""

from .errors import WorkspaceError
from .graph import DependencyGraph, build_graph, describe_edges, publish_order
from .model import Unit, Workspace
from .scanner import find_units, load_workspace, scan_workspace

__all__ = [
    "DependencyGraph",
    "Unit",
    "Workspace",
    "WorkspaceError",
    "build_graph",
    "describe_edges",
    "find_units",
    "load_workspace",
    "publish_order",
    "scan_workspace",
]
