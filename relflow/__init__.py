"""Release planning for multi-package Cargo workspaces."""

__version__ = "0.4.0"
