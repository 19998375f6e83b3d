"""Git access (read-only)."""

from .tags import GitError, list_tags, parse_tag_list

__all__ = ["GitError", "list_tags", "parse_tag_list"]
