"""Formatting utilities for opencode-worktree.

- path: Repository-relative path display
- status: Working tree and remote status summaries
"""

from .path import format_path

from .status import (
    pluralize,
    format_change_counts,
    format_working_tree_status,
    format_ahead_behind,
    format_remote_status,
)

__all__ = [
    "format_path",
    "pluralize",
    "format_change_counts",
    "format_working_tree_status",
    "format_ahead_behind",
    "format_remote_status",
]
