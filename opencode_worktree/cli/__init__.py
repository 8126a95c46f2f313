"""Command-line interface for opencode-worktree.

This package provides the console entry points and argument parsing.
"""

from .main import add_main, remove_main, list_main, switch_main, status_main, sync_main

__all__ = ["add_main", "remove_main", "list_main", "switch_main", "status_main", "sync_main"]
