"""Worktree commands.

Each command takes a CommandContext plus its own options and returns an exit
status. Fatal problems are raised as WorktreeToolError subclasses.
"""

from .context import CommandContext
from .add import add_worktree
from .remove import remove_worktree
from .listing import list_worktrees
from .switch import switch_worktree
from .status import show_status
from .sync import sync_worktrees

__all__ = [
    "CommandContext",
    "add_worktree",
    "remove_worktree",
    "list_worktrees",
    "switch_worktree",
    "show_status",
    "sync_worktrees",
]
