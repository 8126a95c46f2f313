"""Git-related services for opencode-worktree."""

from .porcelain import parse_worktree_porcelain
from .repository import RepositoryProbe
from .worktrees import WorktreeService

__all__ = [
    "parse_worktree_porcelain",
    "RepositoryProbe",
    "WorktreeService",
]
