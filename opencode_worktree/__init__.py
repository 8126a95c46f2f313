"""
opencode-worktree - git worktree management for OpenCode sessions
"""

from .__version__ import __version__
from .services.git import RepositoryProbe, WorktreeService, parse_worktree_porcelain

__all__ = ["RepositoryProbe", "WorktreeService", "parse_worktree_porcelain", "__version__"]
