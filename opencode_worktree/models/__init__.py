"""Data models for opencode-worktree."""

from .worktree import (
    AheadBehind,
    CommitSummary,
    RemoteStatus,
    TrackingState,
    WorkingTreeStatus,
    WorktreeRecord,
)

__all__ = [
    "AheadBehind",
    "CommitSummary",
    "RemoteStatus",
    "TrackingState",
    "WorkingTreeStatus",
    "WorktreeRecord",
]
