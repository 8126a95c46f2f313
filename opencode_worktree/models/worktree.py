"""Worktree data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional

from opencode_worktree.constants import SHORT_SHA_LENGTH


@dataclass
class WorktreeRecord:
    """One checkout known to the repository, as reported by git worktree list."""

    path: str
    commit_sha: str = ""
    branch_name: Optional[str] = None  # None when detached
    is_main: bool = False  # First entry git reports is the main working tree
    is_bare: bool = False
    is_detached: bool = False
    is_locked: bool = False
    lock_reason: Optional[str] = None
    is_prunable: bool = False
    prunable_reason: Optional[str] = None

    @property
    def short_sha(self) -> str:
        return self.commit_sha[:SHORT_SHA_LENGTH]

    def __str__(self) -> str:
        """String representation of worktree."""
        name = self.branch_name or "(detached HEAD)"
        main_marker = " (main)" if self.is_main else ""
        return f"{name} @ {self.path}{main_marker}"


@dataclass
class WorkingTreeStatus:
    """Counts of changed paths in one checkout."""

    modified: int = 0
    added: int = 0
    deleted: int = 0
    untracked: int = 0
    renamed: int = 0
    entries: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def clean(self) -> bool:
        return self.total == 0

    @classmethod
    def from_porcelain(cls, entries: List[str]) -> "WorkingTreeStatus":
        """Build counts from `git status --porcelain` lines.

        The first two characters are the index and worktree status codes. A line
        may count towards more than one category (e.g. "AM").
        """
        status = cls(entries=list(entries))
        for line in status.entries:
            code = line[:2]
            if "M" in code:
                status.modified += 1
            if "A" in code:
                status.added += 1
            if "D" in code:
                status.deleted += 1
            if "?" in code:
                status.untracked += 1
            if "R" in code or "C" in code:
                status.renamed += 1
        return status


class TrackingState(Enum):
    """Outcome of comparing a branch with its upstream."""
    OK = "ok"
    NO_UPSTREAM = "no-upstream"
    COMPARISON_FAILED = "comparison-failed"


class AheadBehind(NamedTuple):
    ahead: int
    behind: int


@dataclass
class RemoteStatus:
    """Remote tracking status of a branch, computed on demand."""

    state: TrackingState
    upstream: Optional[str] = None
    ahead: int = 0
    behind: int = 0
    error: Optional[str] = None

    @property
    def up_to_date(self) -> bool:
        return self.state == TrackingState.OK and self.ahead == 0 and self.behind == 0

    @classmethod
    def tracking(cls, upstream: str, counts: AheadBehind) -> "RemoteStatus":
        return cls(TrackingState.OK, upstream=upstream, ahead=counts.ahead, behind=counts.behind)

    @classmethod
    def no_upstream(cls) -> "RemoteStatus":
        return cls(TrackingState.NO_UPSTREAM)

    @classmethod
    def comparison_failed(cls, error: str, upstream: Optional[str] = None) -> "RemoteStatus":
        return cls(TrackingState.COMPARISON_FAILED, upstream=upstream, error=error)


@dataclass
class CommitSummary:
    """Subject line and git's human-relative date of a commit."""

    subject: str
    relative_time: str
