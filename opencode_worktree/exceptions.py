"""Custom exceptions for opencode-worktree"""

from typing import Iterable, Optional

import git


class WorktreeToolError(Exception):
    """Base exception for all opencode-worktree errors.

    Errors deriving directly from this class are fatal: the CLI prints them and
    exits with status 1.
    """

    def __init__(
        self,
        message: str,
        diagnostic: Optional[str] = None,
        hints: Iterable[str] = (),
    ):
        self.message = message
        self.diagnostic = diagnostic
        self.hints = list(hints)
        super().__init__(message)


class NotARepositoryError(WorktreeToolError):
    """Exception raised when a command runs outside a git repository."""

    def __init__(self, path: Optional[str] = None, diagnostic: Optional[str] = None):
        self.path = path
        super().__init__("Not in a git repository", diagnostic=diagnostic)


class InvalidNameError(WorktreeToolError):
    """Exception raised when a branch name fails git's ref-name rules."""

    def __init__(self, branch: str, diagnostic: Optional[str] = None):
        self.branch = branch
        super().__init__(f"Invalid branch name '{branch}'", diagnostic=diagnostic)


class NotFoundError(WorktreeToolError):
    """Exception raised when no worktree is checked out on a branch."""

    def __init__(self, branch: str, hints: Iterable[str] = ()):
        self.branch = branch
        super().__init__(f"No worktree found for branch '{branch}'", hints=hints)


class DirtyWorkingTreeError(WorktreeToolError):
    """Exception raised when a worktree has uncommitted changes."""

    def __init__(self, path: str, entries: Iterable[str]):
        self.path = path
        self.entries = list(entries)
        super().__init__(
            "Worktree has uncommitted changes",
            diagnostic="Uncommitted changes:\n" + "\n".join(self.entries),
            hints=["Use --force to remove anyway"],
        )


class MainWorktreeProtectedError(WorktreeToolError):
    """Exception raised when attempting to remove the main worktree."""

    def __init__(self, path: str, worktree_dir: str):
        self.path = path
        super().__init__(
            "Cannot remove the main worktree",
            hints=[
                f"The main worktree is at {path}",
                f"You can only remove linked worktrees in {worktree_dir}/",
            ],
        )


class CurrentWorktreeError(WorktreeToolError):
    """Exception raised when removing the linked worktree the command runs in."""

    def __init__(self, path: str, main_path: str):
        self.path = path
        super().__init__(
            "Cannot remove the worktree you are currently in",
            hints=[
                f"Run worktree-remove from another checkout, e.g. {main_path}",
            ],
        )


class DecodeError(WorktreeToolError):
    """Exception raised when the worktree listing cannot be obtained."""

    def __init__(self, diagnostic: Optional[str] = None):
        super().__init__("Could not list worktrees", diagnostic=diagnostic)


class ExternalToolFailure(WorktreeToolError):
    """Exception raised when a git invocation exits non-zero unexpectedly."""

    def __init__(self, operation: str, message: Optional[str] = None, diagnostic: Optional[str] = None):
        self.operation = operation
        super().__init__(message or f"git {operation} failed", diagnostic=diagnostic)

    @classmethod
    def from_git_error(
        cls, operation: str, error: git.exc.GitCommandError, message: Optional[str] = None
    ) -> "ExternalToolFailure":
        """Build a failure from a GitCommandError, keeping git's stderr verbatim."""
        return cls(operation, message=message, diagnostic=git_diagnostic(error))


class WorktreeWarning(WorktreeToolError):
    """Base class for non-fatal problems.

    These are printed as warnings and the command carries on with exit status 0.
    """


class BranchDeleteWarning(WorktreeWarning):
    """Raised when a branch cannot be deleted after its worktree was removed."""

    def __init__(self, branch: str, diagnostic: Optional[str] = None):
        self.branch = branch
        super().__init__(
            "Could not delete branch",
            diagnostic=diagnostic,
            hints=[
                "The worktree was removed but the branch still exists.",
                f"Use git branch -D {branch} to force delete it",
            ],
        )


class PullWarning(WorktreeWarning):
    """Raised when a fast-forward pull fails in one worktree."""

    def __init__(self, path: str, diagnostic: Optional[str] = None):
        self.path = path
        super().__init__("Pull failed", diagnostic=diagnostic)


class LaunchWarning(WorktreeWarning):
    """Raised when the session launcher cannot be spawned."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Could not open OpenCode session: {reason}")


def git_diagnostic(error: git.exc.GitCommandError) -> str:
    """Extract git's diagnostic text from a GitCommandError."""
    stderr = (error.stderr if getattr(error, "stderr", None) else "").strip()
    # GitPython prefixes captured stderr with "\n  stderr: '" ... "'"
    if stderr.startswith("stderr: '") and stderr.endswith("'"):
        stderr = stderr[len("stderr: '") : -1].strip()
    if stderr:
        return stderr
    status = getattr(error, "status", "unknown")
    return f"git exited with status {status}"
