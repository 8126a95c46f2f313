"""Read-only repository queries for opencode-worktree."""

import os
from typing import List, Optional

import git

from opencode_worktree.constants import DEFAULT_REMOTE
from opencode_worktree.exceptions import (
    DecodeError,
    ExternalToolFailure,
    InvalidNameError,
    NotARepositoryError,
    git_diagnostic,
)
from opencode_worktree.models.worktree import (
    AheadBehind,
    CommitSummary,
    RemoteStatus,
    WorkingTreeStatus,
    WorktreeRecord,
)
from opencode_worktree.services.git.porcelain import parse_worktree_porcelain
from opencode_worktree.logging_config import get_logger

logger = get_logger(__name__)


class RepositoryProbe:
    """Thin adapter over the git command line.

    Every method runs git afresh; nothing is cached. Commands receive a probe
    instead of calling git themselves, so tests can substitute a mock.
    """

    def __init__(self, repo_path: str, remote_name: str = DEFAULT_REMOTE):
        """Initialize the probe.

        Args:
            repo_path: Any directory inside the repository
            remote_name: Remote used for remote branch lookups
        """
        self.repo_path = repo_path
        self.remote_name = remote_name

    @classmethod
    def discover(cls, path: Optional[str] = None, remote_name: str = DEFAULT_REMOTE) -> "RepositoryProbe":
        """Open the repository containing path.

        Raises:
            NotARepositoryError: If path is not inside a git repository
        """
        path = path or os.getcwd()
        try:
            repo = git.Repo(path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            logger.debug(f"No repository at {path}: {e!r}")
            raise NotARepositoryError(path) from e
        try:
            return cls(repo.working_tree_dir or path, remote_name)
        finally:
            repo.close()

    def _get_repo(self) -> git.Repo:
        """Get a fresh git.Repo instance."""
        return git.Repo(self.repo_path, search_parent_directories=True)

    def _git(self, *args: str) -> str:
        """Run a git command in the repository and return its stdout."""
        logger.debug(f"git {' '.join(args)}")
        repo = self._get_repo()
        try:
            return repo.git.execute(["git", *args])
        finally:
            repo.close()

    def _git_in(self, path: str, *args: str) -> str:
        """Run a git command inside a specific worktree."""
        return self._git("-C", path, *args)

    def _ref_exists(self, ref: str) -> bool:
        try:
            self._git("rev-parse", "--verify", "--quiet", ref)
            return True
        except git.exc.GitCommandError:
            return False

    def repository_root(self) -> str:
        """Absolute path of the top-level directory of the current checkout."""
        try:
            return self._git("rev-parse", "--show-toplevel").strip()
        except git.exc.GitCommandError as e:
            raise NotARepositoryError(self.repo_path, diagnostic=git_diagnostic(e)) from e

    def current_branch(self) -> Optional[str]:
        """Name of the checked-out branch, or None when HEAD is detached."""
        repo = self._get_repo()
        try:
            return repo.active_branch.name
        except TypeError:
            # Detached HEAD
            return None
        finally:
            repo.close()

    def validate_branch_name(self, branch_name: str) -> None:
        """Check branch_name against git's ref-name rules.

        Raises:
            InvalidNameError: If git rejects the name
        """
        try:
            self._git("check-ref-format", "--branch", branch_name)
        except git.exc.GitCommandError as e:
            raise InvalidNameError(branch_name, diagnostic=git_diagnostic(e)) from e

    def local_branch_exists(self, branch_name: str) -> bool:
        return self._ref_exists(f"refs/heads/{branch_name}")

    def remote_branch_exists(self, branch_name: str) -> bool:
        return self._ref_exists(f"refs/remotes/{self.remote_name}/{branch_name}")

    def list_worktrees(self) -> List[WorktreeRecord]:
        """Enumerate every worktree known to the repository.

        Raises:
            DecodeError: If git cannot produce the listing
        """
        try:
            output = self._git("worktree", "list", "--porcelain")
        except git.exc.GitCommandError as e:
            raise DecodeError(diagnostic=git_diagnostic(e)) from e
        records = parse_worktree_porcelain(output)
        for record in records:
            logger.debug(f"  {record}")
        return records

    def find_worktree(self, branch_name: str) -> Optional[WorktreeRecord]:
        """Return the worktree that has branch_name checked out, if any."""
        return next(
            (wt for wt in self.list_worktrees() if wt.branch_name == branch_name),
            None,
        )

    def status_entries(self, path: str) -> List[str]:
        """Raw `git status --porcelain` lines for the checkout at path.

        Raises:
            ExternalToolFailure: If git status fails (e.g. the directory is gone)
        """
        try:
            output = self._git_in(path, "status", "--porcelain")
        except git.exc.GitCommandError as e:
            raise ExternalToolFailure.from_git_error("status", e, f"Could not read status of {path}") from e
        return [line for line in output.split("\n") if line.strip()]

    def has_uncommitted_changes(self, path: str) -> bool:
        return bool(self.status_entries(path))

    def working_tree_status(self, path: str) -> WorkingTreeStatus:
        return WorkingTreeStatus.from_porcelain(self.status_entries(path))

    def _has_upstream_config(self, branch_name: str) -> bool:
        """Whether branch.<name>.remote and branch.<name>.merge are both configured."""
        repo = self._get_repo()
        try:
            head = git.Head(repo, f"refs/heads/{branch_name}")
            return head.tracking_branch() is not None
        finally:
            repo.close()

    def remote_tracking_status(self, path: str, branch_name: str) -> RemoteStatus:
        """Compare branch_name with its upstream.

        A branch without upstream configuration yields a NO_UPSTREAM status.
        Once an upstream is configured, any failure to resolve or compare it
        yields COMPARISON_FAILED with git's diagnostic.
        """
        if not self._has_upstream_config(branch_name):
            logger.debug(f"Branch {branch_name} has no upstream configured")
            return RemoteStatus.no_upstream()

        try:
            upstream = self._git_in(
                path, "rev-parse", "--abbrev-ref", "--symbolic-full-name", f"{branch_name}@{{upstream}}"
            ).strip()
        except git.exc.GitCommandError as e:
            logger.debug(f"Could not resolve upstream of {branch_name}: {e}")
            return RemoteStatus.comparison_failed(git_diagnostic(e))

        try:
            counts = self.ahead_behind_counts(path, branch_name, upstream)
        except ExternalToolFailure as e:
            return RemoteStatus.comparison_failed(e.diagnostic or e.message, upstream=upstream)

        return RemoteStatus.tracking(upstream, counts)

    def ahead_behind_counts(self, path: str, branch_name: str, upstream: Optional[str] = None) -> AheadBehind:
        """Count commits only on the branch (ahead) and only on its upstream (behind).

        Raises:
            ExternalToolFailure: If git cannot compare the two refs
        """
        upstream = upstream or f"{branch_name}@{{upstream}}"
        try:
            output = self._git_in(path, "rev-list", "--left-right", "--count", f"{branch_name}...{upstream}")
        except git.exc.GitCommandError as e:
            raise ExternalToolFailure.from_git_error("rev-list", e) from e

        try:
            ahead, behind = (int(part) for part in output.split())
        except ValueError as e:
            raise ExternalToolFailure(
                "rev-list", message="Unexpected rev-list output", diagnostic=output.strip()
            ) from e
        return AheadBehind(ahead, behind)

    def last_commit(self, path: str) -> Optional[CommitSummary]:
        """Subject and relative date of HEAD in the checkout at path."""
        try:
            output = self._git_in(path, "log", "-1", "--pretty=format:%s%x1f%cr")
        except git.exc.GitCommandError as e:
            logger.debug(f"Could not read last commit in {path}: {e}")
            return None
        subject, _, relative_time = output.partition("\x1f")
        if not subject and not relative_time:
            return None
        return CommitSummary(subject=subject.strip(), relative_time=relative_time.strip())
