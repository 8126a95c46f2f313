"""Worktree operations service for opencode-worktree."""

from typing import Optional

import git

from opencode_worktree.constants import DEFAULT_REMOTE
from opencode_worktree.exceptions import (
    BranchDeleteWarning,
    ExternalToolFailure,
    PullWarning,
    git_diagnostic,
)
from opencode_worktree.logging_config import get_logger

logger = get_logger(__name__)


class WorktreeService:
    """Service for the git calls that change worktrees, branches and refs."""

    def __init__(self, repo_path: str, remote_name: str = DEFAULT_REMOTE):
        """Initialize the worktree service.

        Args:
            repo_path: Path to the git repository
            remote_name: Remote to fetch from
        """
        self.repo_path = repo_path
        self.remote_name = remote_name

    def _get_repo(self):
        """Get a fresh git.Repo instance.

        Returns:
            git.Repo: A repository instance rooted at repo_path
        """
        return git.Repo(self.repo_path, search_parent_directories=True)

    def _git(self, *args: str) -> str:
        logger.debug(f"git {' '.join(args)}")
        repo = self._get_repo()
        try:
            return repo.git.execute(["git", *args])
        finally:
            repo.close()

    def add_worktree(
        self,
        path: str,
        branch_name: str,
        new_branch: bool = False,
        start_point: Optional[str] = None,
        track: bool = False,
    ) -> None:
        """Check out a branch into a new linked worktree.

        Args:
            path: Directory for the new worktree
            branch_name: Branch to check out (or create when new_branch is set)
            new_branch: Create branch_name instead of checking out an existing branch
            start_point: Commit-ish the new branch starts from (default: HEAD)
            track: Set the start point as upstream of the new branch

        Raises:
            ExternalToolFailure: If git refuses to create the worktree
        """
        args = ["worktree", "add"]
        if new_branch:
            if track:
                args.append("--track")
            args.extend(["-b", branch_name, path])
            if start_point:
                args.append(start_point)
        else:
            args.extend([path, branch_name])

        try:
            self._git(*args)
        except git.exc.GitCommandError as e:
            logger.error(f"Failed to create worktree at {path}: {git_diagnostic(e)}")
            raise ExternalToolFailure.from_git_error("worktree add", e, "Failed to create worktree") from e
        logger.info(f"Created worktree at {path} for branch {branch_name}")

    def remove_worktree(self, path: str, force: bool = False) -> None:
        """Remove a worktree at the specified path.

        Args:
            path: Path to the worktree directory
            force: Force removal even if working tree is dirty or locked

        Raises:
            ExternalToolFailure: If git refuses to remove the worktree
        """
        args = ["worktree", "remove", path]
        if force:
            args.append("--force")

        try:
            self._git(*args)
        except git.exc.GitCommandError as e:
            logger.error(f"Failed to remove worktree at {path}: {git_diagnostic(e)}")
            raise ExternalToolFailure.from_git_error("worktree remove", e, "Failed to remove worktree") from e
        logger.info(f"Removed worktree at {path}")

    def delete_branch(self, branch_name: str, force: bool = False) -> None:
        """Delete a local branch.

        A safe delete (-d) refuses unmerged branches; force uses -D.

        Raises:
            BranchDeleteWarning: If git refuses to delete the branch
        """
        try:
            self._git("branch", "-D" if force else "-d", branch_name)
        except git.exc.GitCommandError as e:
            logger.warning(f"Failed to delete branch {branch_name}: {git_diagnostic(e)}")
            raise BranchDeleteWarning(branch_name, diagnostic=git_diagnostic(e)) from e
        logger.info(f"Deleted branch {branch_name}")

    def fetch(self, remote_name: Optional[str] = None) -> None:
        """Fetch all refs from a remote.

        Raises:
            ExternalToolFailure: If the fetch fails
        """
        remote_name = remote_name or self.remote_name
        try:
            self._git("fetch", remote_name)
        except git.exc.GitCommandError as e:
            raise ExternalToolFailure.from_git_error("fetch", e, "Failed to fetch from remote") from e
        logger.info(f"Fetched {remote_name}")

    def pull_fast_forward(self, path: str) -> None:
        """Fast-forward the worktree at path to its upstream.

        Raises:
            PullWarning: If the pull fails (diverged history, network error, ...)
        """
        try:
            self._git("-C", path, "pull", "--ff-only")
        except git.exc.GitCommandError as e:
            logger.warning(f"Pull failed in {path}: {git_diagnostic(e)}")
            raise PullWarning(path, diagnostic=git_diagnostic(e)) from e
        logger.info(f"Pulled {path}")
