"""Tests for RepositoryProbe"""
import os
from unittest.mock import patch

import git
import pytest

from opencode_worktree.exceptions import (
    DecodeError,
    ExternalToolFailure,
    InvalidNameError,
    NotARepositoryError,
)
from opencode_worktree.models.worktree import TrackingState
from opencode_worktree.services.git import RepositoryProbe


class TestRepositoryProbeDiscovery:
    """Test locating the repository."""

    def test_discover_from_subdirectory(self, git_repo):
        subdir = os.path.join(git_repo.working_tree_dir, "src", "pkg")
        os.makedirs(subdir)
        probe = RepositoryProbe.discover(subdir)
        assert os.path.realpath(probe.repository_root()) == os.path.realpath(git_repo.working_tree_dir)

    def test_discover_outside_repository(self, temp_dir):
        with pytest.raises(NotARepositoryError) as exc_info:
            RepositoryProbe.discover(str(temp_dir))
        assert exc_info.value.message == "Not in a git repository"

    def test_root_of_linked_worktree_is_its_own_top_level(self, worktree_repo):
        linked = os.path.join(worktree_repo.working_tree_dir, ".opencode-wt", "feature-x")
        probe = RepositoryProbe(linked)
        assert os.path.realpath(probe.repository_root()) == os.path.realpath(linked)


class TestRepositoryProbeBranches:
    """Test branch queries."""

    def test_current_branch(self, git_repo):
        assert RepositoryProbe(git_repo.working_tree_dir).current_branch() == "main"

    def test_current_branch_detached(self, git_repo):
        git_repo.git.checkout("--detach")
        assert RepositoryProbe(git_repo.working_tree_dir).current_branch() is None

    def test_validate_branch_name_accepts_valid_names(self, git_repo):
        probe = RepositoryProbe(git_repo.working_tree_dir)
        probe.validate_branch_name("feature/login-form")

    @pytest.mark.parametrize("name", ["bad..name", "has space", "ends-with.lock", "-leading-dash"])
    def test_validate_branch_name_rejects_invalid_names(self, git_repo, name):
        probe = RepositoryProbe(git_repo.working_tree_dir)
        with pytest.raises(InvalidNameError) as exc_info:
            probe.validate_branch_name(name)
        assert exc_info.value.message == f"Invalid branch name '{name}'"

    def test_local_branch_exists(self, git_repo):
        git_repo.git.branch("feature-y")
        probe = RepositoryProbe(git_repo.working_tree_dir)
        assert probe.local_branch_exists("feature-y") is True
        assert probe.local_branch_exists("nope") is False

    def test_remote_branch_exists(self, git_repo_with_origin):
        probe = RepositoryProbe(git_repo_with_origin.working_tree_dir)
        assert probe.remote_branch_exists("main") is True
        assert probe.remote_branch_exists("nope") is False

    def test_remote_branch_uses_configured_remote(self, git_repo_with_origin):
        probe = RepositoryProbe(git_repo_with_origin.working_tree_dir, remote_name="upstream")
        assert probe.remote_branch_exists("main") is False


class TestRepositoryProbeWorktrees:
    """Test worktree enumeration."""

    def test_list_worktrees(self, worktree_repo):
        records = RepositoryProbe(worktree_repo.working_tree_dir).list_worktrees()
        assert [r.branch_name for r in records] == ["main", "feature-x"]
        assert records[0].is_main
        assert os.path.realpath(records[0].path) == os.path.realpath(worktree_repo.working_tree_dir)

    def test_list_from_linked_worktree_still_reports_main_first(self, worktree_repo):
        linked = os.path.join(worktree_repo.working_tree_dir, ".opencode-wt", "feature-x")
        records = RepositoryProbe(linked).list_worktrees()
        assert records[0].branch_name == "main"
        assert records[0].is_main

    def test_find_worktree(self, worktree_repo):
        probe = RepositoryProbe(worktree_repo.working_tree_dir)
        assert probe.find_worktree("feature-x").path.endswith("feature-x")
        assert probe.find_worktree("missing") is None

    def test_list_worktrees_failure_raises_decode_error(self, git_repo):
        probe = RepositoryProbe(git_repo.working_tree_dir)
        error = git.exc.GitCommandError(["git", "worktree", "list"], 128, stderr="fatal: broken")
        with patch.object(probe, "_git", side_effect=error):
            with pytest.raises(DecodeError) as exc_info:
                probe.list_worktrees()
        assert exc_info.value.message == "Could not list worktrees"
        assert "fatal: broken" in exc_info.value.diagnostic


class TestRepositoryProbeStatus:
    """Test working tree status queries."""

    def test_clean_status(self, git_repo):
        probe = RepositoryProbe(git_repo.working_tree_dir)
        assert probe.status_entries(git_repo.working_tree_dir) == []
        assert probe.has_uncommitted_changes(git_repo.working_tree_dir) is False
        assert probe.working_tree_status(git_repo.working_tree_dir).clean

    def test_dirty_status_counts(self, git_repo):
        root = git_repo.working_tree_dir
        with open(os.path.join(root, "README.md"), "a") as handle:
            handle.write("more\n")
        with open(os.path.join(root, "new.txt"), "w") as handle:
            handle.write("new\n")
        with open(os.path.join(root, "staged.txt"), "w") as handle:
            handle.write("staged\n")
        git_repo.git.add("staged.txt")

        probe = RepositoryProbe(root)
        status = probe.working_tree_status(root)
        assert status.modified == 1
        assert status.untracked == 1
        assert status.added == 1
        assert status.total == 3
        assert probe.has_uncommitted_changes(root) is True

    def test_status_of_linked_worktree(self, worktree_repo):
        linked = os.path.join(worktree_repo.working_tree_dir, ".opencode-wt", "feature-x")
        with open(os.path.join(linked, "work.txt"), "w") as handle:
            handle.write("wip\n")
        probe = RepositoryProbe(worktree_repo.working_tree_dir)
        assert probe.status_entries(linked) == ["?? work.txt"]
        assert probe.status_entries(worktree_repo.working_tree_dir) == []

    def test_status_of_missing_directory_raises(self, git_repo, temp_dir):
        probe = RepositoryProbe(git_repo.working_tree_dir)
        with pytest.raises(ExternalToolFailure):
            probe.status_entries(str(temp_dir / "vanished"))


class TestRepositoryProbeRemoteTracking:
    """Test upstream comparison."""

    def test_no_upstream(self, git_repo):
        probe = RepositoryProbe(git_repo.working_tree_dir)
        remote = probe.remote_tracking_status(git_repo.working_tree_dir, "main")
        assert remote.state == TrackingState.NO_UPSTREAM
        assert remote.upstream is None

    def test_up_to_date(self, git_repo_with_origin):
        root = git_repo_with_origin.working_tree_dir
        remote = RepositoryProbe(root).remote_tracking_status(root, "main")
        assert remote.state == TrackingState.OK
        assert remote.upstream == "origin/main"
        assert (remote.ahead, remote.behind) == (0, 0)
        assert remote.up_to_date

    def test_ahead(self, git_repo_with_origin, commit):
        root = git_repo_with_origin.working_tree_dir
        commit(git_repo_with_origin, "local.txt", "x\n", "Local work")
        remote = RepositoryProbe(root).remote_tracking_status(root, "main")
        assert (remote.ahead, remote.behind) == (1, 0)
        assert not remote.up_to_date

    def test_behind_after_fetch(self, git_repo_with_origin, clone_origin, push):
        root = git_repo_with_origin.working_tree_dir
        push(clone_origin(), "main", 2)
        git_repo_with_origin.git.fetch("origin")
        remote = RepositoryProbe(root).remote_tracking_status(root, "main")
        assert (remote.ahead, remote.behind) == (0, 2)

    def test_missing_upstream_ref_is_comparison_failure(self, git_repo_with_origin):
        root = git_repo_with_origin.working_tree_dir
        with git_repo_with_origin.config_writer() as writer:
            writer.set_value('branch "main"', "merge", "refs/heads/vanished")
        remote = RepositoryProbe(root).remote_tracking_status(root, "main")
        assert remote.state == TrackingState.COMPARISON_FAILED
        assert remote.error
        assert remote.upstream is None

    def test_ahead_behind_counts(self, git_repo_with_origin, commit):
        root = git_repo_with_origin.working_tree_dir
        commit(git_repo_with_origin, "a.txt", "a\n", "One")
        commit(git_repo_with_origin, "b.txt", "b\n", "Two")
        counts = RepositoryProbe(root).ahead_behind_counts(root, "main", "origin/main")
        assert counts.ahead == 2
        assert counts.behind == 0

    def test_ahead_behind_unknown_ref_raises(self, git_repo):
        root = git_repo.working_tree_dir
        with pytest.raises(ExternalToolFailure):
            RepositoryProbe(root).ahead_behind_counts(root, "main", "origin/nope")


class TestRepositoryProbeLastCommit:
    """Test last commit lookup."""

    def test_last_commit(self, git_repo, commit):
        commit(git_repo, "x.txt", "x\n", "Add x file")
        summary = RepositoryProbe(git_repo.working_tree_dir).last_commit(git_repo.working_tree_dir)
        assert summary.subject == "Add x file"
        assert summary.relative_time.endswith("ago")

    def test_last_commit_unavailable(self, git_repo, temp_dir):
        probe = RepositoryProbe(git_repo.working_tree_dir)
        assert probe.last_commit(str(temp_dir / "vanished")) is None
