"""Pytest fixtures for opencode-worktree tests"""
import io
import os
import tempfile
from pathlib import Path
from unittest.mock import Mock

import git
import pytest

from opencode_worktree.commands import CommandContext
from opencode_worktree.config import Config
from opencode_worktree.services.display_service import DisplayService
from opencode_worktree.services.git import RepositoryProbe, WorktreeService
from opencode_worktree.services.launcher import SessionLauncher


class CapturedDisplay(DisplayService):
    """Plain-text display writing to in-memory buffers."""

    def __init__(self):
        self.out = io.StringIO()
        self.err = io.StringIO()
        created = DisplayService.create(color=False, file=self.out, err_file=self.err)
        super().__init__(created.console, created.err_console)

    @property
    def stdout(self) -> str:
        return self.out.getvalue()

    @property
    def stderr(self) -> str:
        return self.err.getvalue()

    @property
    def text(self) -> str:
        return self.stdout + self.stderr


@pytest.fixture(autouse=True)
def isolated_git_env(monkeypatch):
    """Keep the developer's git configuration out of the tests."""
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.delenv("OPENCODE_WORKTREE_LAUNCHER", raising=False)
    monkeypatch.delenv("OPENCODE_WORKTREE_REMOTE", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository on main that already ignores .opencode-wt/."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    (repo_path / "README.md").write_text("# Test Repository\n")
    (repo_path / ".gitignore").write_text(".opencode-wt/\n")
    repo.index.add(["README.md", ".gitignore"])
    repo.index.commit("Initial commit")
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def origin_repo(temp_dir):
    """Create a bare repository to act as origin."""
    repo = git.Repo.init(temp_dir / "origin.git", bare=True)
    repo.git.symbolic_ref("HEAD", "refs/heads/main")
    yield repo
    repo.close()


@pytest.fixture
def git_repo_with_origin(git_repo, origin_repo):
    """Repository whose main branch tracks origin/main."""
    git_repo.create_remote("origin", origin_repo.git_dir)
    git_repo.git.push("-u", "origin", "main")
    yield git_repo


@pytest.fixture
def clone_origin(origin_repo, temp_dir):
    """Factory cloning origin, standing in for another developer."""
    clones = []

    def _clone(name: str = "upstream_clone") -> git.Repo:
        clone = git.Repo.clone_from(origin_repo.git_dir, temp_dir / name)
        clone.config_writer().set_value("user", "name", "Other User").release()
        clone.config_writer().set_value("user", "email", "other@example.com").release()
        clones.append(clone)
        return clone

    yield _clone

    for clone in clones:
        clone.close()


def commit_file(repo: git.Repo, name: str, content: str, message: str) -> str:
    """Write, stage and commit a file; returns the new commit sha."""
    path = Path(repo.working_tree_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.git.add(name)
    repo.git.commit("-m", message)
    return repo.head.commit.hexsha


def push_commits(clone: git.Repo, branch: str, count: int) -> str:
    """Add count commits on branch in clone and push them; returns the tip sha."""
    clone.git.checkout(branch)
    for i in range(count):
        commit_file(clone, f"{branch.replace('/', '-')}-{i}.txt", f"change {i}\n", f"Upstream change {i}")
    clone.git.push("origin", branch)
    return clone.head.commit.hexsha


@pytest.fixture
def commit():
    return commit_file


@pytest.fixture
def push():
    return push_commits


def linked_path(repo: git.Repo, branch: str) -> str:
    return os.path.join(repo.working_tree_dir, ".opencode-wt", branch)


@pytest.fixture
def add_linked_worktree():
    """Factory creating a linked worktree under .opencode-wt/ directly with git."""

    def _add(repo: git.Repo, branch: str, create: bool = True) -> str:
        path = linked_path(repo, branch)
        if create:
            repo.git.worktree("add", "-b", branch, path)
        else:
            repo.git.worktree("add", path, branch)
        return path

    return _add


@pytest.fixture
def worktree_repo(git_repo, add_linked_worktree):
    """Repository with a clean main worktree and a linked feature-x worktree."""
    add_linked_worktree(git_repo, "feature-x")
    yield git_repo


@pytest.fixture
def captured_display():
    return CapturedDisplay()


@pytest.fixture
def mock_launcher():
    """Launcher double; records launches without spawning anything."""
    launcher = Mock(spec=SessionLauncher)
    launcher.launch.return_value = 4242
    launcher.manual_command.side_effect = lambda path: f"opencode {path}"
    return launcher


@pytest.fixture
def make_context(captured_display, mock_launcher):
    """Factory building a CommandContext over a real repository.

    The repository is discovered from cwd the way the CLI does, so a cwd inside
    a linked worktree roots the context at that worktree.
    """

    def _make(repo: git.Repo, cwd=None, config=None) -> CommandContext:
        config = config or Config(color=False)
        cwd = str(cwd or repo.working_tree_dir)
        probe = RepositoryProbe.discover(cwd, remote_name=config.remote_name)
        return CommandContext(
            probe=probe,
            worktrees=WorktreeService(probe.repo_path, remote_name=config.remote_name),
            display=captured_display,
            launcher=mock_launcher,
            config=config,
            cwd=cwd,
        )

    return _make


@pytest.fixture
def mock_context(captured_display, mock_launcher):
    """CommandContext whose probe and worktree service are mocks."""
    return CommandContext(
        probe=Mock(spec=RepositoryProbe),
        worktrees=Mock(spec=WorktreeService),
        display=captured_display,
        launcher=mock_launcher,
        config=Config(color=False),
        cwd="/repo",
    )
