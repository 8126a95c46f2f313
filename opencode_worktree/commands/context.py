"""Shared state handed to every worktree command."""

import os
from dataclasses import dataclass
from typing import List, Optional

from rich.markup import escape

from opencode_worktree.config import Config
from opencode_worktree.exceptions import LaunchWarning
from opencode_worktree.formatters import format_path
from opencode_worktree.models.worktree import WorktreeRecord
from opencode_worktree.services.display_service import DisplayService
from opencode_worktree.services.git import RepositoryProbe, WorktreeService
from opencode_worktree.services.launcher import SessionLauncher


@dataclass
class CommandContext:
    """Collaborators of a command invocation.

    Commands never construct these themselves, so tests can pass mocks or a
    plain-text display.
    """

    probe: RepositoryProbe
    worktrees: WorktreeService
    display: DisplayService
    launcher: SessionLauncher
    config: Config
    cwd: str

    @classmethod
    def build(cls, config: Config, display: DisplayService, cwd: Optional[str] = None) -> "CommandContext":
        """Open the repository containing cwd.

        Raises:
            NotARepositoryError: If cwd is not inside a git repository
        """
        cwd = cwd or os.getcwd()
        probe = RepositoryProbe.discover(cwd, remote_name=config.remote_name)
        return cls(
            probe=probe,
            worktrees=WorktreeService(probe.repo_path, remote_name=config.remote_name),
            display=display,
            launcher=SessionLauncher(config.launcher_command),
            config=config,
            cwd=cwd,
        )

    def open_session(self, path: str) -> bool:
        """Launch a session in path, falling back to printed instructions.

        Returns:
            True if the launcher process was spawned
        """
        self.display.info(f"Opening new OpenCode session in {escape(path)}...")
        try:
            self.launcher.launch(path)
        except LaunchWarning as warning:
            self.display.report_warning(warning)
            self.display.print(
                f"[accent]You can manually open it with: {escape(self.launcher.manual_command(path))}[/accent]"
            )
            return False
        self.display.success("OpenCode session launched")
        return True


def main_worktree_root(records: List[WorktreeRecord], repo_root: str) -> str:
    """Top level of the main checkout, which holds the worktree directory.

    Falls back to repo_root for bare repositories or an empty listing.
    """
    main = next((record for record in records if record.is_main), None)
    if main is None or main.is_bare:
        return repo_root
    return main.path


def display_path(record: WorktreeRecord, root: str) -> str:
    return escape(format_path(record.path, root))
