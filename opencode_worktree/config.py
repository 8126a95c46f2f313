"""Configuration handling for opencode-worktree"""

import os
import shlex
from dataclasses import dataclass, field
from typing import List

from opencode_worktree.constants import DEFAULT_LAUNCHER, DEFAULT_REMOTE, IGNORE_FILE, WORKTREE_DIR


@dataclass
class Config:
    """Configuration for opencode-worktree with validation."""

    # Layout
    worktree_dir: str = WORKTREE_DIR
    ignore_file: str = IGNORE_FILE
    remote_name: str = DEFAULT_REMOTE

    # Session launcher
    launcher_command: List[str] = field(default_factory=lambda: list(DEFAULT_LAUNCHER))

    # Output
    color: bool = True
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_worktree_dir()
        self._validate_remote_name()
        self._validate_launcher_command()

    def _validate_worktree_dir(self):
        """Validate worktree_dir is a single relative directory name."""
        name = (self.worktree_dir or "").strip().rstrip("/")
        if not name:
            raise ValueError("worktree_dir cannot be empty")
        if os.path.isabs(name) or ".." in name.split("/"):
            raise ValueError(f"worktree_dir must be relative to the repository, got '{self.worktree_dir}'")
        self.worktree_dir = name

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_launcher_command(self):
        """Validate launcher_command names a program."""
        if isinstance(self.launcher_command, str):
            self.launcher_command = shlex.split(self.launcher_command)
        if not self.launcher_command:
            raise ValueError("launcher_command cannot be empty")

    @classmethod
    def from_env(cls, **overrides) -> "Config":
        """Create Config from environment variables, then apply overrides."""
        values = {}
        launcher = os.environ.get("OPENCODE_WORKTREE_LAUNCHER")
        if launcher:
            values["launcher_command"] = shlex.split(launcher)
        remote = os.environ.get("OPENCODE_WORKTREE_REMOTE")
        if remote:
            values["remote_name"] = remote
        if os.environ.get("NO_COLOR"):
            values["color"] = False
        values.update(overrides)
        return cls.from_dict(values)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "worktree_dir": self.worktree_dir,
            "ignore_file": self.ignore_file,
            "remote_name": self.remote_name,
            "launcher_command": list(self.launcher_command),
            "color": self.color,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "worktree_dir",
            "ignore_file",
            "remote_name",
            "launcher_command",
            "color",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
