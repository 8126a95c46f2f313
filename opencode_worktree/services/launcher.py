"""Detached launcher for OpenCode sessions."""

import shlex
import subprocess
import sys
from typing import List, Optional, Sequence

from opencode_worktree.constants import DEFAULT_LAUNCHER
from opencode_worktree.exceptions import LaunchWarning
from opencode_worktree.logging_config import get_logger

logger = get_logger(__name__)


class SessionLauncher:
    """Start an editor/agent session rooted at a directory.

    Launch and forget: the spawned process gets its own session with its
    standard streams discarded, and is never waited on. Callers must not
    depend on its exit status or output.

    Handles of spawned processes are kept in `processes` for the lifetime of
    the launcher. They are never waited on or polled; holding them stops
    Popen from warning that a still-running child was dropped.
    """

    def __init__(self, command: Optional[Sequence[str]] = None):
        self.command: List[str] = list(command or DEFAULT_LAUNCHER)
        self.processes: List[subprocess.Popen] = []

    def build_command(self, path: str) -> List[str]:
        return [*self.command, path]

    def manual_command(self, path: str) -> str:
        """Shell command the user can run when launching fails."""
        return " ".join(shlex.quote(part) for part in self.build_command(path))

    def launch(self, path: str) -> int:
        """Spawn the session process without waiting for it.

        Args:
            path: Directory the session is rooted at

        Returns:
            PID of the spawned process

        Raises:
            LaunchWarning: If the process cannot be started
        """
        cmd = self.build_command(path)
        logger.debug(f"Launching {cmd}")
        try:
            if sys.platform == "win32":
                process = subprocess.Popen(
                    cmd,
                    cwd=path,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                    creationflags=subprocess.CREATE_NEW_PROCESS_GROUP | subprocess.DETACHED_PROCESS,
                )
            else:
                # New session so the child outlives this command
                process = subprocess.Popen(
                    cmd,
                    cwd=path,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                    start_new_session=True,
                )
        except OSError as e:
            logger.warning(f"Could not launch {cmd[0]}: {e}")
            raise LaunchWarning(path, str(e)) from e

        self.processes.append(process)
        logger.info(f"Launched {cmd[0]} (pid {process.pid}) in {path}")
        return process.pid
