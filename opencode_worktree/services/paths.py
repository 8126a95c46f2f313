"""Worktree directory layout and ignore-file maintenance."""

import os
from pathlib import Path
from typing import Iterable, Optional

from opencode_worktree.constants import IGNORE_FILE, WORKTREE_DIR
from opencode_worktree.models.worktree import WorktreeRecord
from opencode_worktree.logging_config import get_logger

logger = get_logger(__name__)


def worktree_base_dir(repo_root: str, worktree_dir: str = WORKTREE_DIR) -> str:
    """Directory holding every linked checkout of the repository."""
    return os.path.join(repo_root, worktree_dir)


def worktree_path_for(repo_root: str, branch_name: str, worktree_dir: str = WORKTREE_DIR) -> str:
    """Location of the linked checkout for branch_name."""
    return os.path.join(worktree_base_dir(repo_root, worktree_dir), branch_name)


def ensure_ignored(repo_root: str, worktree_dir: str = WORKTREE_DIR, ignore_file: str = IGNORE_FILE) -> bool:
    """Make sure the ignore file excludes the worktree directory.

    Creates the ignore file if needed. Existing lines are never touched; the
    entry is appended only when no equivalent line is present.

    Args:
        repo_root: Repository top-level directory
        worktree_dir: Reserved directory name
        ignore_file: Ignore file name relative to repo_root

    Returns:
        True if the file was created or changed

    Raises:
        OSError: If the ignore file cannot be read or written
    """
    ignore_path = Path(repo_root) / ignore_file
    entry = f"{worktree_dir}/"

    if not ignore_path.exists():
        ignore_path.write_text(f"{entry}\n")
        logger.info(f"Created {ignore_path} with {entry}")
        return True

    content = ignore_path.read_text()
    equivalents = {worktree_dir, entry, f"/{worktree_dir}", f"/{entry}"}
    if any(line.strip() in equivalents for line in content.splitlines()):
        logger.debug(f"{ignore_path} already ignores {entry}")
        return False

    prefix = "" if not content or content.endswith("\n") else "\n"
    with ignore_path.open("a") as handle:
        handle.write(f"{prefix}{entry}\n")
    logger.info(f"Added {entry} to {ignore_path}")
    return True


def same_path(first: str, second: str) -> bool:
    """Compare two paths after resolving symlinks and normalising separators."""
    return os.path.realpath(first) == os.path.realpath(second)


def is_within(path: str, directory: str) -> bool:
    """Whether path is directory itself or somewhere beneath it."""
    path = os.path.realpath(path)
    directory = os.path.realpath(directory)
    return path == directory or path.startswith(directory.rstrip(os.sep) + os.sep)


def locate_worktree(records: Iterable[WorktreeRecord], directory: str) -> Optional[WorktreeRecord]:
    """Find the worktree containing directory.

    Linked worktrees live inside the main checkout, so the deepest matching
    path wins.
    """
    matches = [record for record in records if record.path and is_within(directory, record.path)]
    if not matches:
        return None
    return max(matches, key=lambda record: len(os.path.realpath(record.path)))
