"""Path formatting utilities."""

import os


def format_path(full_path: str, repo_root: str) -> str:
    """
    Format a path relative to the repository root when it lies beneath it.

    Args:
        full_path: Absolute path to display
        repo_root: Repository top-level directory

    Returns:
        Relative path, or full_path unchanged when it is outside repo_root
        or is the root itself
    """
    root = repo_root.rstrip(os.sep)
    if full_path.startswith(root + os.sep):
        return full_path[len(root) + 1:]
    return full_path
