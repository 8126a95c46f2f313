"""worktree-add: create a linked worktree for a branch."""

import os
from typing import Optional

from rich.markup import escape

from opencode_worktree.commands.context import CommandContext, main_worktree_root
from opencode_worktree.constants import SYMBOL_WARNING
from opencode_worktree.services.paths import ensure_ignored, worktree_base_dir, worktree_path_for
from opencode_worktree.logging_config import get_logger

logger = get_logger(__name__)


def add_worktree(
    ctx: CommandContext,
    branch_name: str,
    base: Optional[str] = None,
    open_session: bool = True,
) -> int:
    """Create (or reuse) the worktree for branch_name.

    The checkout source is chosen in order: an existing local branch, a
    branch on the remote (tracked), or a new branch from base / HEAD.

    Returns:
        Exit status
    """
    display = ctx.display
    config = ctx.config

    ctx.probe.validate_branch_name(branch_name)
    repo_root = ctx.probe.repository_root()

    display.header("Git Worktree Add")

    records = ctx.probe.list_worktrees()
    existing = next((wt for wt in records if wt.branch_name == branch_name), None)
    if existing:
        display.print(f"[warning]{SYMBOL_WARNING} Worktree already exists for branch '{escape(branch_name)}'[/warning]")
        display.field("Path", f"[accent]{escape(existing.path)}[/accent]")
        display.blank()
        if open_session:
            ctx.open_session(existing.path)
        return 0

    root = main_worktree_root(records, repo_root)
    base_dir = worktree_base_dir(root, config.worktree_dir)
    worktree_path = worktree_path_for(root, branch_name, config.worktree_dir)

    os.makedirs(base_dir, exist_ok=True)
    try:
        if ensure_ignored(root, config.worktree_dir, config.ignore_file):
            display.success(f"Added {escape(config.worktree_dir)}/ to {escape(config.ignore_file)}")
    except OSError as e:
        display.warning(f"Warning: Could not update {escape(config.ignore_file)}: {escape(str(e))}")

    quoted = escape(branch_name)
    if ctx.probe.local_branch_exists(branch_name):
        if base:
            logger.debug(f"Ignoring --from {base}: branch {branch_name} already exists")
        display.info(f"Branch '{quoted}' exists locally, checking out...")
        ctx.worktrees.add_worktree(worktree_path, branch_name)
    elif ctx.probe.remote_branch_exists(branch_name):
        remote_ref = f"{config.remote_name}/{branch_name}"
        display.info(f"Branch '{quoted}' exists on remote, creating tracking branch...")
        ctx.worktrees.add_worktree(
            worktree_path, branch_name, new_branch=True, start_point=remote_ref, track=True
        )
    elif base:
        display.info(f"Creating branch '{quoted}' from '{escape(base)}'...")
        ctx.worktrees.add_worktree(worktree_path, branch_name, new_branch=True, start_point=base)
    else:
        current = ctx.probe.current_branch() or "detached HEAD"
        display.info(f"Creating branch '{quoted}' from current HEAD ({escape(current)})...")
        ctx.worktrees.add_worktree(worktree_path, branch_name, new_branch=True)

    display.blank()
    display.done("Worktree created successfully!")
    display.blank()
    display.field("Path", f"  [accent]{escape(worktree_path)}[/accent]")
    display.field("Branch", f"[accent]{quoted}[/accent]")
    display.blank()

    if open_session:
        ctx.open_session(worktree_path)
    else:
        display.hint("To open this worktree:")
        display.command(f"cd {worktree_path}")
        display.command(ctx.launcher.manual_command(worktree_path))
        display.blank()
    return 0
