"""worktree-remove: remove a linked worktree and optionally its branch."""

from typing import Optional

from rich.markup import escape

from opencode_worktree.commands.context import (
    CommandContext,
    display_path,
    main_worktree_root,
)
from opencode_worktree.constants import SYMBOL_ARROW
from opencode_worktree.exceptions import (
    BranchDeleteWarning,
    CurrentWorktreeError,
    DirtyWorkingTreeError,
    ExternalToolFailure,
    MainWorktreeProtectedError,
    NotFoundError,
)
from opencode_worktree.services.paths import same_path


def remove_worktree(
    ctx: CommandContext,
    branch_name: Optional[str] = None,
    delete_branch: bool = False,
    force: bool = False,
) -> int:
    """Remove the worktree checked out on branch_name.

    Without a branch name, lists the linked worktrees instead.

    Raises:
        NotFoundError: No worktree has the branch checked out
        MainWorktreeProtectedError: The branch lives in the main worktree
        CurrentWorktreeError: The command runs inside that worktree
        DirtyWorkingTreeError: Uncommitted changes and no force
        ExternalToolFailure: git worktree remove failed

    Returns:
        Exit status
    """
    display = ctx.display
    repo_root = ctx.probe.repository_root()

    display.header("Git Worktree Remove")

    records = ctx.probe.list_worktrees()
    root = main_worktree_root(records, repo_root)

    if not branch_name:
        display.print("[warning]No branch name provided. Available worktrees:[/warning]")
        display.blank()
        linked = [wt for wt in records if wt.branch_name and not wt.is_main]
        if not linked:
            display.hint("No linked worktrees found")
        for wt in linked:
            display.print(
                f"  [accent]{escape(wt.branch_name)}[/accent] {SYMBOL_ARROW} [muted]{display_path(wt, root)}[/muted]"
            )
        display.blank()
        display.print("Run [accent]worktree-remove <branch-name>[/accent] to remove a worktree")
        display.blank()
        return 0

    record = next((wt for wt in records if wt.branch_name == branch_name), None)
    if record is None:
        raise NotFoundError(branch_name, hints=["Run worktree-list to see available worktrees"])

    if record.is_main:
        raise MainWorktreeProtectedError(record.path, ctx.config.worktree_dir)

    if same_path(record.path, repo_root):
        raise CurrentWorktreeError(record.path, root)

    display.field("Worktree", f"[accent]{display_path(record, root)}[/accent]", indent=0)
    display.field("Branch", f"  [accent]{escape(branch_name)}[/accent]", indent=0)
    display.blank()

    if not force:
        try:
            entries = ctx.probe.status_entries(record.path)
        except ExternalToolFailure:
            display.warning("Warning: Could not check worktree status")
        else:
            if entries:
                raise DirtyWorkingTreeError(record.path, entries)

    display.info("Removing worktree...")
    ctx.worktrees.remove_worktree(record.path, force=force)
    display.success("Worktree removed")
    display.blank()

    if delete_branch:
        display.info(f"Deleting branch '{escape(branch_name)}'...")
        try:
            ctx.worktrees.delete_branch(branch_name, force=force)
        except BranchDeleteWarning as warning:
            display.report_warning(warning)
        else:
            display.success("Branch deleted")
        display.blank()

    display.done("Done!")
    display.blank()
    return 0
