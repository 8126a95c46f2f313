"""worktree-switch: open a session in an existing worktree."""

from typing import Optional

from rich.markup import escape

from opencode_worktree.commands.context import (
    CommandContext,
    display_path,
    main_worktree_root,
)
from opencode_worktree.constants import SYMBOL_ARROW
from opencode_worktree.exceptions import NotFoundError
from opencode_worktree.services.paths import locate_worktree


def switch_worktree(ctx: CommandContext, branch_name: Optional[str] = None) -> int:
    """Launch a session in the worktree for branch_name.

    Without a branch name, lists worktrees and marks the one containing the
    current directory.

    Raises:
        NotFoundError: No worktree has the branch checked out

    Returns:
        Exit status
    """
    display = ctx.display
    repo_root = ctx.probe.repository_root()

    display.header("Git Worktree Switch")

    records = ctx.probe.list_worktrees()
    root = main_worktree_root(records, repo_root)

    if not branch_name:
        display.print("[warning]No branch name provided. Available worktrees:[/warning]")
        display.blank()
        if not records:
            display.hint("No worktrees found")
            display.blank()
            return 0

        current = locate_worktree(records, ctx.cwd)
        for record in records:
            if record.branch_name:
                line = f"  [accent]{escape(record.branch_name)}[/accent]"
            else:
                line = "  [muted](detached HEAD)[/muted]"
            line += f" {SYMBOL_ARROW} [muted]{display_path(record, root)}[/muted]"
            if record is current:
                line += " [success](current)[/success]"
            elif record.is_main:
                line += " [info](main)[/info]"
            display.print(line)

        display.blank()
        display.print("Run [accent]worktree-switch <branch-name>[/accent] to switch to a worktree")
        display.blank()
        return 0

    record = next((wt for wt in records if wt.branch_name == branch_name), None)
    if record is None:
        raise NotFoundError(
            branch_name,
            hints=[
                "Run worktree-list to see available worktrees",
                f"Or run worktree-add {branch_name} to create a new worktree",
            ],
        )

    display.field("Worktree", f"[accent]{display_path(record, root)}[/accent]", indent=0)
    display.field("Branch", f"  [accent]{escape(branch_name)}[/accent]", indent=0)
    display.blank()

    ctx.open_session(record.path)
    return 0
