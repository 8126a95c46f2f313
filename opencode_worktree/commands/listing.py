"""worktree-list: show every worktree of the repository."""

from typing import List

from rich.markup import escape

from opencode_worktree.commands.context import (
    CommandContext,
    display_path,
    main_worktree_root,
)
from opencode_worktree.formatters import pluralize
from opencode_worktree.models.worktree import WorktreeRecord
from opencode_worktree.services.paths import locate_worktree


def format_indicators(record: WorktreeRecord, is_current: bool, is_main: bool) -> str:
    """
    Format the state markers shown after a worktree path.

    Returns:
        Markup such as " (current, main worktree)", or "" when nothing applies
    """
    indicators: List[str] = []
    if is_current:
        indicators.append("[success]current[/success]")
    if is_main:
        indicators.append("[info]main worktree[/info]")
    if record.is_bare:
        indicators.append("[muted]bare[/muted]")
    if record.is_locked:
        reason = f": {escape(record.lock_reason)}" if record.lock_reason else ""
        indicators.append(f"[warning]locked{reason}[/warning]")
    if record.is_prunable:
        indicators.append("[error]prunable[/error]")
    if record.is_detached:
        indicators.append("[muted]detached HEAD[/muted]")
    return f" ({', '.join(indicators)})" if indicators else ""


def list_worktrees(ctx: CommandContext) -> int:
    """Print each worktree with its branch, commit and state markers.

    Returns:
        Exit status (always 0)
    """
    display = ctx.display
    repo_root = ctx.probe.repository_root()
    records = ctx.probe.list_worktrees()
    root = main_worktree_root(records, repo_root)

    display.header("Git Worktrees")

    if not records:
        display.hint("No worktrees found")
        display.blank()
        return 0

    current = locate_worktree(records, ctx.cwd)

    for record in records:
        markers = format_indicators(record, is_current=record is current, is_main=record.is_main)
        display.print(f"[accent]{display_path(record, root)}[/accent]{markers}")
        if record.branch_name:
            display.field("Branch", escape(record.branch_name))
        if record.commit_sha:
            display.field("Commit", record.short_sha)
        display.blank()

    linked = sum(1 for record in records if not record.is_main)
    display.hint(f"Total: {pluralize(len(records), 'worktree')} ({linked} linked)")
    display.blank()
    return 0
