"""worktree-status: working tree and remote state of every worktree."""

from typing import Optional

from rich.markup import escape

from opencode_worktree.commands.context import (
    CommandContext,
    display_path,
    main_worktree_root,
)
from opencode_worktree.exceptions import ExternalToolFailure
from opencode_worktree.formatters import (
    format_remote_status,
    format_working_tree_status,
    pluralize,
)
from opencode_worktree.models.worktree import WorkingTreeStatus, WorktreeRecord
from opencode_worktree.logging_config import get_logger

logger = get_logger(__name__)


def _read_status(ctx: CommandContext, record: WorktreeRecord) -> Optional[WorkingTreeStatus]:
    try:
        return ctx.probe.working_tree_status(record.path)
    except ExternalToolFailure as e:
        logger.debug(f"Status unavailable for {record.path}: {e.diagnostic}")
        return None


def show_status(ctx: CommandContext) -> int:
    """Report branch, changes, upstream and last commit for each worktree.

    Returns:
        Exit status (always 0)
    """
    display = ctx.display
    repo_root = ctx.probe.repository_root()
    records = ctx.probe.list_worktrees()
    root = main_worktree_root(records, repo_root)

    display.header("Git Worktree Status")

    if not records:
        display.hint("No worktrees found")
        display.blank()
        return 0

    clean_count = 0
    dirty_count = 0
    unreadable_count = 0

    for index, record in enumerate(records):
        if record.is_main:
            display.print(f"[accent]{display_path(record, root)}[/accent] [info](main worktree)[/info]")
        else:
            display.print(f"[accent]{display_path(record, root)}[/accent]")

        if record.branch_name:
            display.field("Branch", escape(record.branch_name))
        elif record.is_detached:
            display.field("Branch", "[muted](detached HEAD)[/muted]")
        elif record.is_bare:
            display.field("Branch", "[muted](bare)[/muted]")

        if not record.is_bare:
            status = _read_status(ctx, record)
            if status is None:
                unreadable_count += 1
            elif status.clean:
                clean_count += 1
            else:
                dirty_count += 1
            display.field("Status", format_working_tree_status(status))

        if record.branch_name:
            remote = ctx.probe.remote_tracking_status(record.path, record.branch_name)
            display.field("Remote", format_remote_status(remote))

        commit = None if record.is_bare else ctx.probe.last_commit(record.path)
        if commit:
            display.field(
                "Last commit",
                f"[muted]\"{escape(commit.subject)}\" ({escape(commit.relative_time)})[/muted]",
            )

        if index < len(records) - 1:
            display.blank()

    display.blank()
    display.separator()

    summary = f"Clean: {clean_count}, With changes: {dirty_count}"
    if unreadable_count:
        summary += f", Unreadable: {unreadable_count}"
    display.hint(f"Total: {pluralize(len(records), 'worktree')}")
    display.hint(summary)
    display.blank()
    return 0
