"""worktree-sync: fetch and report (or fast-forward) every worktree."""

from dataclasses import dataclass

from rich.markup import escape

from opencode_worktree.commands.context import (
    CommandContext,
    display_path,
    main_worktree_root,
)
from opencode_worktree.constants import SYMBOL_FAILED, SYMBOL_WARNING
from opencode_worktree.exceptions import ExternalToolFailure, PullWarning
from opencode_worktree.formatters import format_ahead_behind, pluralize
from opencode_worktree.models.worktree import TrackingState, WorktreeRecord


@dataclass
class SyncSummary:
    """Per-run counters for the sync report."""
    updated: int = 0
    up_to_date: int = 0
    errors: int = 0
    behind: int = 0


def _pull(ctx: CommandContext, record: WorktreeRecord, summary: SyncSummary) -> None:
    """Fast-forward one worktree, never over local modifications."""
    display = ctx.display
    try:
        has_changes = ctx.probe.has_uncommitted_changes(record.path)
    except ExternalToolFailure:
        display.print(f"  [warning]{SYMBOL_WARNING} Skipping pull - could not read working tree status[/warning]")
        summary.errors += 1
        return

    if has_changes:
        display.print(f"  [warning]{SYMBOL_WARNING} Skipping pull - uncommitted changes present[/warning]")
        summary.errors += 1
        return

    display.info("Pulling updates...", indent=2)
    try:
        ctx.worktrees.pull_fast_forward(record.path)
    except PullWarning as warning:
        reason = warning.diagnostic or warning.message
        display.print(f"  [error]{SYMBOL_FAILED} Pull failed: {escape(reason)}[/error]")
        summary.errors += 1
        return

    display.success("Pull successful", indent=2)
    summary.updated += 1


def _sync_record(ctx: CommandContext, record: WorktreeRecord, pull: bool, summary: SyncSummary) -> None:
    display = ctx.display

    if not record.branch_name:
        display.print("  [muted]Detached HEAD - skipping[/muted]")
        return

    display.field("Branch", escape(record.branch_name))

    remote = ctx.probe.remote_tracking_status(record.path, record.branch_name)

    if remote.state == TrackingState.NO_UPSTREAM:
        display.print("  [muted]No remote tracking branch[/muted]")
        return

    if remote.state == TrackingState.COMPARISON_FAILED:
        display.warning(f"Warning: Could not compare with upstream: {escape(remote.error or 'unknown error')}", indent=2)
        if pull:
            summary.errors += 1
        return

    if remote.up_to_date:
        display.success(f"Up to date with {escape(remote.upstream or '')}", indent=2)
        summary.up_to_date += 1
        return

    display.print(f"  {format_ahead_behind(remote.ahead, remote.behind, unit='commit')}")

    if remote.behind > 0:
        summary.behind += 1
        if pull:
            _pull(ctx, record, summary)
        else:
            display.command(f"Run: git -C {record.path} pull")


def sync_worktrees(ctx: CommandContext, pull: bool = False) -> int:
    """Fetch from the remote, then report how each worktree compares with its upstream.

    With pull, behind worktrees without local changes are fast-forwarded.
    Per-worktree failures are reported and never change the exit status.

    Raises:
        ExternalToolFailure: The fetch failed

    Returns:
        Exit status
    """
    display = ctx.display
    repo_root = ctx.probe.repository_root()

    display.header("Git Worktree Sync")

    display.info("Fetching from remote...")
    ctx.worktrees.fetch(ctx.config.remote_name)
    display.success("Fetch complete")
    display.blank()

    display.separator()
    display.blank()

    records = ctx.probe.list_worktrees()
    root = main_worktree_root(records, repo_root)

    if not records:
        display.hint("No worktrees found")
        display.blank()
        return 0

    summary = SyncSummary()
    for record in records:
        if record.is_main:
            display.print(f"[accent]{display_path(record, root)}[/accent] [info](main)[/info]")
        else:
            display.print(f"[accent]{display_path(record, root)}[/accent]")
        _sync_record(ctx, record, pull, summary)
        display.blank()

    display.separator()

    if pull:
        display.hint(
            f"Summary: {summary.updated} updated, {summary.up_to_date} up to date, "
            f"{pluralize(summary.errors, 'error')}"
        )
        display.blank()
        if summary.errors:
            display.print("[warning]Some worktrees could not be updated. Check for uncommitted changes.[/warning]")
            display.blank()
    elif summary.behind:
        verb = "has" if summary.behind == 1 else "have"
        display.print(f"[warning]{pluralize(summary.behind, 'worktree')} {verb} updates available[/warning]")
        display.print("[accent]Run worktree-sync --pull to update all worktrees[/accent]")
        display.blank()
    else:
        display.print("[success]All worktrees are up to date[/success]")
        display.blank()
    return 0
