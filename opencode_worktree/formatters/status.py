"""Working tree and remote status formatting utilities.

Every function returns Rich markup using the semantic style names from
``constants.STYLES``; dynamic text is escaped.
"""

from typing import List, Optional

from rich.markup import escape

from opencode_worktree.models.worktree import RemoteStatus, TrackingState, WorkingTreeStatus


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """
    Format a count with the matching noun form.

    Example:
        pluralize(1, "commit") -> "1 commit"; pluralize(3, "commit") -> "3 commits"
    """
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"


def format_change_counts(status: WorkingTreeStatus) -> str:
    """
    Summarise a dirty working tree by change type.

    Returns:
        Plain text such as "2 modified, 1 untracked"
    """
    parts: List[str] = []
    if status.modified:
        parts.append(f"{status.modified} modified")
    if status.added:
        parts.append(f"{status.added} added")
    if status.deleted:
        parts.append(f"{status.deleted} deleted")
    if status.renamed:
        parts.append(f"{status.renamed} renamed")
    if status.untracked:
        parts.append(f"{status.untracked} untracked")
    if not parts and status.total:
        parts.append(f"{pluralize(status.total, 'change')}")
    return ", ".join(parts)


def format_working_tree_status(status: Optional[WorkingTreeStatus]) -> str:
    """
    Format a working tree status line.

    Args:
        status: Status counts, or None when the status could not be read

    Returns:
        Markup for "Clean working directory", the change counts, or an error
    """
    if status is None:
        return "[error]Error reading status[/error]"
    if status.clean:
        return "[success]Clean working directory[/success]"
    return f"[warning]{format_change_counts(status)}[/warning]"


def format_ahead_behind(ahead: int, behind: int, unit: str = "") -> str:
    """
    Format ahead/behind counts, omitting zero sides.

    Args:
        ahead: Commits only on the local branch
        behind: Commits only on the upstream
        unit: Noun to count ("commit"), or empty for bare numbers

    Example:
        "[warning]2 ahead[/warning], [error]3 behind[/error]"
    """
    def label(count: int, direction: str) -> str:
        return f"{pluralize(count, unit)} {direction}" if unit else f"{count} {direction}"

    parts = []
    if ahead > 0:
        parts.append(f"[warning]{label(ahead, 'ahead')}[/warning]")
    if behind > 0:
        parts.append(f"[error]{label(behind, 'behind')}[/error]")
    return ", ".join(parts)


def format_remote_status(remote: RemoteStatus) -> str:
    """
    Format the remote tracking summary shown by the status command.

    Args:
        remote: Tagged comparison result

    Returns:
        Markup describing the upstream relationship
    """
    if remote.state == TrackingState.NO_UPSTREAM:
        return "[muted]No upstream branch[/muted]"
    if remote.state == TrackingState.COMPARISON_FAILED:
        target = f" {escape(remote.upstream)}" if remote.upstream else ""
        reason = f": {escape(remote.error)}" if remote.error else ""
        return f"[error]Could not compare with upstream{target}{reason}[/error]"
    if remote.up_to_date:
        return f"[success]Up to date with {escape(remote.upstream or '')}[/success]"
    return format_ahead_behind(remote.ahead, remote.behind)
