"""Decoder for `git worktree list --porcelain` output."""

from typing import Any, Dict, List

from opencode_worktree.models.worktree import WorktreeRecord
from opencode_worktree.logging_config import get_logger

logger = get_logger(__name__)

BRANCH_PREFIX = "refs/heads/"


def _split_field(line: str) -> tuple:
    """Split a porcelain line into its label and optional value."""
    label, _, value = line.partition(" ")
    return label, (value or None)


def _build_record(fields: Dict[str, Any], is_main: bool) -> WorktreeRecord:
    branch = fields.get("branch")
    return WorktreeRecord(
        path=fields["path"],
        commit_sha=fields.get("HEAD", ""),
        branch_name=branch,
        is_main=is_main,
        is_bare=fields.get("bare", False),
        # A branch line wins over a stray detached marker
        is_detached=fields.get("detached", False) and branch is None,
        is_locked=fields.get("locked", False),
        lock_reason=fields.get("lock_reason"),
        is_prunable=fields.get("prunable", False),
        prunable_reason=fields.get("prunable_reason"),
    )


def parse_worktree_porcelain(output: str) -> List[WorktreeRecord]:
    """Parse the porcelain worktree listing into records.

    Format (one block per worktree, blank line between blocks):

        worktree /path/to/worktree
        HEAD <sha>
        branch refs/heads/<name>      (or "detached")
        locked [reason]
        prunable [reason]

    Each "worktree" line starts a new record, so blank separators are optional.
    Unknown lines are ignored.

    Args:
        output: Raw text produced by git

    Returns:
        Records in the order git listed them; the first is the main worktree
    """
    records: List[WorktreeRecord] = []
    current: Dict[str, Any] = {}

    for raw_line in output.splitlines():
        line = raw_line.rstrip("\r")
        if not line.strip():
            continue

        label, value = _split_field(line)

        if label == "worktree":
            if current:
                records.append(_build_record(current, is_main=not records))
            current = {"path": value or ""}
            continue

        if not current:
            # Field before any worktree line
            logger.debug(f"Ignoring porcelain line outside a record: {line!r}")
            continue

        if label == "HEAD" and value:
            current["HEAD"] = value
        elif label == "branch" and value:
            if value.startswith(BRANCH_PREFIX):
                value = value[len(BRANCH_PREFIX):]
            current["branch"] = value
        elif label == "bare":
            current["bare"] = True
        elif label == "detached":
            current["detached"] = True
        elif label == "locked":
            current["locked"] = True
            current["lock_reason"] = value
        elif label == "prunable":
            current["prunable"] = True
            current["prunable_reason"] = value

    if current:
        records.append(_build_record(current, is_main=not records))

    logger.debug(f"Decoded {len(records)} worktrees")
    return records
