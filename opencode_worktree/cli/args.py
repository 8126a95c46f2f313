"""Command-line argument parsing for the worktree commands."""

import argparse
import sys
from typing import List, Optional

from opencode_worktree.__version__ import __version__
from opencode_worktree.constants import SYMBOL_ERROR, WORKTREE_DIR


class WorktreeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message):
        self.exit(
            1,
            f"{SYMBOL_ERROR} Error: {message}\n\n"
            f"Run {self.prog} --help for usage information\n",
        )


def _parser(prog: str, description: str, examples: List[str]) -> WorktreeArgumentParser:
    epilog = "Examples:\n" + "\n".join(f"  {example}" for example in examples)
    parser = WorktreeArgumentParser(
        prog=prog,
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"opencode-worktree {__version__}")
    return parser


def build_add_parser() -> WorktreeArgumentParser:
    parser = _parser(
        "worktree-add",
        f"Creates a new git worktree in {WORKTREE_DIR}/<branch-name>",
        [
            "worktree-add feature-auth",
            "worktree-add feature-api --from main",
            "worktree-add hotfix-123 --from production",
            "worktree-add experiment --no-open",
        ],
    )
    parser.add_argument("branch", metavar="branch-name", help="Name of the branch to create/checkout")
    parser.add_argument(
        "--from",
        dest="base",
        metavar="BRANCH",
        help="Create from specific branch (default: current HEAD)",
    )
    parser.add_argument(
        "--no-open",
        dest="open_session",
        action="store_false",
        help="Don't automatically open OpenCode session",
    )
    return parser


def build_remove_parser() -> WorktreeArgumentParser:
    parser = _parser(
        "worktree-remove",
        "Removes a git worktree",
        [
            "worktree-remove feature-auth",
            "worktree-remove feature-api --delete-branch",
            "worktree-remove old-feature --force --delete-branch",
        ],
    )
    parser.add_argument(
        "branch", metavar="branch-name", nargs="?", help="Name of the branch/worktree to remove"
    )
    parser.add_argument(
        "--delete-branch",
        action="store_true",
        help="Also delete the branch after removing worktree",
    )
    parser.add_argument(
        "--force", action="store_true", help="Force removal even with uncommitted changes"
    )
    return parser


def build_list_parser() -> WorktreeArgumentParser:
    return _parser("worktree-list", "Lists all git worktrees with their status", ["worktree-list"])


def build_switch_parser() -> WorktreeArgumentParser:
    parser = _parser(
        "worktree-switch",
        "Opens an OpenCode session in the specified worktree",
        [
            "worktree-switch                # Shows available worktrees",
            "worktree-switch feature-auth   # Opens feature-auth worktree",
        ],
    )
    parser.add_argument(
        "branch",
        metavar="branch-name",
        nargs="?",
        help="Name of the branch/worktree to switch to (optional)",
    )
    return parser


def build_status_parser() -> WorktreeArgumentParser:
    return _parser("worktree-status", "Shows detailed status of all worktrees", ["worktree-status"])


def build_sync_parser() -> WorktreeArgumentParser:
    parser = _parser(
        "worktree-sync",
        "Fetches from remote and shows which worktrees have updates",
        [
            "worktree-sync          # Fetch and show status",
            "worktree-sync --pull   # Fetch and pull in all worktrees",
        ],
    )
    parser.add_argument(
        "--pull", action="store_true", help="Automatically pull updates in each worktree"
    )
    return parser


def parse_args(parser: argparse.ArgumentParser, argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments (sys.argv when argv is None)."""
    return parser.parse_args(sys.argv[1:] if argv is None else argv)
