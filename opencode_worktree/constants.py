"""Shared constants for opencode-worktree."""

from typing import Dict, Tuple

# Reserved directory, relative to the repository root, holding linked checkouts
WORKTREE_DIR = ".opencode-wt"
IGNORE_FILE = ".gitignore"
DEFAULT_REMOTE = "origin"
DEFAULT_LAUNCHER: Tuple[str, ...] = ("opencode",)

SHORT_SHA_LENGTH = 7


# Symbol constants
SYMBOL_ERROR = "❌"
SYMBOL_WARNING = "⚠"
SYMBOL_INFO = "ℹ"
SYMBOL_OK = "✓"
SYMBOL_FAILED = "✗"
SYMBOL_DONE = "✅"
SYMBOL_ARROW = "→"
SEPARATOR_CHAR = "━"
SEPARATOR_WIDTH = 42


# Semantic styles (Rich style definitions) shared by every command
STYLES: Dict[str, str] = {
    "info": "blue",
    "label": "blue",
    "success": "green",
    "warning": "yellow",
    "error": "red",
    "accent": "cyan",
    "muted": "bright_black",
}
