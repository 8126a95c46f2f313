"""Services for opencode-worktree."""
