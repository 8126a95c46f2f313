"""Display service for terminal output"""
from typing import IO, Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from opencode_worktree.constants import (
    SEPARATOR_CHAR,
    SEPARATOR_WIDTH,
    STYLES,
    SYMBOL_DONE,
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_OK,
    SYMBOL_WARNING,
)
from opencode_worktree.exceptions import WorktreeToolError

THEME = Theme(STYLES)


class DisplayService:
    """Formatted output for the worktree commands.

    Messages accept Rich markup using the semantic styles in ``THEME``;
    callers escape any dynamic text they embed. Regular output goes to
    ``console``, errors and warnings to ``err_console``.
    """

    def __init__(self, console: Console, err_console: Optional[Console] = None):
        self.console = console
        self.err_console = err_console or console

    @classmethod
    def create(
        cls,
        color: bool = True,
        file: Optional[IO[str]] = None,
        err_file: Optional[IO[str]] = None,
    ) -> "DisplayService":
        """Build a display writing to stdout/stderr (or the given files).

        Args:
            color: False for plain text output
            file: Stream for regular output (default: stdout)
            err_file: Stream for errors and warnings (default: stderr)
        """
        options = dict(theme=THEME, no_color=not color, highlight=False, soft_wrap=True, emoji=False)
        console = Console(file=file, **options)
        if err_file is None and file is not None:
            err_console = console
        else:
            err_console = Console(file=err_file, stderr=err_file is None, **options)
        return cls(console, err_console)

    def print(self, message: str = "") -> None:
        self.console.print(message)

    def blank(self) -> None:
        self.console.print()

    def separator(self) -> None:
        self.console.print(f"[info]{SEPARATOR_CHAR * SEPARATOR_WIDTH}[/info]")

    def header(self, title: str) -> None:
        """Print a boxed section title."""
        self.separator()
        self.console.print(f"[info]   {escape(title)}[/info]")
        self.separator()
        self.blank()

    def field(self, label: str, value: str, indent: int = 2) -> None:
        """Print "Label: value"; value is markup."""
        self.console.print(f"{' ' * indent}[label]{escape(label)}:[/label] {value}")

    def info(self, message: str, indent: int = 0) -> None:
        self.console.print(f"{' ' * indent}[info]{SYMBOL_INFO} {message}[/info]")

    def success(self, message: str, indent: int = 0) -> None:
        self.console.print(f"{' ' * indent}[success]{SYMBOL_OK} {message}[/success]")

    def done(self, message: str) -> None:
        self.console.print(f"[success]{SYMBOL_DONE} {message}[/success]")

    def hint(self, message: str) -> None:
        self.console.print(f"[muted]{message}[/muted]")

    def command(self, command: str, indent: int = 2) -> None:
        """Print a shell command the user may run."""
        self.console.print(f"{' ' * indent}[accent]{escape(command)}[/accent]")

    def warning(self, message: str, indent: int = 0) -> None:
        self.err_console.print(f"{' ' * indent}[warning]{SYMBOL_WARNING} {message}[/warning]")

    def error(self, message: str, diagnostic: Optional[str] = None, hints: Iterable[str] = ()) -> None:
        """Print a fatal error with git's diagnostic text and follow-up hints."""
        self.err_console.print(f"[error]{SYMBOL_ERROR} Error: {message}[/error]")
        if diagnostic:
            self.err_console.print()
            self.err_console.print(escape(diagnostic))
        hints = list(hints)
        if hints:
            self.err_console.print()
            for hint in hints:
                self.err_console.print(escape(hint))

    def report_error(self, error: WorktreeToolError) -> None:
        self.error(escape(error.message), error.diagnostic, error.hints)

    def report_warning(self, warning: WorktreeToolError, indent: int = 0) -> None:
        """Print a non-fatal problem with its diagnostic and hints."""
        self.warning(f"Warning: {escape(warning.message)}", indent=indent)
        if warning.diagnostic:
            self.err_console.print(f"{' ' * indent}{escape(warning.diagnostic)}")
        for hint in warning.hints:
            self.err_console.print(f"{' ' * indent}{escape(hint)}")
