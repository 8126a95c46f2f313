"""Entry points for the worktree commands"""

from typing import Callable, List, Optional

from rich.markup import escape

from opencode_worktree.cli.args import (
    build_add_parser,
    build_list_parser,
    build_remove_parser,
    build_status_parser,
    build_switch_parser,
    build_sync_parser,
    parse_args,
)
from opencode_worktree.commands import (
    CommandContext,
    add_worktree,
    list_worktrees,
    remove_worktree,
    show_status,
    switch_worktree,
    sync_worktrees,
)
from opencode_worktree.config import Config
from opencode_worktree.exceptions import WorktreeToolError
from opencode_worktree.logging_config import get_logger, setup_logging
from opencode_worktree.services.display_service import DisplayService

logger = get_logger(__name__)


def run_command(parsed_args, command: Callable[[CommandContext], int], display: Optional[DisplayService] = None) -> int:
    """Set up logging, config and output, then run command with a fresh context.

    Fatal WorktreeToolErrors are printed and turned into exit status 1.
    """
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        config = Config.from_env(verbose=parsed_args.verbose, debug=parsed_args.debug)
    except ValueError as e:
        display = display or DisplayService.create()
        display.error(f"Invalid configuration: {escape(str(e))}")
        return 1

    display = display or DisplayService.create(color=config.color)

    if config.debug:
        display.print("[warning]Debug mode enabled[/warning]")
        display.print("[warning]Configuration:[/warning]")
        for key, value in config.to_dict().items():
            display.print(f"  {key}: {escape(str(value))}")

    try:
        ctx = CommandContext.build(config, display)
        return command(ctx)
    except WorktreeToolError as e:
        logger.debug(f"Command failed: {e!r}")
        display.report_error(e)
        return 1
    except KeyboardInterrupt:
        display.print("\n[warning]Operation cancelled by user[/warning]")
        return 1
    except Exception as e:
        display.error(escape(str(e)))
        if config.debug:
            display.err_console.print_exception()
        return 1


def add_main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(build_add_parser(), argv)
    return run_command(
        args, lambda ctx: add_worktree(ctx, args.branch, base=args.base, open_session=args.open_session)
    )


def remove_main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(build_remove_parser(), argv)
    return run_command(
        args,
        lambda ctx: remove_worktree(ctx, args.branch, delete_branch=args.delete_branch, force=args.force),
    )


def list_main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(build_list_parser(), argv)
    return run_command(args, list_worktrees)


def switch_main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(build_switch_parser(), argv)
    return run_command(args, lambda ctx: switch_worktree(ctx, args.branch))


def status_main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(build_status_parser(), argv)
    return run_command(args, show_status)


def sync_main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(build_sync_parser(), argv)
    return run_command(args, lambda ctx: sync_worktrees(ctx, pull=args.pull))

