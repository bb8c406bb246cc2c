"""CLI Main Entry Point"""

import sys
from typing import Optional

from gitx.config import load_config
from gitx.dispatch import Dispatcher, UnknownAlias, UnknownCommitType
from gitx.git import ExecutionError, ShellDelegate
from gitx.output import dim, error, warning, print_error, print_hint
from gitx.table import DEFAULT_TABLE, CommandTable, TableError

from gitx.cli.args import parse_args
from gitx.cli.commands import display_config, display_emoji_list, display_examples, run_install_completion


def _build_table(config) -> CommandTable:
    """Merge user aliases from config into the built-in table."""
    extra = config.extra_aliases()
    if not extra:
        return DEFAULT_TABLE
    return DEFAULT_TABLE.with_aliases(extra)


def _report_execution_error(e: ExecutionError) -> int:
    """Relay a failed child command and return its exit code."""
    print(f"{error('Command failed:')} {warning(str(e.command))}", file=sys.stderr)
    if e.stdout:
        print(e.stdout.rstrip('\n'), file=sys.stderr)
    if e.stderr:
        print(error(e.stderr.rstrip('\n')), file=sys.stderr)
    return e.returncode


def _handle_subcommands(args, table):
    """Handle read-only subcommands that never touch git.

    Returns:
        tuple: (exit_code, handled)
    """
    if args.command == 'emoji-list':
        return display_emoji_list(table), True
    if args.command == 'examples':
        return display_examples(), True
    if args.command == 'show-config':
        return display_config(), True
    if args.command == 'completion':
        return run_install_completion(), True
    return 0, False


def _dispatch(args, dispatcher: Dispatcher) -> int:
    if args.command == 'commit':
        return dispatcher.commit(args.commit_type, args.message, stage_all=args.stage_all, amend=args.amend)
    if args.command == 'amend':
        return dispatcher.amend(args.type, args.message)
    if args.command == 'a':
        return dispatcher.alias(args.alias, args.args)
    raise ValueError(f"Unhandled command: {args.command}")


def main(argv: Optional[list[str]] = None, delegate: Optional[ShellDelegate] = None) -> int:
    """Main entry point for the CLI."""
    config = load_config()
    try:
        table = _build_table(config)
    except TableError as e:
        print_error(f"Invalid alias configuration: {e}")
        return 1

    parser, args = parse_args(argv, table)

    # No subcommand: show help
    if args.command is None:
        parser.print_help()
        return 0

    exit_code, handled = _handle_subcommands(args, table)
    if handled:
        return exit_code

    dispatcher = Dispatcher(
        table,
        delegate=delegate,
        use_glyph=config.use_glyph,
        show_commands=config.show_commands,
        verbose=args.verbose,
    )

    try:
        return _dispatch(args, dispatcher)
    except UnknownCommitType as e:
        print_error(str(e))
        return 1
    except UnknownAlias as e:
        print_error("Unknown alias.")
        print_hint("Use `gx a list` to see all supported aliases.")
        print(dim(f"  Valid aliases: {', '.join(e.valid)}"))
        return 1
    except ExecutionError as e:
        return _report_execution_error(e)
    except KeyboardInterrupt:
        print()
        return 130
