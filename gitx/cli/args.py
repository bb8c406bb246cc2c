"""CLI Argument Parsing"""

import argparse
from typing import Optional

import argcomplete
from argcomplete.completers import ChoicesCompleter

from gitx import __version__
from gitx.cli.commands import developer_info
from gitx.table import DEFAULT_TABLE, LIST_ALIAS, CommandTable


def build_parser(table: CommandTable = DEFAULT_TABLE) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gx',
        description='Git helper CLI with git emoji commit shortcuts and aliases',
        epilog=developer_info(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--verbose', action='store_true', help='Show each delegated command and how long it took')

    subparsers = parser.add_subparsers(dest='command', metavar='<command>')

    # One subcommand per commit type: gx fix "message" [-a] [-A]
    for key, commit_type in table.commit_types.items():
        sub = subparsers.add_parser(
            key,
            help=f"{commit_type.glyph} {commit_type.label} - {commit_type.description}",
            description=f"{commit_type.glyph} {commit_type.label} - {commit_type.description}",
        )
        sub.add_argument('message', nargs='+', help='Commit message')
        sub.add_argument('-a', '--all', dest='stage_all', action='store_true', help='git add . before committing')
        sub.add_argument('-A', '--amend', action='store_true', help='amend last commit instead of new one')
        sub.set_defaults(command='commit', commit_type=key)

    amend = subparsers.add_parser(
        'amend',
        help='Amend last commit with a new type and message',
        description='Amend last commit with a new type and message',
    )
    amend.add_argument('type', help='commit type (eg fix|feature|ui|perf|docs|... )').completer = \
        ChoicesCompleter(table.commit_type_names)
    amend.add_argument('message', nargs='+', help='New commit message')

    subparsers.add_parser('emoji-list', help='Show gitmoji (emoji) reference table')

    alias = subparsers.add_parser(
        'a',
        aliases=['alias'],
        help='Run git aliases (shortcut commands for frequent git ops)',
        description='Run git aliases (shortcut commands for frequent git ops)',
    )
    alias.add_argument('alias', help=f"alias name (or '{LIST_ALIAS}' to see all aliases)").completer = \
        ChoicesCompleter([LIST_ALIAS, *table.alias_names])
    alias.add_argument('args', nargs=argparse.REMAINDER, help='optional arguments passed to the git command')
    alias.set_defaults(command='a')

    subparsers.add_parser('examples', help='Show usage examples')
    subparsers.add_parser('show-config', help='Show current configuration')
    subparsers.add_parser('completion', help='Show shell tab completion setup')

    return parser


def parse_args(argv: Optional[list[str]] = None, table: CommandTable = DEFAULT_TABLE) -> tuple[argparse.ArgumentParser, argparse.Namespace]:
    parser = build_parser(table)
    argcomplete.autocomplete(parser)
    return parser, parser.parse_args(argv)
