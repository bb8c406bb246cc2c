"""Dispatcher - turn a subcommand into delegated git commands."""

from typing import Optional

from gitx.cli.commands import display_alias_list
from gitx.git import ExecutionError, ShellCommand, ShellDelegate
from gitx.output import dim, success, running
from gitx.table import DEFAULT_TABLE, LIST_ALIAS, CommandTable, CommitType

STAGE_ALL = ShellCommand.of('git', 'add', '.')
LAST_COMMIT = ShellCommand.of('git', 'log', '-1', '--oneline')


class UnknownCommitType(Exception):
    """Raised when a commit type key isn't in the table."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Invalid type '{key}'. See `gx emoji-list` for supported types.")


class UnknownAlias(Exception):
    """Raised when an alias key isn't in the table."""

    def __init__(self, key: str, valid: list[str]):
        self.key = key
        self.valid = valid
        super().__init__(f"Unknown alias '{key}'.")


def build_commit_command(commit_type: CommitType, message: str, amend: bool = False,
                         use_glyph: bool = False) -> ShellCommand:
    """Build `git commit [--amend] -m <body>` with the body as a single argument."""
    body = commit_type.format_message(message, use_glyph=use_glyph)
    if amend:
        return ShellCommand.of('git', 'commit', '--amend', '-m', body)
    return ShellCommand.of('git', 'commit', '-m', body)


class Dispatcher:
    """Resolves subcommands against a CommandTable and runs them through a ShellDelegate."""

    def __init__(self, table: CommandTable = DEFAULT_TABLE, delegate: Optional[ShellDelegate] = None,
                 use_glyph: bool = False, show_commands: bool = True, verbose: bool = False):
        self.table = table
        self.delegate = delegate if delegate is not None else ShellDelegate(verbose=verbose)
        self.use_glyph = use_glyph
        self.show_commands = show_commands
        self.verbose = verbose

    def _status(self, text: str) -> None:
        if self.show_commands:
            print(text)

    def _lookup_type(self, key: str) -> CommitType:
        try:
            return self.table.commit_types[key]
        except KeyError:
            raise UnknownCommitType(key) from None

    def _report_last_commit(self) -> None:
        if not self.verbose:
            return
        try:
            summary = self.delegate.execute(LAST_COMMIT, stream_output=False)
        except ExecutionError:
            # The commit itself already succeeded
            print(dim("  (could not read the new commit)"))
            return
        if summary:
            print(dim(f"  {summary.strip()}"))

    def commit(self, key: str, message_parts: list[str], stage_all: bool = False, amend: bool = False) -> int:
        """Create (or amend) a commit labelled with the given commit type.

        Args:
            key: Commit type key, e.g. 'fix'
            message_parts: Message tokens, joined with single spaces
            stage_all: Run `git add .` first; a failure there stops before committing
            amend: Amend the last commit instead of creating a new one

        Returns:
            Exit code (0). Failures raise ExecutionError.
        """
        commit_type = self._lookup_type(key)
        message = ' '.join(message_parts)

        if stage_all:
            self._status(dim(f"Running: {STAGE_ALL}"))
            self.delegate.execute(STAGE_ALL)

        command = build_commit_command(commit_type, message, amend=amend, use_glyph=self.use_glyph)
        self._status(success(f"Committing: {commit_type.glyph} {commit_type.label}"))
        self.delegate.execute(command)
        self._report_last_commit()
        return 0

    def amend(self, type_key: str, message_parts: list[str]) -> int:
        """Rewrite the last commit message with a new type and message."""
        commit_type = self._lookup_type(type_key)
        message = ' '.join(message_parts)
        self.delegate.execute(build_commit_command(commit_type, message, amend=True, use_glyph=self.use_glyph))
        self._report_last_commit()
        return 0

    def alias(self, alias_key: str, extra_args: list[str]) -> int:
        """Run a pre-defined alias, or print the alias table for 'list'."""
        if alias_key == LIST_ALIAS:
            return display_alias_list(self.table)

        entry = self.table.aliases.get(alias_key)
        if entry is None:
            raise UnknownAlias(alias_key, self.table.alias_names)

        command = ShellCommand(entry.argv).extend(extra_args or [])
        self._status(running(f"> Running: {command}"))
        self.delegate.execute(command)
        return 0
