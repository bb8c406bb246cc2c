"""Command Table - commit types and git aliases.

Single source of truth for everything `gx` can dispatch.
Used by: cli/args.py (subcommand registration), dispatch.py, cli/commands.py (reference tables).
"""

import shlex
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

# Subcommand names owned by the CLI itself; commit types can't shadow them
RESERVED_COMMANDS = frozenset({'amend', 'emoji-list', 'a', 'alias', 'examples', 'show-config', 'completion'})

# `gx a list` prints the alias table instead of running one
LIST_ALIAS = 'list'


class TableError(ValueError):
    """Raised when a command table is malformed."""
    pass


@dataclass(frozen=True)
class CommitType:
    """A commit-type shortcut: `gx <key> <message>`."""
    key: str
    glyph: str
    tag: str
    label: str
    description: str

    def format_message(self, message: str, use_glyph: bool = False) -> str:
        """Build the commit body, e.g. ':bug: FIX : handle empty input'."""
        tag = self.glyph if use_glyph else self.tag
        return f"{tag} {self.label} : {message}"


@dataclass(frozen=True)
class GitAlias:
    """A pre-defined command: `gx a <key> [args...]`."""
    key: str
    command: str
    description: str

    @property
    def argv(self) -> tuple[str, ...]:
        return tuple(shlex.split(self.command))


def _index(entries: Iterable, kind: str) -> Mapping:
    indexed = {}
    for entry in entries:
        if entry.key in indexed:
            raise TableError(f"Duplicate {kind} key '{entry.key}'")
        indexed[entry.key] = entry
    return MappingProxyType(indexed)


@dataclass(frozen=True)
class CommandTable:
    """Read-only lookup of commit types and aliases, validated on construction."""
    commit_types: Mapping[str, CommitType] = field(default_factory=dict)
    aliases: Mapping[str, GitAlias] = field(default_factory=dict)

    @classmethod
    def build(cls, commit_types: Iterable[CommitType], aliases: Iterable[GitAlias]) -> 'CommandTable':
        """Index entries by key, rejecting repeated keys instead of shadowing them."""
        return cls(
            commit_types=_index(commit_types, 'commit type'),
            aliases=_index(aliases, 'alias'),
        )

    def __post_init__(self):
        for key, entry in self.commit_types.items():
            if key != entry.key:
                raise TableError(f"Commit type '{entry.key}' registered under '{key}'")
            if key in RESERVED_COMMANDS:
                raise TableError(f"Commit type '{key}' shadows a built-in command")
            if not entry.tag or not entry.label:
                raise TableError(f"Commit type '{key}' needs a tag and a label")
        for key, entry in self.aliases.items():
            if key != entry.key:
                raise TableError(f"Alias '{entry.key}' registered under '{key}'")
            if key == LIST_ALIAS:
                raise TableError(f"Alias key '{LIST_ALIAS}' is reserved")
            if not entry.argv:
                raise TableError(f"Alias '{key}' has an empty command")

    @property
    def commit_type_names(self) -> list[str]:
        return list(self.commit_types)

    @property
    def alias_names(self) -> list[str]:
        return list(self.aliases)

    def with_aliases(self, extra: Iterable[GitAlias]) -> 'CommandTable':
        """Return a new table with extra aliases appended."""
        return CommandTable.build(self.commit_types.values(), [*self.aliases.values(), *extra])


COMMIT_TYPES = (
    CommitType('init', '🎉', ':tada:', 'INIT', 'Initial project setup'),
    CommitType('feature', '✨', ':sparkles:', 'FEATURE', 'New feature or enhancement'),
    CommitType('fix', '🐛', ':bug:', 'FIX', 'Bug fix'),
    CommitType('hotfix', '🚑', ':ambulance:', 'HOTFIX', 'Urgent production fix'),
    CommitType('delete', '🔥', ':fire:', 'DELETE', 'Remove code/files'),
    CommitType('refactor', '🔨', ':hammer:', 'REFACTOR', 'Code restructure (no behavior change)'),
    CommitType('docs', '📚', ':books:', 'DOCS', 'Documentation updates'),
    CommitType('style', '💄', ':lipstick:', 'STYLE', 'Formatting, styles, UI minor changes'),
    CommitType('ui', '🎨', ':art:', 'UI', 'UI/UX improvements'),
    CommitType('test', '✅', ':white_check_mark:', 'TEST', 'Add/update tests'),
    CommitType('perf', '⚡', ':zap:', 'PERF', 'Performance improvements'),
    CommitType('deploy', '🚀', ':rocket:', 'DEPLOY', 'Deployment / CI changes'),
    CommitType('upgrade', '⬆️', ':arrow_up:', 'UPGRADE', 'Upgrade dependencies'),
    CommitType('config', '🔧', ':wrench:', 'CONFIG', 'Config or environment changes'),
    CommitType('ci', '👷', ':construction_worker:', 'CI', 'CI pipeline changes'),
    CommitType('security', '🔒', ':lock:', 'SECURITY', 'Security related changes'),
    CommitType('rollback', '⏪', ':rewind:', 'ROLLBACK', 'Rollback or revert'),
    CommitType('release', '🔖', ':bookmark:', 'RELEASE', 'Release/Version tag'),
    CommitType('seo', '🔍', ':mag:', 'SEO', 'Search engine optimization'),
    CommitType('a11y', '🦽', ':wheelchair:', 'ACCESSIBILITY', 'Accessibility improvements'),
    CommitType('merge', '🔀', ':twisted_rightwards_arrows:', 'MERGE', 'Merge branches'),
    CommitType('chore', '🗑️', ':wastebasket:', 'CHORE', 'Routine chores/cleanup'),
)

GIT_ALIASES = (
    GitAlias('ga', 'git add .', 'Stage all changes (shortcut for `git add .`). Useful for quickly staging everything.'),
    GitAlias('gs', 'git status', "Show working tree status. See what's modified, staged, or untracked."),
    GitAlias('gm', 'git commit', 'Create a commit with staged changes (opens editor for message).'),
    GitAlias('gp', 'git push', 'Push current branch to remote.'),
    GitAlias('gpl', 'git pull', 'Pull latest changes from remote for current branch.'),
    GitAlias('gco', 'git checkout', 'Switch branches or restore files.'),
    GitAlias('gb', 'git branch', 'List, create, or delete local branches.'),
    GitAlias('gcm', 'git checkout main', 'Quickly switch to the `main` branch.'),
    GitAlias('gps', 'git push origin main', 'Push `main` branch to remote.'),
    GitAlias('gplm', 'git pull origin main', 'Pull latest changes from `main` branch.'),
    GitAlias('gld', 'git log --oneline --graph --decorate --all', 'Pretty git log. Shows history as a decorated graph.'),
    GitAlias('reset-hard', 'git reset --hard HEAD~1', 'Discard the last commit and changes permanently. ⚠️ Use with caution.'),
    GitAlias('reset-soft', 'git reset --soft HEAD~1', 'Undo last commit but keep changes staged. Useful for re-committing with fixes.'),
    GitAlias('delete-local-branch', 'git branch -d', 'Delete a local branch. Use when branch is already merged.'),
    GitAlias('delete-remote-branch', 'git push origin --delete', 'Delete a branch on remote (GitHub/GitLab). ⚠️ Be careful.'),
    GitAlias('stash', 'git stash', 'Save uncommitted changes temporarily.'),
    GitAlias('stash-pop', 'git stash pop', 'Restore most recent stashed changes and remove from stash list.'),
    GitAlias('cls', 'clear', 'Clear terminal screen.'),
)

DEFAULT_TABLE = CommandTable.build(COMMIT_TYPES, GIT_ALIASES)

# List of type names for argparse and completion
COMMIT_TYPE_NAMES = DEFAULT_TABLE.commit_type_names


__all__ = [
    "CommitType",
    "GitAlias",
    "CommandTable",
    "TableError",
    "COMMIT_TYPES",
    "GIT_ALIASES",
    "COMMIT_TYPE_NAMES",
    "DEFAULT_TABLE",
    "RESERVED_COMMANDS",
    "LIST_ALIAS",
]
