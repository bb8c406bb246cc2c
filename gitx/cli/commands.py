"""CLI Commands - reference tables, examples, config and completion help."""

import os
import sys

from gitx import DEVELOPER
from gitx.config import ENV_TAG_STYLE, get_config_path, load_config
from gitx.output import bold, dim, info, success, warning, highlight, underline
from gitx.table import CommandTable

EXAMPLES = (
    'gx feature "added login form"',
    'gx fix -a "fixed crash on signup"',
    'gx fix -a --amend "tweak message"',
    'gx amend fix "updated commit message"',
    'gx a ga',
    'gx emoji-list',
)


def developer_info() -> str:
    """Attribution block appended to the top-level help."""
    return (
        f"\n{bold('Developer Info')}\n"
        f"  {success('Name:')} {DEVELOPER['name']}\n"
        f"  {success('GitHub:')} {underline(DEVELOPER['github'])}\n"
        f"  {success('Email:')} {DEVELOPER['email']}\n"
        f"  {dim(DEVELOPER['note'])}\n"
    )


def display_emoji_list(table: CommandTable) -> int:
    """Print the gitmoji reference table."""
    print(bold("\nGitmoji Reference Table\n"))
    for commit_type in table.commit_types.values():
        glyph = warning(commit_type.glyph)
        label = success(commit_type.label.ljust(12))
        code = highlight(commit_type.tag.ljust(24))
        desc = info(commit_type.description)
        print(f"{glyph}  {label} {code} {desc}")
    print()
    return 0


def display_alias_list(table: CommandTable) -> int:
    """Print every alias with the command it runs."""
    print(bold("\nGit Aliases Reference\n"))
    for key, alias in table.aliases.items():
        name = success(key.ljust(22))
        command = warning(alias.command.ljust(45))
        desc = info(alias.description)
        print(f"{name} {command} {desc}")
    print()
    return 0


def display_examples() -> int:
    print(bold("\nExamples:\n"))
    for example in EXAMPLES:
        print(success(f"  {example}"))
    print()
    return 0


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .gxrc found)")

    env_tag_style = os.environ.get(ENV_TAG_STYLE)
    if env_tag_style:
        print(f"  {dim('Environment overrides:')}")
        print(f"    {ENV_TAG_STYLE}={env_tag_style}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    tag_style:     {info(config.tag_style)}")
    print(f"    show_commands: {info(str(config.show_commands).lower())}")
    if config.aliases:
        print(f"    aliases:")
        for alias in config.extra_aliases():
            print(f"      {alias.key.ljust(12)} {info(alias.command)}")
    else:
        print(f"    aliases:       {info('none')}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .gxrc (in current directory)")
    print(f"    Global: ~/.gxrc\n")

    return 0


# One-line activation per shell; `eval` works for both bash and zsh
ACTIVATE = {
    'bash': 'eval "$(register-python-argcomplete gx)"',
    'zsh': 'eval "$(register-python-argcomplete gx)"',
    'fish': 'register-python-argcomplete --shell fish gx | source',
    'powershell': 'register-python-argcomplete --shell powershell gx | Out-String | Invoke-Expression',
}

RC_FILES = {'bash': '~/.bashrc', 'zsh': '~/.zshrc', 'fish': '~/.config/fish/config.fish', 'powershell': '$PROFILE'}


def _detect_shell() -> str | None:
    shell = os.path.basename(os.environ.get('SHELL', ''))
    if shell in ACTIVATE:
        return shell
    if sys.platform == 'win32':
        return 'powershell'
    return None


def run_install_completion() -> int:
    """Print tab completion setup for the current shell (or all of them)."""
    print(f"\n{bold('Tab Completion Setup')}\n")

    shell = _detect_shell()
    if shell:
        print(f"Add this line to {dim(RC_FILES[shell])}:\n")
        print(f"  {ACTIVATE[shell]}\n")
    else:
        print("Add one of these to your shell's startup file:\n")
        for name, line in ACTIVATE.items():
            print(f"  {dim('# ' + name)}")
            print(f"  {line}\n")

    print(dim("Open a new shell, then press TAB to complete commands and aliases."))
    return 0
