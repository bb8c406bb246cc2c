"""
End-to-end tests for `gx` argument handling and exit codes.

The Shell Delegate is replaced by a recorder, so nothing touches a real repo.

Run with:
    pytest tests/test_cli.py -v
"""

import json

import pytest

from gitx import __version__
from gitx.cli.main import main
from gitx.table import DEFAULT_TABLE


# ---------------------------------------------------------------------------
# Help and version
# ---------------------------------------------------------------------------

class TestHelp:

    def test_no_args_prints_help(self, delegate, capsys, strip_ansi):
        assert main([], delegate=delegate) == 0
        out = strip_ansi(capsys.readouterr().out)
        assert "usage: gx" in out
        assert "Developer Info" in out
        assert "Shahid Khan" in out
        assert delegate.calls == []

    def test_help_lists_every_command(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['--help'])
        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        for key in [*DEFAULT_TABLE.commit_type_names, 'amend', 'emoji-list', 'examples']:
            assert key in out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['--version'])
        assert exc_info.value.code == 0
        assert f"gx {__version__}" in capsys.readouterr().out

    def test_commit_requires_message(self, delegate):
        with pytest.raises(SystemExit) as exc_info:
            main(['fix'], delegate=delegate)
        assert exc_info.value.code == 2
        assert delegate.calls == []


# ---------------------------------------------------------------------------
# Commit types
# ---------------------------------------------------------------------------

class TestCommitCommands:

    def test_message_tokens_joined(self, delegate):
        assert main(['feature', 'added', 'login', 'form'], delegate=delegate) == 0
        assert delegate.argvs == [['git', 'commit', '-m', ":sparkles: FEATURE : added login form"]]

    @pytest.mark.parametrize("flag", ['-a', '--all'])
    def test_stage_all_flag(self, delegate, flag):
        main(['fix', flag, 'fixed crash on signup'], delegate=delegate)
        assert delegate.argvs == [
            ['git', 'add', '.'],
            ['git', 'commit', '-m', ":bug: FIX : fixed crash on signup"],
        ]

    @pytest.mark.parametrize("flag", ['-A', '--amend'])
    def test_amend_flag(self, delegate, flag):
        main(['fix', 'tweak', 'message', flag], delegate=delegate)
        assert delegate.argvs == [['git', 'commit', '--amend', '-m', ":bug: FIX : tweak message"]]

    def test_combined_flags(self, delegate):
        main(['fix', '-a', '--amend', 'tweak message'], delegate=delegate)
        assert delegate.argvs == [
            ['git', 'add', '.'],
            ['git', 'commit', '--amend', '-m', ":bug: FIX : tweak message"],
        ]

    def test_failed_add_exit_code_relayed(self, make_delegate, capsys, strip_ansi):
        delegate = make_delegate(fail_on={('git', 'add'): 128})
        assert main(['fix', '-a', 'crash'], delegate=delegate) == 128
        assert delegate.argvs == [['git', 'add', '.']]
        err = strip_ansi(capsys.readouterr().err)
        assert "Command failed: git add ." in err
        assert "fatal: simulated failure" in err

    def test_failed_commit_exit_code_relayed(self, make_delegate):
        delegate = make_delegate(fail_on={('git', 'commit'): 1})
        assert main(['docs', 'readme'], delegate=delegate) == 1

    def test_config_is_a_commit_type(self, delegate):
        assert main(['config', 'tweak', 'env'], delegate=delegate) == 0
        assert delegate.argvs == [['git', 'commit', '-m', ":wrench: CONFIG : tweak env"]]

    def test_emoji_tag_style_from_env(self, delegate, monkeypatch):
        monkeypatch.setenv('GX_TAG_STYLE', 'emoji')
        main(['fix', 'crash'], delegate=delegate)
        assert delegate.argvs == [['git', 'commit', '-m', "🐛 FIX : crash"]]


# ---------------------------------------------------------------------------
# amend <type> <message>
# ---------------------------------------------------------------------------

class TestAmendCommand:

    def test_retypes_last_commit(self, delegate):
        assert main(['amend', 'fix', 'hello'], delegate=delegate) == 0
        assert delegate.argvs == [['git', 'commit', '--amend', '-m', ":bug: FIX : hello"]]

    def test_unknown_type(self, delegate, capsys, strip_ansi):
        assert main(['amend', 'bogus', 'hello'], delegate=delegate) == 1
        assert delegate.calls == []
        err = strip_ansi(capsys.readouterr().err)
        assert "Invalid type 'bogus'" in err
        assert "gx emoji-list" in err


# ---------------------------------------------------------------------------
# a / alias
# ---------------------------------------------------------------------------

class TestAliasCommand:

    def test_list(self, delegate, capsys):
        assert main(['a', 'list'], delegate=delegate) == 0
        out = capsys.readouterr().out
        for key in DEFAULT_TABLE.alias_names:
            assert key in out
        assert delegate.calls == []

    def test_unknown_alias(self, delegate, capsys, strip_ansi):
        assert main(['a', 'nope'], delegate=delegate) == 1
        captured = capsys.readouterr()
        assert "Unknown alias." in strip_ansi(captured.err)
        out = strip_ansi(captured.out)
        assert "gx a list" in out
        for key in DEFAULT_TABLE.alias_names:
            assert key in out
        assert delegate.calls == []

    def test_extra_tokens(self, delegate):
        assert main(['a', 'ga', 'extra', 'tokens'], delegate=delegate) == 0
        assert delegate.argvs == [['git', 'add', '.', 'extra', 'tokens']]

    def test_dash_args_passed_through(self, delegate):
        main(['a', 'gld', '-n', '5'], delegate=delegate)
        assert delegate.argvs == [['git', 'log', '--oneline', '--graph', '--decorate', '--all', '-n', '5']]

    def test_long_name(self, delegate):
        main(['alias', 'gs'], delegate=delegate)
        assert delegate.argvs == [['git', 'status']]

    def test_child_exit_code_relayed(self, make_delegate):
        delegate = make_delegate(fail_on={('git', 'pull'): 2})
        assert main(['a', 'gpl'], delegate=delegate) == 2

    def test_killed_child_exits_positive(self, make_delegate):
        delegate = make_delegate(fail_on={('git', 'push'): -9})
        assert main(['a', 'gp'], delegate=delegate) == 137


# ---------------------------------------------------------------------------
# Reference output
# ---------------------------------------------------------------------------

class TestReferenceCommands:

    @pytest.mark.parametrize("command", [['emoji-list'], ['examples'], ['a', 'list']])
    def test_output_is_repeatable(self, delegate, capsys, command):
        main(command, delegate=delegate)
        first = capsys.readouterr().out
        main(command, delegate=delegate)
        second = capsys.readouterr().out
        assert first == second
        assert first
        assert delegate.calls == []

    def test_every_listed_type_is_dispatchable(self, delegate, capsys, strip_ansi):
        """Each label in emoji-list maps back to a commit subcommand that runs."""
        main(['emoji-list'], delegate=delegate)
        lines = [l for l in strip_ansi(capsys.readouterr().out).splitlines() if l.strip()]
        labels = {line.split()[1] for line in lines[1:]}
        by_label = {c.label: c for c in DEFAULT_TABLE.commit_types.values()}
        assert labels == set(by_label)

        for label in labels:
            key = by_label[label].key
            assert main([key, 'msg'], delegate=delegate) == 0

    def test_every_listed_alias_is_dispatchable(self, delegate, capsys, strip_ansi):
        main(['a', 'list'], delegate=delegate)
        lines = [l for l in strip_ansi(capsys.readouterr().out).splitlines() if l.strip()]
        keys = [line.split()[0] for line in lines[1:]]
        assert keys == DEFAULT_TABLE.alias_names

        for key in keys:
            assert main(['a', key], delegate=delegate) == 0

    def test_completion_instructions(self, monkeypatch, capsys):
        monkeypatch.setenv('SHELL', '/bin/zsh')
        assert main(['completion']) == 0
        assert 'register-python-argcomplete gx' in capsys.readouterr().out

    def test_show_config(self, delegate, capsys, strip_ansi):
        assert main(['show-config'], delegate=delegate) == 0
        assert "Current Configuration" in strip_ansi(capsys.readouterr().out)
        assert delegate.calls == []


# ---------------------------------------------------------------------------
# User aliases from .gxrc
# ---------------------------------------------------------------------------

class TestConfiguredAliases:

    def test_user_alias_runs(self, isolated_config, delegate, capsys):
        (isolated_config / '.gxrc').write_text(json.dumps({
            'aliases': {'gd': {'cmd': 'git diff --stat', 'desc': 'Diff summary'}},
        }))
        assert main(['a', 'gd', 'HEAD~1'], delegate=delegate) == 0
        assert delegate.argvs == [['git', 'diff', '--stat', 'HEAD~1']]

    def test_user_alias_listed(self, isolated_config, delegate, capsys):
        (isolated_config / '.gxrc').write_text(json.dumps({
            'aliases': {'gd': {'cmd': 'git diff', 'desc': 'Show unstaged changes'}},
        }))
        main(['a', 'list'], delegate=delegate)
        assert 'Show unstaged changes' in capsys.readouterr().out

    def test_builtin_alias_not_overridden(self, isolated_config, delegate, capsys):
        (isolated_config / '.gxrc').write_text(json.dumps({
            'aliases': {'gs': {'cmd': 'git status -sb'}},
        }))
        main(['a', 'gs'], delegate=delegate)
        assert delegate.argvs == [['git', 'status']]
        assert "conflicts with a built-in alias" in capsys.readouterr().err

    def test_show_commands_off(self, isolated_config, delegate, capsys):
        (isolated_config / '.gxrc').write_text(json.dumps({'show_commands': False}))
        main(['fix', '-a', 'crash'], delegate=delegate)
        assert capsys.readouterr().out == ""
        assert len(delegate.calls) == 2
