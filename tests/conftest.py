"""Shared fixtures: a recording Shell Delegate and an isolated config."""

import re

import pytest

import gitx.config
from gitx.config import ConfigManager
from gitx.git import ExecutionError, ShellDelegate

ANSI_RE = re.compile(r'\033\[[0-9;]*m')


class RecordingDelegate(ShellDelegate):
    """Records every command instead of running it.

    fail_on maps an argv prefix to the exit code that command should fail with.
    """

    def __init__(self, fail_on=None, captured=""):
        super().__init__()
        self.calls = []
        self.fail_on = fail_on or {}
        self.captured = captured

    @property
    def argvs(self):
        return [list(command.argv) for command, _ in self.calls]

    def execute(self, command, stream_output=True):
        self.calls.append((command, stream_output))
        for prefix, code in self.fail_on.items():
            if command.argv[:len(prefix)] == tuple(prefix):
                raise ExecutionError(command, code, stderr="fatal: simulated failure\n")
        return None if stream_output else self.captured


@pytest.fixture
def delegate():
    return RecordingDelegate()


@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from real ~/.gxrc files and the cached config."""
    home = tmp_path / 'home'
    work = tmp_path / 'work'
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv('HOME', str(home))
    monkeypatch.delenv('GX_TAG_STYLE', raising=False)
    monkeypatch.chdir(work)
    monkeypatch.setattr(gitx.config, '_manager', ConfigManager())
    return work


@pytest.fixture
def make_delegate():
    """Factory for delegates that fail or return captured output."""
    return RecordingDelegate
