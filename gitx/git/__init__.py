"""Git Operations Package"""

from gitx.git.shell import ShellDelegate, ShellCommand, GitError, ExecutionError

__all__ = [
    "ShellDelegate",
    "ShellCommand",
    "GitError",
    "ExecutionError",
]
