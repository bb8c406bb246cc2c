"""Shell Delegate - run git (and friends) on behalf of the user."""

import shlex
import subprocess
import sys
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from gitx.output import dim


@dataclass(frozen=True)
class ShellCommand:
    """A program and its arguments. Never re-parsed by a shell."""
    argv: tuple[str, ...]

    @classmethod
    def of(cls, *argv: str) -> 'ShellCommand':
        return cls(tuple(argv))

    def extend(self, args: Iterable[str]) -> 'ShellCommand':
        return ShellCommand(self.argv + tuple(args))

    def __str__(self) -> str:
        return shlex.join(self.argv)


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class ExecutionError(GitError):
    """A delegated command exited non-zero or could not be started."""

    def __init__(self, command: ShellCommand, returncode: int = 1, stdout: str = "", stderr: str = ""):
        self.command = command
        # Killed by a signal: report it the way a shell would (128 + signum)
        self.returncode = 128 - returncode if returncode < 0 else returncode or 1
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        super().__init__(f"Command failed: {command} (exit {self.returncode})")


class ShellDelegate:
    """Executes commands in a child process and relays the outcome."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def execute(self, command: ShellCommand, stream_output: bool = True) -> Optional[str]:
        """Run a command and block until it exits.

        Args:
            command: Program plus arguments
            stream_output: Inherit the terminal (True) or capture text (False)

        Returns:
            Captured stdout when stream_output is False, otherwise None.

        Raises:
            ExecutionError: on non-zero exit or spawn failure
        """
        if self.verbose:
            print(dim(f"$ {command}"), file=sys.stderr)
        start = time.time()
        try:
            if stream_output:
                subprocess.run(command.argv, check=True)
                return None
            result = subprocess.run(
                command.argv,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise ExecutionError(command, e.returncode, e.stdout, e.stderr) from e
        except OSError as e:
            # Covers FileNotFoundError when the program isn't on PATH
            raise ExecutionError(command, 1, stderr=str(e)) from e
        finally:
            if self.verbose:
                print(dim(f"  ({time.time() - start:.2f}s)"), file=sys.stderr)
