"""Abstract base class for command runners.

A runner is the only place a process is spawned, so the Taskwarrior client
can be exercised with a scripted fake in tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class CommandResult:
    """Outcome of one external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(ABC):
    """Abstract interface for running an external program."""

    @abstractmethod
    def run(
        self,
        args: list[str],
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        """Run a command and capture its output.

        Args:
            args: Full argument vector, program first. Never passed to a shell.
            timeout: Seconds before the process is killed, or None to wait.
            env: Extra environment variables for the child process.

        Returns:
            CommandResult with exit status and captured output.

        Raises:
            CommandError: If the program cannot be started.
            CommandTimeoutError: If the timeout expires.
        """
