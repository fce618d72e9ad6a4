"""Command runner backed by :mod:`subprocess`."""

import logging
import os
import shlex
import subprocess

from taskwarrior_api.backends.base import CommandResult, CommandRunner
from taskwarrior_api.errors import CommandError, CommandTimeoutError

logger = logging.getLogger(__name__)


class SubprocessRunner(CommandRunner):
    """Runs commands with ``subprocess.run`` and a token list (no shell)."""

    def run(
        self,
        args: list[str],
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        """Run a command, killing it if the timeout expires.

        Args:
            args: Command arguments, program first.
            timeout: Command timeout in seconds.
            env: Variables added to the inherited environment.

        Returns:
            CommandResult with return code, stdout and stderr.
        """
        logger.debug(f"Running command: {shlex.join(args)}")

        child_env = None
        if env:
            child_env = {**os.environ, **env}

        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=timeout,
                env=child_env,
                stdin=subprocess.DEVNULL,
            )
        except subprocess.TimeoutExpired as e:
            logger.warning(f"Command timed out after {timeout}s: {shlex.join(args)}")
            stderr = e.stderr.decode(errors="replace") if isinstance(e.stderr, bytes) else e.stderr
            raise CommandTimeoutError(args, timeout, stderr or "") from e
        except FileNotFoundError as e:
            raise CommandError(args, None, f"{args[0]} not found") from e
        except OSError as e:
            raise CommandError(args, None, str(e)) from e

        return CommandResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )


# Singleton instance
_runner_instance: SubprocessRunner | None = None


def get_subprocess_runner() -> SubprocessRunner:
    """Get the singleton subprocess runner."""
    global _runner_instance
    if _runner_instance is None:
        _runner_instance = SubprocessRunner()
    return _runner_instance


def reset_subprocess_runner() -> None:
    """Reset the singleton instance (for testing)."""
    global _runner_instance
    _runner_instance = None
