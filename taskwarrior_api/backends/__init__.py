"""Command runner implementations."""

from taskwarrior_api.backends.base import CommandResult, CommandRunner
from taskwarrior_api.backends.subprocess_runner import (
    SubprocessRunner,
    get_subprocess_runner,
    reset_subprocess_runner,
)

__all__ = [
    "CommandResult",
    "CommandRunner",
    "SubprocessRunner",
    "get_subprocess_runner",
    "reset_subprocess_runner",
]
