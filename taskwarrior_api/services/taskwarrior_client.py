"""Taskwarrior client: runs ``task`` commands and interprets their output.

Reads go through ``task export`` and are parsed as a JSON array of tasks.
Writes succeed or fail on exit status alone, with stderr carried in the
raised CommandError.
"""

import json
import logging
import re
import shlex
import threading
from collections import Counter
from datetime import datetime, timezone

from pydantic import ValidationError

from taskwarrior_api.backends.base import CommandResult, CommandRunner
from taskwarrior_api.backends.subprocess_runner import get_subprocess_runner
from taskwarrior_api.errors import (
    CommandError,
    ParseError,
    TaskNotFoundError,
    UUIDRecoveryError,
)
from taskwarrior_api.models.config import TaskwarriorConfig
from taskwarrior_api.models.project import Project
from taskwarrior_api.models.task import Task, TaskStatus
from taskwarrior_api.models.task_change import TaskCreate, TaskModify
from taskwarrior_api.models.task_filter import TaskFilter
from taskwarrior_api.services.command_builder import CommandBuilder, expand_home

logger = logging.getLogger(__name__)

# "Created task 12." / "Created task 12 (recurrence template)."
CREATED_ID_PATTERN = re.compile(r"Created task (\d+)\b")
# Printed instead when the new-uuid verbosity is enabled
CREATED_UUID_PATTERN = re.compile(
    r"Created task ([0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12})"
)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class TaskwarriorClient:
    """Stateless adapter around the Taskwarrior CLI.

    Safe to share between request threads: every call spawns its own
    process. The only lock serializes :meth:`add`, whose UUID recovery
    re-queries the store after the creation command returns.

    Args:
        runner: Command runner used to spawn ``task``.
        data_location: Taskwarrior data directory.
        binary: Taskwarrior executable.
        taskrc_location: Optional taskrc file, exported as ``TASKRC``.
        timeout: Seconds before a command is killed (None waits forever).
    """

    def __init__(
        self,
        runner: CommandRunner,
        data_location: str = "~/.task",
        binary: str = "task",
        taskrc_location: str | None = None,
        timeout: float | None = 30.0,
    ):
        self.runner = runner
        self.builder = CommandBuilder(data_location, binary=binary)
        self.timeout = timeout
        self.env = {"TASKRC": expand_home(taskrc_location)} if taskrc_location else None
        self._add_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: TaskwarriorConfig, runner: CommandRunner | None = None) -> "TaskwarriorClient":
        """Create a client from the ``taskwarrior`` config section."""
        return cls(
            runner=runner or get_subprocess_runner(),
            data_location=config.data_location,
            binary=config.binary,
            taskrc_location=config.taskrc_location,
            timeout=config.command_timeout,
        )

    def _run(self, args: list[str]) -> CommandResult:
        """Run a command, raising CommandError on a non-zero exit."""
        result = self.runner.run(args, timeout=self.timeout, env=self.env)
        if not result.ok:
            logger.warning(
                f"task exited with status {result.returncode}: {shlex.join(args[1:])}: "
                f"{result.stderr.strip()}"
            )
            raise CommandError(args, result.returncode, result.stderr)
        return result

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def export(self, task_filter: TaskFilter | None = None, report: str | None = None) -> list[Task]:
        """Export tasks matching a filter, optionally through a named report.

        Args:
            task_filter: Predicates to apply.
            report: Taskwarrior report whose filter and sort are applied.

        Returns:
            Parsed tasks, in the order Taskwarrior returned them.

        Raises:
            CommandError: If ``task export`` fails.
            ParseError: If the output is not a JSON array of tasks.
        """
        result = self._run(self.builder.export(task_filter, report))
        return self.parse_export(result.stdout)

    @staticmethod
    def parse_export(output: str) -> list[Task]:
        """Parse ``task export`` output into tasks.

        Empty output and ``[]`` are an empty result, not an error.
        """
        text = output.strip()
        if text == "" or text == "[]":
            return []

        try:
            records = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse JSON output: {output}")
            raise ParseError(f"Failed to parse task export: {e}", output) from e

        if not isinstance(records, list):
            raise ParseError("Expected a JSON array from task export", output)

        try:
            return [Task.model_validate(record) for record in records]
        except ValidationError as e:
            logger.warning(f"Unexpected task record in export: {e}")
            raise ParseError(f"Unexpected task record in export: {e}", output) from e

    def get_by_uuid(self, uuid: str) -> Task:
        """Fetch exactly one task by UUID.

        Raises:
            TaskNotFoundError: If no task has this UUID.
            ParseError: If the export does not contain exactly that task.
        """
        result = self._run(self.builder.export(TaskFilter(uuid=uuid)))
        tasks = self.parse_export(result.stdout)
        if not tasks:
            raise TaskNotFoundError(uuid)
        if len(tasks) > 1:
            raise ParseError(f"Expected one task for {uuid}, got {len(tasks)}", result.stdout)
        task = tasks[0]
        if task.uuid.lower() != uuid.lower():
            raise ParseError(f"Export for {uuid} returned task {task.uuid}", result.stdout)
        return task

    def get_projects(self) -> list[Project]:
        """Count pending tasks per project, ignoring tasks without one."""
        tasks = self.export(TaskFilter(status=TaskStatus.PENDING.value))
        counts = Counter(task.project for task in tasks if task.project)
        return [Project(name=name, count=count) for name, count in sorted(counts.items())]

    def get_project_tasks(self, name: str) -> list[Task]:
        """Return the pending tasks of one project."""
        return self.export(TaskFilter(status=TaskStatus.PENDING.value, project=name))

    def get_report(self, name: str) -> list[Task]:
        """Return the tasks selected by a named Taskwarrior report."""
        return self.export(report=name)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add(self, task: TaskCreate) -> str:
        """Create a task and return its UUID.

        Raises:
            CommandError: If ``task add`` fails.
            UUIDRecoveryError: If the task was created but its UUID could not
                be determined.
        """
        args = self.builder.add(task)
        with self._add_lock:
            result = self._run(args)
            uuid = self.recover_created_uuid(result.stdout)
        logger.info(f"Created task {uuid}")
        return uuid

    def recover_created_uuid(self, output: str) -> str:
        """Work out the UUID of the task that ``task add`` just created.

        Taskwarrior normally confirms a creation with ``Created task N.``,
        where N is a working-set ID rather than the UUID. The UUID is then
        recovered by re-querying: first the task whose ID is N (whatever its
        status, so waiting tasks and recurrence templates are found), failing
        that the most recently entered pending task.

        This is best effort. A task created by another process between the
        add and the re-query can be picked up instead; only creations made
        through this client are serialized.

        Args:
            output: Stdout of the ``task add`` command.

        Returns:
            The UUID of the created task.

        Raises:
            UUIDRecoveryError: If no confirmation line is present or no
                candidate task is found.
        """
        direct = CREATED_UUID_PATTERN.search(output)
        if direct:
            return direct.group(1)

        match = CREATED_ID_PATTERN.search(output)
        if match is None:
            raise UUIDRecoveryError("No creation confirmation in task add output", output)
        task_id = int(match.group(1))

        for candidate in self.export(TaskFilter(task_id=task_id)):
            if candidate.id == task_id:
                return candidate.uuid

        candidates = self.export(TaskFilter(status=TaskStatus.PENDING.value))
        if not candidates:
            raise UUIDRecoveryError(
                f"Task {task_id} was created but no pending task was found", output
            )

        newest = max(candidates, key=lambda t: (t.entry or _EPOCH, t.id or 0))
        logger.warning(
            f"No task with id {task_id}; using most recent pending task {newest.uuid}"
        )
        return newest.uuid

    def modify(self, uuid: str, changes: TaskModify) -> None:
        """Apply a partial update to a task."""
        self._run(self.builder.modify(uuid, changes))

    def delete(self, uuid: str) -> None:
        """Delete a task."""
        self._run(self.builder.delete(uuid))

    def done(self, uuid: str) -> None:
        """Mark a task as completed."""
        self._run(self.builder.done(uuid))

    def start(self, uuid: str) -> None:
        """Start a task's timer."""
        self._run(self.builder.start(uuid))

    def stop(self, uuid: str) -> None:
        """Stop a task's timer."""
        self._run(self.builder.stop(uuid))
