"""Argument construction for the Taskwarrior CLI.

Every command is a list of tokens, never a shell string. Each attribute is
exactly one ``key:value`` token, list attributes are one token per element,
and free text goes after a ``--`` terminator so Taskwarrior cannot read it
as attributes, filters or options.
"""

from pathlib import Path

from taskwarrior_api.models.task import TaskStatus
from taskwarrior_api.models.task_change import TaskCreate, TaskModify, UpdateAction
from taskwarrior_api.models.task_filter import TaskFilter
from taskwarrior_api.models.taskwarrior_time import format_command_time
from taskwarrior_api.validation import (
    is_valid_report_name,
    is_valid_tag,
    sanitize_input,
    validate_task_uuid,
)

# Scalar attributes settable on create and modify, in emission order
STRING_ATTRIBUTES = ("project", "priority", "recur")
TIME_ATTRIBUTES = ("due", "wait", "scheduled", "until")


def expand_home(path: str) -> str:
    """Expand a leading ``~`` to the current user's home directory."""
    if path == "~" or path.startswith("~/"):
        return str(Path.home()) + path[1:]
    return path


class CommandBuilder:
    """Builds argument vectors for the ``task`` program.

    Args:
        data_location: Taskwarrior data directory, pinned on every call.
        binary: Executable name or path.
    """

    def __init__(self, data_location: str, binary: str = "task"):
        self.data_location = expand_home(data_location)
        self.binary = binary

    def base(self) -> list[str]:
        """Return the prefix shared by every command."""
        return [self.binary, f"rc.data.location={self.data_location}"]

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def filter_tokens(self, task_filter: TaskFilter | None) -> list[str]:
        """Turn a filter into one predicate token per condition.

        Raises:
            ValueError: If a predicate value is not acceptable.
        """
        if task_filter is None:
            return []

        tokens: list[str] = []
        if task_filter.task_id is not None:
            if not isinstance(task_filter.task_id, int) or task_filter.task_id < 1:
                raise ValueError(f"Invalid task ID: {task_filter.task_id!r}")
            tokens.append(str(task_filter.task_id))
        if task_filter.uuid:
            _require_uuid(task_filter.uuid)
            tokens.append(f"uuid:{task_filter.uuid}")
        if task_filter.status:
            if task_filter.status not in {s.value for s in TaskStatus}:
                raise ValueError(f"Invalid status filter: {task_filter.status!r}")
            tokens.append(f"status:{task_filter.status}")
        if task_filter.project:
            project = sanitize_input(task_filter.project)
            if not project:
                raise ValueError("Invalid project filter")
            tokens.append(f"project:{project}")
        for tag in task_filter.tags:
            if not is_valid_tag(tag):
                raise ValueError(f"Invalid tag filter: {tag!r}")
            tokens.append(f"+{tag}")
        return tokens

    def export(self, task_filter: TaskFilter | None = None, report: str | None = None) -> list[str]:
        """Build ``<filter…> export [report]``."""
        args = [*self.base(), *self.filter_tokens(task_filter), "export"]
        if report:
            if not is_valid_report_name(report):
                raise ValueError(f"Invalid report name: {report!r}")
            args.append(report)
        return args

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add(self, task: TaskCreate) -> list[str]:
        """Build ``add <attributes…> -- <description>``."""
        description = sanitize_input(task.description)
        if not description:
            raise ValueError("description is required")

        args = [*self.base(), "rc.verbose=new-id", "add"]

        if task.project:
            project = sanitize_input(task.project)
            if project:
                args.append(f"project:{project}")
        if task.priority:
            args.append(f"priority:{task.priority.value}")
        if task.recur:
            args.append(f"recur:{task.recur}")

        for name in TIME_ATTRIBUTES:
            value = getattr(task, name)
            if value is not None:
                args.append(f"{name}:{format_command_time(value)}")

        for tag in task.tags:
            args.append(f"+{tag}")
        for dep in task.depends:
            args.append(f"depends:{dep}")

        args.extend(["--", description])
        return args

    def modify(self, uuid: str, changes: TaskModify) -> list[str]:
        """Build ``<uuid> modify <tokens…> [-- <description>]``.

        Unset attributes produce no token, cleared ones produce ``key:``.
        """
        _require_uuid(uuid)
        args = [*self.base(), uuid, "modify"]

        for name in STRING_ATTRIBUTES:
            update = changes.update_for(name)
            if update.action is UpdateAction.CLEAR:
                args.append(f"{name}:")
            elif update.action is UpdateAction.SET:
                value = update.value
                if name == "project":
                    value = sanitize_input(value)
                    if not value:
                        raise ValueError(f"Invalid project name: {update.value!r}")
                args.append(f"{name}:{value}")

        for name in TIME_ATTRIBUTES:
            update = changes.update_for(name)
            if update.action is UpdateAction.CLEAR:
                args.append(f"{name}:")
            elif update.action is UpdateAction.SET:
                args.append(f"{name}:{format_command_time(update.value)}")

        tags = changes.update_for("tags")
        if tags.action is UpdateAction.CLEAR:
            args.append("tags:")
        elif tags.action is UpdateAction.SET:
            args.extend(f"+{tag}" for tag in tags.value)
        args.extend(f"-{tag}" for tag in changes.remove_tags)

        depends = changes.update_for("depends")
        if depends.action is UpdateAction.CLEAR:
            args.append("depends:")
        elif depends.action is UpdateAction.SET:
            args.extend(f"depends:{dep}" for dep in depends.value)

        description = changes.update_for("description")
        if description.action is UpdateAction.SET:
            text = sanitize_input(description.value)
            if not text:
                raise ValueError("description cannot be cleared")
            args.extend(["--", text])

        return args

    def delete(self, uuid: str) -> list[str]:
        """Build ``<uuid> delete`` with the confirmation prompt disabled."""
        _require_uuid(uuid)
        return [*self.base(), "rc.confirmation=off", uuid, "delete"]

    def done(self, uuid: str) -> list[str]:
        """Build ``<uuid> done``."""
        _require_uuid(uuid)
        return [*self.base(), uuid, "done"]

    def start(self, uuid: str) -> list[str]:
        """Build ``<uuid> start``."""
        _require_uuid(uuid)
        return [*self.base(), uuid, "start"]

    def stop(self, uuid: str) -> list[str]:
        """Build ``<uuid> stop``."""
        _require_uuid(uuid)
        return [*self.base(), uuid, "stop"]


def _require_uuid(uuid: str) -> None:
    if not validate_task_uuid(uuid):
        raise ValueError(f"Invalid task UUID: {uuid!r}")
