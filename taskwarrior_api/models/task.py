"""Task model matching Taskwarrior's JSON export format."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskwarrior_api.models.taskwarrior_time import TaskwarriorTime


class TaskStatus(str, Enum):
    """Task status as reported by Taskwarrior."""

    PENDING = "pending"
    COMPLETED = "completed"
    DELETED = "deleted"
    WAITING = "waiting"
    RECURRING = "recurring"


class TaskPriority(str, Enum):
    """Taskwarrior's built-in priority levels."""

    HIGH = "H"
    MEDIUM = "M"
    LOW = "L"

    @classmethod
    def normalize(cls, value: Any) -> Any:
        """Map ``high``/``medium``/``low`` (any case) onto ``H``/``M``/``L``.

        Other values are returned unchanged for the caller's validation.
        """
        if isinstance(value, str):
            aliases = {"high": "H", "medium": "M", "low": "L"}
            stripped = value.strip()
            return aliases.get(stripped.lower(), stripped.upper())
        return value


class Annotation(BaseModel):
    """A timestamped note attached to a task."""

    entry: TaskwarriorTime = None
    description: str = ""


class Task(BaseModel):
    """A Taskwarrior task.

    Instances are rebuilt from ``task export`` on every request; nothing is
    cached. Only the UUID is a stable handle. The integer ``id`` belongs to
    Taskwarrior's working set and is reused once a task leaves it.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | None = Field(
        default=None,
        description="Working-set ID (None once the task is completed or deleted)",
    )
    uuid: str = Field(..., description="Stable task identifier")
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING

    entry: TaskwarriorTime = None
    modified: TaskwarriorTime = None
    start: TaskwarriorTime = None
    end: TaskwarriorTime = None
    due: TaskwarriorTime = None
    until: TaskwarriorTime = None
    wait: TaskwarriorTime = None
    scheduled: TaskwarriorTime = None

    project: str | None = None
    tags: list[str] = Field(default_factory=list)
    priority: TaskPriority | None = None
    depends: list[str] = Field(default_factory=list)
    annotations: list[Annotation] = Field(default_factory=list)
    urgency: float = Field(default=0.0, description="Computed by Taskwarrior")

    # Recurrence bookkeeping, passed through untouched
    mask: str | None = None
    imask: int | None = None
    parent: str | None = None
    recur: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _zero_id_is_absent(cls, value: Any) -> Any:
        # Taskwarrior exports id 0 for tasks outside the working set
        if value == 0:
            return None
        return value

    @field_validator("project", "mask", "parent", "recur", mode="before")
    @classmethod
    def _empty_string_is_absent(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        return TaskPriority.normalize(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _unique_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return list(dict.fromkeys(value))
        return value

    @field_validator("depends", mode="before")
    @classmethod
    def _split_depends(cls, value: Any) -> Any:
        # Taskwarrior 2.x exports depends as a comma-separated string
        if value is None or value == "":
            return []
        if isinstance(value, str):
            return [uuid.strip() for uuid in value.split(",") if uuid.strip()]
        return value

    @field_validator("annotations", mode="before")
    @classmethod
    def _none_annotations(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_api(self) -> dict[str, Any]:
        """Serialize for an API response, omitting absent attributes."""
        data = self.model_dump(mode="json", exclude_none=True)
        for key in ("tags", "depends", "annotations"):
            if not data.get(key):
                data.pop(key, None)
        return data
