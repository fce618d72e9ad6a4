"""Write-intent models: task creation and partial updates."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field, field_validator

from taskwarrior_api.models.task import TaskPriority
from taskwarrior_api.models.taskwarrior_time import InputTime, parse_input_time
from taskwarrior_api.validation import (
    is_valid_recur,
    is_valid_tag,
    sanitize_input,
    validate_task_uuid,
)


class UpdateAction(str, Enum):
    """What an update does to a single attribute."""

    UNSET = "unset"
    """Leave the attribute unchanged."""

    CLEAR = "clear"
    """Remove the attribute's value."""

    SET = "set"
    """Replace the attribute's value."""


@dataclass(frozen=True)
class FieldUpdate:
    """Three-state update for one attribute."""

    action: UpdateAction
    value: Any = None

    @classmethod
    def unset(cls) -> "FieldUpdate":
        return cls(UpdateAction.UNSET)

    @classmethod
    def clear(cls) -> "FieldUpdate":
        return cls(UpdateAction.CLEAR)

    @classmethod
    def set(cls, value: Any) -> "FieldUpdate":
        return cls(UpdateAction.SET, value)


def _keep_blank(value: Any) -> Any:
    """Keep ``""`` as the clear marker; parse anything else as a timestamp."""
    if isinstance(value, str) and value.strip() == "":
        return ""
    return parse_input_time(value)


ModifyTime = Annotated[datetime | Literal[""] | None, BeforeValidator(_keep_blank)]


def _check_tags(tags: list[str]) -> list[str]:
    for tag in tags:
        if not is_valid_tag(tag):
            raise ValueError(f"Invalid tag: {tag!r}")
    return list(dict.fromkeys(tags))


def _check_depends(depends: list[str]) -> list[str]:
    for uuid in depends:
        if not validate_task_uuid(uuid):
            raise ValueError(f"Invalid dependency UUID: {uuid!r}")
    return depends


def _check_project(project: str) -> str:
    cleaned = sanitize_input(project)
    if project.strip() and not cleaned:
        raise ValueError(f"Invalid project name: {project!r}")
    return cleaned


def _check_recur(recur: str) -> str:
    if not is_valid_recur(recur):
        raise ValueError(f"Invalid recurrence: {recur!r}")
    return recur


class TaskCreate(BaseModel):
    """Data needed to create a task. New tasks are always pending."""

    description: str = Field(..., description="Task description (required)")
    project: str | None = None
    tags: list[str] = Field(default_factory=list)
    priority: TaskPriority | None = None
    due: InputTime = None
    wait: InputTime = None
    scheduled: InputTime = None
    until: InputTime = None
    depends: list[str] = Field(default_factory=list)
    recur: str | None = None

    @field_validator("description")
    @classmethod
    def _sanitize_description(cls, value: str) -> str:
        value = sanitize_input(value)
        if not value:
            raise ValueError("description is required")
        return value

    @field_validator("project")
    @classmethod
    def _sanitize_project(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _check_project(value) or None

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value: Any) -> Any:
        if value == "":
            return None
        return TaskPriority.normalize(value)

    @field_validator("tags")
    @classmethod
    def _validate_tags(cls, value: list[str]) -> list[str]:
        return _check_tags(value)

    @field_validator("depends")
    @classmethod
    def _validate_depends(cls, value: list[str]) -> list[str]:
        return _check_depends(value)

    @field_validator("recur")
    @classmethod
    def _validate_recur(cls, value: str | None) -> str | None:
        if not value:
            return None
        return _check_recur(value)


class TaskModify(BaseModel):
    """A partial update.

    A field that is absent (or null) leaves the attribute unchanged. A field
    given as an empty string, or an empty list for ``tags``/``depends``,
    clears it. Use :meth:`update_for` rather than reading fields directly.
    """

    description: str | None = None
    project: str | None = None
    priority: str | None = None
    due: ModifyTime = None
    wait: ModifyTime = None
    scheduled: ModifyTime = None
    until: ModifyTime = None
    recur: str | None = None
    tags: list[str] | None = Field(
        default=None,
        description="Tags to add; an empty list removes all tags",
    )
    remove_tags: list[str] = Field(
        default_factory=list,
        description="Tags to remove, leaving the others in place",
    )
    depends: list[str] | None = None

    @field_validator("description")
    @classmethod
    def _sanitize_description(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = sanitize_input(value)
        if not value:
            raise ValueError("description cannot be cleared")
        return value

    @field_validator("project")
    @classmethod
    def _sanitize_project(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _check_project(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value: Any) -> Any:
        if value is None or value == "":
            return value
        normalized = TaskPriority.normalize(value)
        if normalized not in {p.value for p in TaskPriority}:
            raise ValueError(f"Invalid priority: {value!r}")
        return normalized

    @field_validator("recur")
    @classmethod
    def _validate_recur(cls, value: str | None) -> str | None:
        if not value:
            return value
        return _check_recur(value)

    @field_validator("tags", "remove_tags")
    @classmethod
    def _validate_tags(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return _check_tags(value)

    @field_validator("depends")
    @classmethod
    def _validate_depends(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return _check_depends(value)

    def update_for(self, name: str) -> FieldUpdate:
        """Return the three-state update for an attribute.

        Args:
            name: Field name (e.g. ``"project"``).

        Returns:
            FieldUpdate with action UNSET, CLEAR or SET.
        """
        if name not in type(self).model_fields:
            raise KeyError(name)
        value = getattr(self, name)
        if name not in self.model_fields_set or value is None:
            return FieldUpdate.unset()
        if value == "" or value == []:
            return FieldUpdate.clear()
        return FieldUpdate.set(value)

    def is_empty(self) -> bool:
        """True when the update would not change anything."""
        fields = [name for name in type(self).model_fields if name != "remove_tags"]
        return not self.remove_tags and all(
            self.update_for(name).action is UpdateAction.UNSET for name in fields
        )
