"""Domain models for the Taskwarrior API."""

from taskwarrior_api.models.config import (
    AppConfig,
    AuthConfig,
    CORSConfig,
    LoggingConfig,
    ServerConfig,
    TaskwarriorConfig,
)
from taskwarrior_api.models.project import Project
from taskwarrior_api.models.task import Annotation, Task, TaskPriority, TaskStatus
from taskwarrior_api.models.task_change import (
    FieldUpdate,
    TaskCreate,
    TaskModify,
    UpdateAction,
)
from taskwarrior_api.models.task_filter import TaskFilter

__all__ = [
    # Task
    "Annotation",
    "Task",
    "TaskPriority",
    "TaskStatus",
    # Writes
    "FieldUpdate",
    "TaskCreate",
    "TaskModify",
    "UpdateAction",
    # Queries
    "Project",
    "TaskFilter",
    # Config
    "AppConfig",
    "AuthConfig",
    "CORSConfig",
    "LoggingConfig",
    "ServerConfig",
    "TaskwarriorConfig",
]
