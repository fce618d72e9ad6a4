"""Filter predicates for task queries."""

from dataclasses import dataclass, field


@dataclass
class TaskFilter:
    """Predicates ANDed together by Taskwarrior's query language.

    Each set attribute becomes one filter token (``12``, ``uuid:<uuid>``,
    ``status:pending``, ``project:Home``, ``+tag``).
    """

    status: str | None = None
    project: str | None = None
    tags: list[str] = field(default_factory=list)
    uuid: str | None = None
    task_id: int | None = None  # Working-set ID, only meaningful right after it is reported
