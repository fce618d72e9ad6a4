"""Project aggregate derived from pending tasks."""

from pydantic import BaseModel, Field


class Project(BaseModel):
    """A project name with the number of pending tasks that reference it.

    Projects are not stored anywhere; they are recomputed from the live task
    set on every request.
    """

    name: str = Field(..., description="Project name as stored on tasks")
    count: int = Field(default=0, ge=0, description="Pending tasks in this project")
