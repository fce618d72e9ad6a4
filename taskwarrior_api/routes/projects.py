"""Project routes for the Taskwarrior API.

Projects are derived from pending tasks on every request.
"""

from flask import Blueprint, jsonify

from taskwarrior_api.errors import TaskwarriorError
from taskwarrior_api.routes.auth import require_bearer_token
from taskwarrior_api.routes.responses import (
    error_response,
    get_client,
    taskwarrior_error_response,
)
from taskwarrior_api.validation import sanitize_input

projects_bp = Blueprint("projects", __name__)
projects_bp.before_request(require_bearer_token)


@projects_bp.route("/projects", methods=["GET"])
def list_projects():
    """List projects with their pending task counts.

    Returns:
        JSON object with ``projects`` and ``count``.
    """
    try:
        projects = get_client().get_projects()
    except TaskwarriorError as e:
        return taskwarrior_error_response(e, "failed to retrieve projects", "PROJECT_LIST_FAILED")

    return jsonify(
        {
            "projects": [project.model_dump(mode="json") for project in projects],
            "count": len(projects),
        }
    )


@projects_bp.route("/projects/<name>/tasks", methods=["GET"])
def get_project_tasks(name: str):
    """List the pending tasks of a project."""
    project_name = sanitize_input(name)
    if not project_name:
        return error_response("project name is required", "MISSING_PROJECT_NAME", 400)

    try:
        tasks = get_client().get_project_tasks(project_name)
    except TaskwarriorError as e:
        return taskwarrior_error_response(
            e, "failed to retrieve project tasks", "PROJECT_TASKS_FAILED"
        )

    return jsonify(
        {
            "project": project_name,
            "tasks": [task.to_api() for task in tasks],
            "count": len(tasks),
        }
    )
