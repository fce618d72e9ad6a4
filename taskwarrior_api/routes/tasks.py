"""Task routes for the Taskwarrior API.

Provides REST API endpoints for task management:
- List and fetch tasks
- Create, update and delete tasks
- Complete tasks and start/stop their timers
"""

import logging

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from taskwarrior_api.errors import TaskwarriorError, UUIDRecoveryError
from taskwarrior_api.models.task_change import TaskCreate, TaskModify
from taskwarrior_api.models.task_filter import TaskFilter
from taskwarrior_api.routes.auth import require_bearer_token
from taskwarrior_api.routes.responses import (
    check_uuid,
    error_response,
    get_client,
    taskwarrior_error_response,
)

logger = logging.getLogger(__name__)

tasks_bp = Blueprint("tasks", __name__)
tasks_bp.before_request(require_bearer_token)


def _invalid_request(detail=None):
    return error_response("invalid request body", "INVALID_REQUEST", 400, detail=detail)


def _validation_detail(exc: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
        for err in exc.errors()
    ]


@tasks_bp.route("/tasks", methods=["GET"])
def list_tasks():
    """List tasks with optional filters.

    Query params:
        status: Status filter (default: pending, empty for any)
        project: Project filter
        tags: Tag filter, repeatable

    Returns:
        JSON object with ``tasks`` and ``count``.
    """
    task_filter = TaskFilter(
        status=request.args.get("status", "pending") or None,
        project=request.args.get("project") or None,
        tags=request.args.getlist("tags"),
    )

    client = get_client()
    try:
        tasks = client.export(task_filter)
    except ValueError as e:
        return error_response(str(e), "INVALID_FILTER", 400)
    except TaskwarriorError as e:
        return taskwarrior_error_response(e, "failed to retrieve tasks", "TASK_EXPORT_FAILED")

    return jsonify({"tasks": [task.to_api() for task in tasks], "count": len(tasks)})


@tasks_bp.route("/tasks/<uuid>", methods=["GET"])
def get_task(uuid: str):
    """Get a task by UUID."""
    if (invalid := check_uuid(uuid)) is not None:
        return invalid

    try:
        task = get_client().get_by_uuid(uuid)
    except TaskwarriorError as e:
        return taskwarrior_error_response(e, "failed to retrieve task", "TASK_EXPORT_FAILED")

    return jsonify(task.to_api())


@tasks_bp.route("/tasks", methods=["POST"])
def create_task():
    """Create a task.

    Request body:
        TaskCreate fields, ``description`` required.

    Returns:
        201 with the created task, or 202 when the task was created but its
        UUID could not be recovered.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _invalid_request()

    try:
        task_create = TaskCreate.model_validate(data)
    except ValidationError as e:
        return _invalid_request(_validation_detail(e))

    client = get_client()
    try:
        uuid = client.add(task_create)
    except UUIDRecoveryError as e:
        logger.warning(f"Task created without a recoverable UUID: {e}")
        return jsonify(
            {
                "uuid": None,
                "message": "task created but its UUID could not be determined",
                "code": e.code,
            }
        ), 202
    except TaskwarriorError as e:
        return taskwarrior_error_response(e, "failed to create task", "TASK_CREATE_FAILED")

    try:
        task = client.get_by_uuid(uuid)
    except TaskwarriorError as e:
        # Task was created but we can't retrieve it
        logger.warning(f"Created task {uuid} could not be fetched: {e}")
        return jsonify({"uuid": uuid, "message": "task created successfully"}), 201

    return jsonify(task.to_api()), 201


@tasks_bp.route("/tasks/<uuid>", methods=["PATCH"])
def update_task(uuid: str):
    """Update a task.

    Absent fields are left unchanged; empty strings clear an attribute.
    """
    if (invalid := check_uuid(uuid)) is not None:
        return invalid

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _invalid_request()

    try:
        changes = TaskModify.model_validate(data)
    except ValidationError as e:
        return _invalid_request(_validation_detail(e))

    if changes.is_empty():
        return _invalid_request(["no changes requested"])

    client = get_client()
    try:
        client.modify(uuid, changes)
    except TaskwarriorError as e:
        return taskwarrior_error_response(e, "failed to update task", "TASK_UPDATE_FAILED")

    try:
        task = client.get_by_uuid(uuid)
    except TaskwarriorError as e:
        logger.warning(f"Updated task {uuid} could not be fetched: {e}")
        return jsonify({"message": "task updated successfully"})

    return jsonify(task.to_api())


def _transition(uuid: str, operation: str, message: str, failure: str, code: str):
    if (invalid := check_uuid(uuid)) is not None:
        return invalid

    client = get_client()
    try:
        getattr(client, operation)(uuid)
    except TaskwarriorError as e:
        return taskwarrior_error_response(e, failure, code)

    return jsonify({"message": message})


@tasks_bp.route("/tasks/<uuid>", methods=["DELETE"])
def delete_task(uuid: str):
    """Delete a task."""
    return _transition(
        uuid, "delete", "task deleted successfully", "failed to delete task", "TASK_DELETE_FAILED"
    )


@tasks_bp.route("/tasks/<uuid>/done", methods=["POST"])
def done_task(uuid: str):
    """Mark a task as completed."""
    return _transition(
        uuid, "done", "task marked as done", "failed to mark task as done", "TASK_DONE_FAILED"
    )


@tasks_bp.route("/tasks/<uuid>/start", methods=["POST"])
def start_task(uuid: str):
    """Start a task's timer."""
    return _transition(uuid, "start", "task started", "failed to start task", "TASK_START_FAILED")


@tasks_bp.route("/tasks/<uuid>/stop", methods=["POST"])
def stop_task(uuid: str):
    """Stop a task's timer."""
    return _transition(uuid, "stop", "task stopped", "failed to stop task", "TASK_STOP_FAILED")
