"""Report routes for the Taskwarrior API."""

from flask import Blueprint, jsonify

from taskwarrior_api.errors import TaskwarriorError
from taskwarrior_api.routes.auth import require_bearer_token
from taskwarrior_api.routes.responses import (
    error_response,
    get_client,
    taskwarrior_error_response,
)
from taskwarrior_api.validation import is_valid_report_name

reports_bp = Blueprint("reports", __name__)
reports_bp.before_request(require_bearer_token)


@reports_bp.route("/reports/<name>", methods=["GET"])
def get_report(name: str):
    """Get the tasks selected by a named report (next, active, completed, ...).

    Returns:
        JSON object with ``tasks``, ``count`` and ``report``.
    """
    if not is_valid_report_name(name):
        return error_response("invalid report name", "INVALID_REPORT", 400)

    try:
        tasks = get_client().get_report(name)
    except TaskwarriorError as e:
        return taskwarrior_error_response(e, "failed to retrieve tasks", "REPORT_FAILED")

    return jsonify({"tasks": [task.to_api() for task in tasks], "count": len(tasks), "report": name})
