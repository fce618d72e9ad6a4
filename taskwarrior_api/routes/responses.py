"""Shared helpers for turning client results and errors into responses."""

import logging
from typing import Any

from flask import current_app, jsonify

from taskwarrior_api.errors import (
    CommandError,
    CommandTimeoutError,
    ParseError,
    TaskNotFoundError,
    TaskwarriorError,
    UUIDRecoveryError,
)
from taskwarrior_api.services.taskwarrior_client import TaskwarriorClient
from taskwarrior_api.validation import validate_task_uuid

logger = logging.getLogger(__name__)


def get_client() -> TaskwarriorClient:
    """Get the Taskwarrior client from app extensions (shared instance)."""
    client = current_app.extensions.get("taskwarrior_client")
    if client is None:
        logger.warning("TaskwarriorClient not in extensions, creating default instance")
        client = TaskwarriorClient.from_config(current_app.extensions["config"].taskwarrior)
        current_app.extensions["taskwarrior_client"] = client
    return client


def error_response(message: str, code: str, status: int, detail: Any = None):
    """Build the standard ``{"error", "code"}`` error body."""
    body = {"error": message, "code": code}
    if detail:
        body["detail"] = detail
    return jsonify(body), status


def invalid_uuid_response():
    return error_response("invalid task UUID format", "INVALID_UUID", 400)


def check_uuid(uuid: str):
    """Return an error response for a malformed UUID, or None if it is valid."""
    if not validate_task_uuid(uuid):
        return invalid_uuid_response()
    return None


def taskwarrior_error_response(exc: TaskwarriorError, message: str, code: str):
    """Map a client error onto an HTTP response.

    Args:
        exc: The error raised by the client.
        message: Message for command and parse failures.
        code: Endpoint-specific code for command failures.
    """
    if isinstance(exc, TaskNotFoundError):
        return error_response("task not found", exc.code, 404)
    if isinstance(exc, CommandTimeoutError):
        logger.error(f"{message}: {exc}")
        return error_response(f"{message}: task timed out", exc.code, 504)
    if isinstance(exc, CommandError):
        logger.error(f"{message}: {exc}")
        return error_response(message, code, 500, detail=exc.stderr.strip() or None)
    if isinstance(exc, ParseError):
        logger.error(f"{message}: {exc}")
        return error_response(message, exc.code, 502, detail=str(exc))
    if isinstance(exc, UUIDRecoveryError):
        return error_response(message, exc.code, 202, detail=str(exc))
    logger.error(f"{message}: {exc}")
    return error_response(message, code, 500)
