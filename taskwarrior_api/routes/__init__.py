"""Flask routes for the Taskwarrior API."""

from flask import Blueprint, jsonify

from taskwarrior_api.routes.projects import projects_bp
from taskwarrior_api.routes.reports import reports_bp
from taskwarrior_api.routes.tasks import tasks_bp

API_PREFIX = "/api/v1"

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health():
    """Liveness check (no authentication)."""
    return jsonify({"status": "ok"})


__all__ = [
    "API_PREFIX",
    "health_bp",
    "projects_bp",
    "reports_bp",
    "tasks_bp",
]


def register_blueprints(app):
    """Register all blueprints with the Flask app.

    Args:
        app: The Flask application instance.
    """
    app.register_blueprint(health_bp, url_prefix=API_PREFIX)
    app.register_blueprint(tasks_bp, url_prefix=API_PREFIX)
    app.register_blueprint(projects_bp, url_prefix=API_PREFIX)
    app.register_blueprint(reports_bp, url_prefix=API_PREFIX)
