"""Flask application factory for the Taskwarrior API.

This module creates and configures the Flask application, wiring together:

- ConfigService: Configuration loading and environment overrides
- TaskwarriorClient: Adapter around the ``task`` CLI
- Route blueprints with bearer token authentication and CORS

Usage:
    from taskwarrior_api.app import create_app
    app = create_app()
    app.run(port=8080)
"""

import logging

from flask import Flask, request

from taskwarrior_api.backends.base import CommandRunner
from taskwarrior_api.models import AppConfig
from taskwarrior_api.routes import register_blueprints
from taskwarrior_api.services import TaskwarriorClient, get_config_service, load_dotenv

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def create_app(config_path: str = "config.yaml", runner: CommandRunner | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_path: Path to the configuration file.
        runner: Command runner for the Taskwarrior client (defaults to subprocess).

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    # Load configuration
    config_service = get_config_service(config_path)
    config = config_service.get_config()

    app = Flask(__name__)
    app.config["TESTING"] = False

    # Store services on app for access in routes
    app.extensions["config"] = config
    app.extensions["taskwarrior_client"] = TaskwarriorClient.from_config(config.taskwarrior, runner=runner)

    if not config.auth.tokens:
        logger.warning("No API tokens configured; all API requests will be rejected")

    if config.cors.enabled:
        _register_cors(app, config)

    register_blueprints(app)

    logger.info(f"Taskwarrior data location: {config.taskwarrior.data_location}")
    return app


def _register_cors(app: Flask, config: AppConfig) -> None:
    """Answer preflight requests and add CORS headers for allowed origins.

    Args:
        app: Flask application.
        config: Application configuration.
    """
    allowed = config.cors.allowed_origins
    allow_any = "*" in allowed

    def origin_allowed(origin: str | None) -> bool:
        return bool(origin) and (allow_any or origin in allowed)

    @app.before_request
    def cors_preflight():
        if request.method == "OPTIONS" and origin_allowed(request.headers.get("Origin")):
            return app.response_class(status=204)
        return None

    @app.after_request
    def cors_headers(response):
        origin = request.headers.get("Origin")
        if origin_allowed(origin):
            response.headers["Access-Control-Allow-Origin"] = "*" if allow_any else origin
            response.headers["Access-Control-Allow-Methods"] = "GET, POST, PATCH, DELETE, OPTIONS"
            response.headers["Access-Control-Allow-Headers"] = "Authorization, Content-Type"
            response.headers["Access-Control-Max-Age"] = "600"
            if not allow_any:
                response.headers["Vary"] = "Origin"
        return response


def main():
    """Run the Flask application."""
    load_dotenv()
    config = get_config_service().get_config()

    logging.basicConfig(
        level=LOG_LEVELS.get(config.logging.level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = create_app()

    logger.info(f"Starting Taskwarrior API on {config.address}")
    app.run(host=config.server.host, port=config.server.port, debug=config.server.debug, threaded=True)


if __name__ == "__main__":
    main()
