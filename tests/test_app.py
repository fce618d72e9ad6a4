"""Tests for Flask application factory."""

import tempfile
from pathlib import Path

import pytest

from taskwarrior_api.app import create_app
from taskwarrior_api.services.taskwarrior_client import TaskwarriorClient
from tests.fakes import FakeRunner


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep TW_* variables from the host out of the app config."""
    for name in ("TW_API_TOKENS", "TW_API_CORS_ENABLED", "TW_API_CORS_ORIGINS", "TW_DATA_LOCATION"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(temp_dir):
    """Create a test config file."""
    config_path = temp_dir / "config.yaml"
    config_path.write_text(
        """
taskwarrior:
  data_location: /tmp/tasks

auth:
  tokens:
    - app-token

cors:
  enabled: true
  allowed_origins:
    - http://localhost:3000
"""
    )
    return str(config_path)


@pytest.fixture
def runner():
    return FakeRunner()


class TestCreateApp:
    """Tests for create_app factory."""

    def test_create_app_returns_flask_app(self, config_file, runner):
        """create_app returns a Flask application."""
        app = create_app(config_file, runner=runner)
        assert app is not None
        assert app.name == "taskwarrior_api.app"

    def test_app_has_extensions(self, config_file, runner):
        """App has required extensions."""
        app = create_app(config_file, runner=runner)

        assert "config" in app.extensions
        client = app.extensions["taskwarrior_client"]
        assert isinstance(client, TaskwarriorClient)
        assert client.runner is runner
        assert client.builder.data_location == "/tmp/tasks"

    def test_config_loaded(self, config_file, runner):
        app = create_app(config_file, runner=runner)
        assert app.extensions["config"].auth.tokens == ["app-token"]

    def test_health_route(self, config_file, runner):
        app = create_app(config_file, runner=runner)

        response = app.test_client().get("/api/v1/health")

        assert response.status_code == 200

    def test_tasks_route_uses_runner(self, config_file, runner):
        runner.queue(stdout="[]")
        app = create_app(config_file, runner=runner)

        response = app.test_client().get(
            "/api/v1/tasks", headers={"Authorization": "Bearer app-token"}
        )

        assert response.status_code == 200
        assert runner.calls[0][:2] == ["task", "rc.data.location=/tmp/tasks"]


class TestCORS:
    """Tests for cross-origin headers."""

    def test_allowed_origin(self, config_file, runner):
        app = create_app(config_file, runner=runner)

        response = app.test_client().get(
            "/api/v1/health", headers={"Origin": "http://localhost:3000"}
        )

        assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
        assert response.headers["Vary"] == "Origin"

    def test_other_origin(self, config_file, runner):
        app = create_app(config_file, runner=runner)

        response = app.test_client().get("/api/v1/health", headers={"Origin": "https://evil.example"})

        assert "Access-Control-Allow-Origin" not in response.headers

    def test_preflight_skips_auth(self, config_file, runner):
        app = create_app(config_file, runner=runner)

        response = app.test_client().options(
            "/api/v1/tasks",
            headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
        )

        assert response.status_code == 204
        assert "PATCH" in response.headers["Access-Control-Allow-Methods"]
        assert "Authorization" in response.headers["Access-Control-Allow-Headers"]
        assert runner.calls == []

    def test_preflight_from_other_origin_not_answered(self, config_file, runner):
        app = create_app(config_file, runner=runner)

        response = app.test_client().options(
            "/api/v1/tasks",
            headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "DELETE"},
        )

        assert response.status_code != 204
        assert "Access-Control-Allow-Origin" not in response.headers
        assert "Access-Control-Allow-Methods" not in response.headers
        assert runner.calls == []

    def test_wildcard(self, temp_dir, runner):
        config_path = temp_dir / "config.yaml"
        config_path.write_text("cors:\n  allowed_origins: ['*']\n")

        app = create_app(str(config_path), runner=runner)
        response = app.test_client().get("/api/v1/health", headers={"Origin": "https://any.example"})

        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_disabled(self, temp_dir, runner):
        config_path = temp_dir / "config.yaml"
        config_path.write_text("cors:\n  enabled: false\n")

        app = create_app(str(config_path), runner=runner)
        response = app.test_client().get(
            "/api/v1/health", headers={"Origin": "http://localhost:3000"}
        )

        assert "Access-Control-Allow-Origin" not in response.headers
