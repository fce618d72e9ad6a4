"""Pytest configuration and shared fixtures for Taskwarrior API tests."""

import pytest

from taskwarrior_api.services.config_service import reset_config_service
from taskwarrior_api.services.taskwarrior_client import TaskwarriorClient
from tests.fakes import FakeRunner


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the config service singleton between tests."""
    reset_config_service()
    yield
    reset_config_service()


@pytest.fixture
def runner():
    """Create an empty fake runner."""
    return FakeRunner()


@pytest.fixture
def client(runner):
    """Create a client that talks to the fake runner."""
    return TaskwarriorClient(runner, data_location="/data/tasks", timeout=5.0)
