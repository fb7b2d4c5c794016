"""Shared pytest fixtures for hubclient tests.

Fixture Organization:
    - Environment isolation: HUBCLIENT_* variables cleared, config cache reset
    - HTTP fixtures: GitHubClient wired to httpx.MockTransport
    - Sample payloads live in tests/helpers.py
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from hubclient.client import GitHubClient
from hubclient.config import ClientConfig, reset_config

# Add tests directory to sys.path so test modules in subdirectories can
# import helpers.py
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))


# =============================================================================
# Pytest CLI Options
# =============================================================================


def pytest_addoption(parser):
    """Add custom command line options for test selection."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against the live GitHub API",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: test talks to the live GitHub API")


def pytest_collection_modifyitems(session, config, items):
    """Skip integration tests unless --run-integration is provided."""
    if config.getoption("--run-integration"):
        return
    skip_integration = pytest.mark.skip(reason="need --run-integration option to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


# =============================================================================
# Environment Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove HUBCLIENT_* variables and reset the config singleton."""
    for key in list(os.environ):
        if key.upper().startswith("HUBCLIENT_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config() -> ClientConfig:
    """Default config that ignores any .env file on disk."""
    return ClientConfig(_env_file=None)


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest.fixture
def make_github(config) -> Callable[..., GitHubClient]:
    """Factory building a GitHubClient whose requests go to a handler function."""

    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> GitHubClient:
        return GitHubClient(
            config=config,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return _make
