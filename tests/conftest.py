"""Shared pytest fixtures."""

import pytest

from gateway.api import create_app
from gateway.discovery.service import DiscoveryService
from gateway.logging.context import clear_log_context
from tests.helpers import TEST_API_KEY, FixtureFetcher, load_fixture


ENV_VARS = ("TM_API_KEY", "TM_BASE_URL", "HOST", "PORT", "LOG_LEVEL", "ENVIRONMENT")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every gateway environment variable."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def mock_env_vars(clean_env):
    """Set a valid gateway environment."""
    clean_env.setenv("TM_API_KEY", TEST_API_KEY)
    clean_env.setenv("TM_BASE_URL", "https://discovery.example.com/v2")
    clean_env.setenv("PORT", "9090")
    return clean_env


@pytest.fixture(autouse=True)
def reset_log_context():
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def fetcher():
    """Fixture fetcher serving the recorded Discovery API payloads."""
    return FixtureFetcher(
        {
            "events.json": load_fixture("events_search_response.json"),
            "events/": load_fixture("event_detail_response.json"),
            "venues.json": load_fixture("venue_search_response.json"),
            "suggest": load_fixture("suggest_response.json"),
        }
    )


@pytest.fixture
def service(fetcher):
    return DiscoveryService(fetcher, api_key=TEST_API_KEY)


@pytest.fixture
def app(service):
    flask_app = create_app(service)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
