from typing import Any
from unittest.mock import MagicMock

import pytest

from campus_signage.api.app import create_app
from campus_signage.config import Config

from signage_fakes import FakeStore, FrozenClock, fixed


class NetworkAccessError(RuntimeError):
    """Raised when any code attempts to use the network during tests."""


@pytest.fixture(autouse=True)
def _block_network(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Block all outbound network access for every test.

    - Patches common socket entrypoints (connect, connect_ex, create_connection, getaddrinfo)
    - Patches requests' Session.request
    """

    def raise_network(*args: Any, **kwargs: Any) -> Any:  # pragma: no cover - trivial guard
        raise NetworkAccessError("Network access is disabled in tests. Use mocks/stubs.")

    monkeypatch.setattr("socket.socket.connect", raise_network, raising=True)
    monkeypatch.setattr("socket.socket.connect_ex", raise_network, raising=True)
    monkeypatch.setattr("socket.create_connection", raise_network, raising=True)
    monkeypatch.setattr("socket.getaddrinfo", raise_network, raising=True)
    monkeypatch.setattr("requests.sessions.Session.request", raise_network, raising=True)


@pytest.fixture
def clock():
    return FrozenClock(fixed(2025, 8, 31, 23, 0))


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def signage_env(monkeypatch):
    monkeypatch.setenv("ADMIN_USER", "admin")
    monkeypatch.setenv("ADMIN_PASS", "s3cret")
    monkeypatch.setenv("SESSION_SECRET", "test-secret")
    monkeypatch.delenv("NEXTAUTH_SECRET", raising=False)
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
    monkeypatch.delenv("SIGNAGE_BASE_URL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("SECRET_SOURCE", raising=False)


@pytest.fixture
def config(tmp_path, signage_env):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        "signage:\n"
        "  school_name: 'Test University'\n"
        "  feed_limit: 5\n"
        "  slides: ['/static/a.jpg', '/static/b.jpg']\n"
        "  announcement: 'CSC APPLICATION DEADLINE: JULY 31'\n",
        encoding="utf-8",
    )
    return Config(str(cfg_path))


@pytest.fixture
def weather():
    lookup = MagicMock()
    lookup.get_current_weather.return_value = {
        "temperature": 27.6,
        "temperature_display": "28",
        "condition": "clear",
        "description": "Clear Sky",
    }
    return lookup


@pytest.fixture
def app(config, store, weather, clock):
    flask_app = create_app(config, store=store, weather=weather, clock=clock)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "s3cret"})
    assert response.status_code == 200
    return client
