"""
Backends for the lifecycle manager.

``AdminApiClient`` talks to the admin events endpoint over HTTP with a
session cookie. ``StoreBackend`` runs the same operations in-process on top
of ``EventStore`` for the server-rendered admin page.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from .interfaces.backend import BackendError, EventsBackend
from .models import Event
from .store import EventStore, StoreError

logger = logging.getLogger(__name__)


class AdminApiError(BackendError):
    """Raised when the admin API returns an error or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AdminApiClient(EventsBackend):
    """HTTP client for /api/admin/events."""

    def __init__(self, base_url: str, username: str, password: str,
                 timeout: int = 30, session: Optional[requests.Session] = None):
        """
        Args:
            base_url: Root URL of the signage app (ex: "http://localhost:3000")
            username: Admin username
            password: Admin password
            timeout: Per-request timeout in seconds
            session: Optional pre-built session (tests)
        """
        self.base_url = base_url.rstrip('/')
        self.username = username
        self.password = password
        self.timeout = timeout
        self.session = session or requests.Session()
        self._logged_in = False

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        try:
            response = self.session.request(method, self._url(path), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise AdminApiError(f"{method} {path} failed: {e}") from e
        if not response.ok:
            raise AdminApiError(
                f"{method} {path} returned {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )
        return response

    def login(self) -> None:
        """Exchanges the credentials for a session cookie."""
        self._request("POST", "/api/auth/login",
                      json={"username": self.username, "password": self.password})
        self._logged_in = True
        logger.info(f"Signed in to {self.base_url} as {self.username}")

    def _authed(self, method: str, path: str, **kwargs) -> requests.Response:
        if not self._logged_in:
            self.login()
        try:
            return self._request(method, path, **kwargs)
        except AdminApiError as e:
            if e.status_code != 401:
                raise
        # Session expired: sign in again once
        self._logged_in = False
        self.login()
        return self._request(method, path, **kwargs)

    def list_events(self) -> List[Event]:
        response = self._authed("GET", "/api/admin/events")
        return [Event.from_dict(item) for item in response.json()]

    def create_event(self, payload: Dict[str, Any]) -> List[Event]:
        response = self._authed("POST", "/api/admin/events", json=payload)
        return [Event.from_dict(item) for item in response.json()]

    def delete_event(self, event_id: int) -> None:
        self._authed("DELETE", "/api/admin/events", json={"id": event_id})


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(data, dict):
        return str(data.get("error") or data.get("message") or data)
    return str(data)


class StoreBackend(EventsBackend):
    """In-process backend over the event store."""

    def __init__(self, store: EventStore):
        self.store = store

    def list_events(self) -> List[Event]:
        try:
            return self.store.list_all()
        except StoreError as e:
            raise BackendError(str(e)) from e

    def create_event(self, payload: Dict[str, Any]) -> List[Event]:
        try:
            return self.store.create(payload)
        except StoreError as e:
            raise BackendError(str(e)) from e

    def delete_event(self, event_id: int) -> None:
        try:
            self.store.delete(event_id)
        except StoreError as e:
            raise BackendError(str(e)) from e
