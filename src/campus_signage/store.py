"""
Event store client.

Thin layer over the ``events`` table: list, insert and delete. Every call
opens its own connection; failures surface immediately as ``StoreError``.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List

from .config import Config
from .db import Database
from .models import Event

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the backing store rejects or fails an operation."""


class EventStore:
    def __init__(self, config: Config):
        self._config = config

    def _database(self) -> Database:
        return Database(self._config)

    def ensure_schema(self) -> None:
        try:
            with self._database() as db:
                db.execute("events/create_table.sql")
        except Exception as e:
            raise StoreError(str(e)) from e

    def list_upcoming(self, today: date, limit: int = 5) -> List[Event]:
        """Events on or after ``today``, ascending by date, at most ``limit``."""
        try:
            with self._database() as db:
                rows = db.fetch_all("events/list_upcoming.sql", (today, limit))
        except Exception as e:
            raise StoreError(str(e)) from e
        return [Event.from_dict(row) for row in rows]

    def list_all(self) -> List[Event]:
        try:
            with self._database() as db:
                rows = db.fetch_all("events/list_all.sql")
        except Exception as e:
            raise StoreError(str(e)) from e
        return [Event.from_dict(row) for row in rows]

    def create(self, fields: Dict[str, Any]) -> List[Event]:
        """
        Inserts one event.

        Args:
            fields: ``event_date`` and ``title`` are required; ``time`` and
                ``venue`` are optional and stored as NULL when empty.

        Returns:
            The inserted record(s) as returned by the store.
        """
        event_date = fields["event_date"]
        if isinstance(event_date, str):
            event_date = date.fromisoformat(event_date)
        params = (
            event_date,
            fields["title"],
            fields.get("time") or None,
            fields.get("venue") or None,
        )
        try:
            with self._database() as db:
                rows = db.fetch_all("events/insert_event.sql", params)
        except Exception as e:
            raise StoreError(str(e)) from e
        created = [Event.from_dict(row) for row in rows]
        for event in created:
            logger.info(f"Created event {event.id}: {event.title}")
        return created

    def delete(self, event_id: int) -> bool:
        """Removes an event. Returns False when no row matched; never raises for that."""
        try:
            with self._database() as db:
                affected = db.execute("events/delete_event.sql", (event_id,))
        except Exception as e:
            raise StoreError(str(e)) from e
        if affected:
            logger.info(f"Deleted event {event_id}")
        else:
            logger.debug(f"Delete for unknown event {event_id} ignored")
        return affected > 0
