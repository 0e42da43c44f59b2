"""Event record shared by the store, the API and the lifecycle manager."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Event:
    id: int
    event_date: date
    title: str
    time: Optional[str] = None
    venue: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        """Builds an event from a database row or a JSON payload."""
        raw_date = data["event_date"]
        if isinstance(raw_date, str):
            raw_date = date.fromisoformat(raw_date[:10])
        return cls(
            id=int(data["id"]),
            event_date=raw_date,
            title=data["title"],
            time=data.get("time") or None,
            venue=data.get("venue") or None,
        )
