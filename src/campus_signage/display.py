"""Formatting helpers for the signage screen."""
from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional

from .clock import FIXED_TZ, fixed_now
from .models import Event


def format_header_date(now: Optional[datetime] = None) -> str:
    """``"Aug 31, 2025"``"""
    now = (now or fixed_now()).astimezone(FIXED_TZ)
    return f"{now:%b} {now.day}, {now.year}"


def format_header_time(now: Optional[datetime] = None) -> str:
    """``"11:05 PM"`` with no leading zero on the hour."""
    now = (now or fixed_now()).astimezone(FIXED_TZ)
    hour = now.hour % 12 or 12
    return f"{hour}:{now:%M} {'AM' if now.hour < 12 else 'PM'}"


def date_badge(event_date: date) -> Dict[str, str]:
    """Day/month badge shown next to an event, ex: ``{"day": "01", "month": "SEP"}``."""
    return {
        "day": f"{event_date.day:02d}",
        "month": f"{event_date:%b}".upper(),
    }


def event_cards(events: List[Event]) -> List[Dict[str, object]]:
    return [
        {
            "id": event.id,
            "title": event.title,
            "time": event.time,
            "venue": event.venue,
            "badge": date_badge(event.event_date),
        }
        for event in events
    ]
