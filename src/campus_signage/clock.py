"""
Fixed-timezone clock helpers.

All "now" comparisons use UTC+8 (Chengdu) regardless of the host locale.
"""
from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

FIXED_TZ = timezone(timedelta(hours=8), name="UTC+08:00")

# "2:30 PM", "02:30pm", "12:05 am"
_TIME_12H_PATTERN = re.compile(r"(\d{1,2}):(\d{2})\s*(AM|PM)", re.IGNORECASE)
# Form input without the AM/PM suffix, hour 1-12
_FORM_TIME_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def fixed_now() -> datetime:
    return datetime.now(FIXED_TZ)


def fixed_today(now: Optional[datetime] = None) -> date:
    now = now or fixed_now()
    return now.astimezone(FIXED_TZ).date()


def to_24h(hours: int, am_pm: str) -> int:
    am_pm = am_pm.upper()
    if am_pm == "PM" and hours != 12:
        return hours + 12
    if am_pm == "AM" and hours == 12:
        return 0
    return hours


def parse_12h_time(text: Optional[str]) -> Optional[time]:
    """
    Parses a recorded event time such as ``"2:00 PM"``.

    Returns:
        The time of day, or None when ``text`` is empty or does not match.
    """
    if not text:
        return None
    match = _TIME_12H_PATTERN.search(text)
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if not 1 <= hours <= 12 or minutes > 59:
        return None
    return time(to_24h(hours, match.group(3)), minutes)


def parse_form_time(text: str, am_pm: str) -> Optional[time]:
    """Parses the ``H:MM`` form field together with its AM/PM choice."""
    match = _FORM_TIME_PATTERN.match(text or "")
    if not match or am_pm.upper() not in ("AM", "PM"):
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if not 1 <= hours <= 12 or minutes > 59:
        return None
    return time(to_24h(hours, am_pm), minutes)


def format_12h_time(text: str, am_pm: str) -> str:
    """``("2:00", "pm")`` -> ``"2:00 PM"``"""
    return f"{text.strip()} {am_pm.upper()}"


def combine(day: date, at: time) -> datetime:
    return datetime.combine(day, at, tzinfo=FIXED_TZ)


def end_of_day(day: date) -> datetime:
    return combine(day, time(23, 59, 59, 999000))
