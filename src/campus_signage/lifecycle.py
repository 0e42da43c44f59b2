"""
Event lifecycle management for the admin view.

- Submission validation against fixed-timezone "now"
- Expiry detection and best-effort pruning of past events
- An explicit state container for the admin view, with request tokens so a
  slow fetch can never overwrite the result of a newer one
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from .clock import (
    FIXED_TZ,
    combine,
    end_of_day,
    fixed_now,
    fixed_today,
    format_12h_time,
    parse_12h_time,
    parse_form_time,
)
from .interfaces.backend import BackendError, EventsBackend
from .models import Event

logger = logging.getLogger(__name__)

FETCH_ERROR = "Failed to load events. Please try again."
CREATE_ERROR = "Failed to create event. Please try again."
DELETE_ERROR = "Failed to delete event. Please try again."
PAST_DATE_ERROR = "Cannot create events for past dates"
PAST_TIME_ERROR = "Cannot create events for past times"


class ValidationError(ValueError):
    """A submission was rejected before reaching the backend."""


class InvalidTransition(RuntimeError):
    pass


@dataclass
class EventForm:
    """Values of the create-event form. ``time`` is ``H:MM`` on a 12-hour clock."""
    event_date: str = ""
    title: str = ""
    time: str = ""
    am_pm: str = "AM"
    venue: str = ""


def _as_fixed(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=FIXED_TZ)
    return now.astimezone(FIXED_TZ)


def validate_submission(form: EventForm, now: datetime) -> Dict[str, Any]:
    """
    Validates a create-event submission.

    Args:
        form: Submitted form values
        now: Current instant (interpreted in the fixed timezone)

    Returns:
        Payload for the create operation, with the time formatted as
        ``"H:MM AM"`` or None

    Raises:
        ValidationError: with the message to show next to the form
    """
    now = _as_fixed(now)
    if not (form.event_date or "").strip():
        raise ValidationError("Date is required")
    if not (form.title or "").strip():
        raise ValidationError("Title is required")
    try:
        selected = date.fromisoformat(form.event_date.strip())
    except ValueError:
        raise ValidationError("Invalid date")

    today = fixed_today(now)
    if selected < today:
        raise ValidationError(PAST_DATE_ERROR)

    formatted_time = None
    if (form.time or "").strip():
        at = parse_form_time(form.time, form.am_pm or "AM")
        if at is None:
            raise ValidationError("Invalid time")
        if selected == today and combine(selected, at) <= now:
            raise ValidationError(PAST_TIME_ERROR)
        formatted_time = format_12h_time(form.time, form.am_pm or "AM")

    return {
        "event_date": selected.isoformat(),
        "title": form.title.strip(),
        "time": formatted_time,
        "venue": (form.venue or "").strip() or None,
    }


def is_expired(event: Event, now: datetime) -> bool:
    """
    True when the event no longer lies in the future.

    A timed event expires once its start is not after ``now``. An event
    without a usable time expires after the end of its calendar day.
    """
    now = _as_fixed(now)
    at = parse_12h_time(event.time)
    if at is None:
        return now > end_of_day(event.event_date)
    return not combine(event.event_date, at) > now


def find_expired(events: Iterable[Event], now: datetime) -> List[Event]:
    return [event for event in events if is_expired(event, now)]


class ViewStatus(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    PRUNING = "pruning"
    SUBMITTING = "submitting"
    DELETING = "deleting"
    ERROR = "error"


_TRANSITIONS = {
    ViewStatus.LOADING: {ViewStatus.LOADING, ViewStatus.LOADED, ViewStatus.ERROR},
    ViewStatus.LOADED: {ViewStatus.LOADING, ViewStatus.PRUNING, ViewStatus.SUBMITTING, ViewStatus.DELETING},
    ViewStatus.PRUNING: {ViewStatus.LOADING, ViewStatus.LOADED, ViewStatus.ERROR},
    ViewStatus.SUBMITTING: {ViewStatus.LOADING, ViewStatus.LOADED, ViewStatus.ERROR},
    ViewStatus.DELETING: {ViewStatus.LOADING, ViewStatus.LOADED, ViewStatus.ERROR},
    ViewStatus.ERROR: {ViewStatus.LOADING, ViewStatus.PRUNING, ViewStatus.SUBMITTING, ViewStatus.DELETING},
}


@dataclass
class AdminView:
    """State of one admin view. Mutated only through the transition methods."""
    events: List[Event] = field(default_factory=list)
    status: ViewStatus = ViewStatus.LOADING
    error: str = ""
    form: EventForm = field(default_factory=EventForm)
    issued_token: int = 0

    def transition(self, target: ViewStatus) -> None:
        if target not in _TRANSITIONS[self.status]:
            raise InvalidTransition(f"{self.status.value} -> {target.value}")
        self.status = target

    def begin_fetch(self) -> int:
        self.transition(ViewStatus.LOADING)
        self.error = ""
        self.issued_token += 1
        return self.issued_token

    def is_current(self, token: int) -> bool:
        return token == self.issued_token

    def apply_events(self, token: int, events: Iterable[Event]) -> bool:
        """Applies a fetch result unless a newer fetch was issued meanwhile."""
        if not self.is_current(token):
            return False
        self.events = list(events)
        self.transition(ViewStatus.LOADED)
        return True

    def fail(self, message: str, token: Optional[int] = None) -> bool:
        if token is not None and not self.is_current(token):
            return False
        self.error = message
        self.transition(ViewStatus.ERROR)
        return True

    def reject(self, message: str) -> None:
        # Validation failures keep the status and the form as they are
        self.error = message


class EventLifecycleManager:
    """Runs the admin view's policy against an events backend."""

    def __init__(self, backend: EventsBackend, clock: Callable[[], datetime] = fixed_now):
        self.backend = backend
        self.clock = clock
        self.view = AdminView()
        self._lock = threading.Lock()

    @property
    def events(self) -> List[Event]:
        return list(self.view.events)

    def fetch_events(self, prune: bool = True) -> bool:
        """
        Fetches the full list and, when ``prune`` is set, prunes expired events.

        Returns:
            True if the result was applied to the view
        """
        with self._lock:
            token = self.view.begin_fetch()
        try:
            events = self.backend.list_events()
        except BackendError as e:
            logger.error(f"Error fetching events: {e}")
            with self._lock:
                self.view.fail(FETCH_ERROR, token)
            return False

        with self._lock:
            applied = self.view.apply_events(token, events)
        if not applied:
            logger.debug(f"Discarding stale fetch result (token {token})")
            return False
        logger.debug(f"Events fetched: {len(events)}")
        if prune and events:
            self.prune_expired()
        return True

    def prune_expired(self) -> int:
        """
        Deletes every expired event currently held by the view.

        Each deletion is independent; a failed one is logged and the others
        still run. The list is re-fetched once if anything was attempted.

        Returns:
            Number of deletions attempted
        """
        with self._lock:
            if self.view.status not in (ViewStatus.LOADED, ViewStatus.ERROR):
                logger.debug(f"Skipping prune pass while {self.view.status.value}")
                return 0
            expired = find_expired(self.view.events, self.clock())
            if not expired:
                return 0
            self.view.transition(ViewStatus.PRUNING)

        for event in expired:
            try:
                self.backend.delete_event(event.id)
                logger.info(f"Auto-deleted expired event: {event.title}")
            except BackendError as e:
                logger.error(f"Failed to auto-delete event {event.id}: {e}")

        self.fetch_events(prune=False)
        return len(expired)

    def submit(self, form: EventForm) -> bool:
        """
        Validates and creates an event.

        On success the form is cleared and the list re-fetched. On failure
        the form is kept and ``view.error`` holds the message.
        """
        with self._lock:
            self.view.form = form
            try:
                payload = validate_submission(form, self.clock())
            except ValidationError as e:
                self.view.reject(str(e))
                return False
            self.view.transition(ViewStatus.SUBMITTING)
            self.view.error = ""

        try:
            self.backend.create_event(payload)
        except BackendError as e:
            logger.error(f"Error adding event: {e}")
            with self._lock:
                self.view.fail(CREATE_ERROR)
            return False

        with self._lock:
            self.view.form = EventForm()
        self.fetch_events()
        return True

    def delete(self, event_id: int) -> bool:
        with self._lock:
            self.view.transition(ViewStatus.DELETING)
            self.view.error = ""
        try:
            self.backend.delete_event(event_id)
        except BackendError as e:
            logger.error(f"Error deleting event {event_id}: {e}")
            with self._lock:
                self.view.fail(DELETE_ERROR)
            return False
        self.fetch_events()
        return True
