from datetime import date

from campus_signage.lifecycle import find_expired, is_expired
from campus_signage.models import Event

from signage_fakes import fixed


def _event(event_id, day, time=None):
    return Event(id=event_id, event_date=day, title=f"Event {event_id}", time=time)


def test_timed_event_earlier_today_is_expired():
    event = _event(1, date(2025, 8, 31), "10:00 AM")
    assert is_expired(event, fixed(2025, 8, 31, 23, 0))


def test_timed_event_expires_at_its_start():
    event = _event(1, date(2025, 8, 31), "11:00 PM")
    assert is_expired(event, fixed(2025, 8, 31, 23, 0))
    assert not is_expired(event, fixed(2025, 8, 31, 22, 59))


def test_untimed_event_lasts_until_end_of_day():
    event = _event(1, date(2025, 8, 31))
    assert not is_expired(event, fixed(2025, 8, 31, 23, 59))
    assert is_expired(event, fixed(2025, 9, 1, 0, 0))


def test_unparseable_time_counts_as_untimed():
    event = _event(1, date(2025, 8, 31), "after lunch")
    assert not is_expired(event, fixed(2025, 8, 31, 23, 0))
    assert is_expired(event, fixed(2025, 9, 1, 0, 1))


def test_future_events_are_not_expired():
    assert not is_expired(_event(1, date(2025, 9, 1), "9:00 AM"), fixed(2025, 8, 31, 23, 0))


def test_find_expired_keeps_order():
    events = [
        _event(1, date(2025, 8, 30)),
        _event(2, date(2025, 9, 2)),
        _event(3, date(2025, 8, 31), "10:00 AM"),
    ]
    assert [e.id for e in find_expired(events, fixed(2025, 8, 31, 23, 0))] == [1, 3]
