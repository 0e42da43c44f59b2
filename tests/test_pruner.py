import time
from datetime import date
from unittest.mock import MagicMock

from campus_signage.lifecycle import EventLifecycleManager
from campus_signage.models import Event
from campus_signage.pruner import PruneLoop

from signage_fakes import FakeBackend, FrozenClock, fixed


def _loop(events, interval=60):
    backend = FakeBackend(events)
    manager = EventLifecycleManager(backend, clock=FrozenClock(fixed(2025, 8, 31, 23, 0)))
    return PruneLoop(manager, interval), backend


def test_run_once_resyncs_and_prunes():
    loop, backend = _loop([
        Event(id=1, event_date=date(2025, 8, 30), title="Old"),
        Event(id=2, event_date=date(2025, 9, 1), title="Next"),
    ])

    assert loop.run_once() == 1
    assert backend.delete_calls == [1]
    assert [e.id for e in loop.manager.events] == [2]
    assert loop.passes == 1


def test_run_once_picks_up_events_created_elsewhere():
    loop, backend = _loop([Event(id=1, event_date=date(2025, 9, 1), title="Next")])
    loop.run_once()
    backend.store.create({"event_date": "2025-08-01", "title": "Stale"})

    assert loop.run_once() == 1
    assert [e.title for e in loop.manager.events] == ["Next"]


def test_run_once_survives_unexpected_errors():
    manager = MagicMock()
    manager.fetch_events.side_effect = RuntimeError("boom")
    loop = PruneLoop(manager, interval=60)
    assert loop.run_once() == 0
    assert loop.passes == 1


def test_background_loop_runs_until_stopped():
    loop, backend = _loop([Event(id=1, event_date=date(2025, 9, 1), title="Next")], interval=0.01)
    loop.start()
    try:
        for _ in range(500):
            if loop.passes >= 2:
                break
            time.sleep(0.01)
    finally:
        loop.stop(timeout=2)

    assert loop.passes >= 2
    assert loop.stopped
    assert backend.list_calls >= 3
