from datetime import date

from campus_signage.models import Event

from signage_fakes import fixed


def _seed(store, *days):
    for i, day in enumerate(days, start=1):
        store.create({"event_date": day, "title": f"Event {i}"})


def test_feed_returns_next_five_from_today(client, store):
    _seed(store, date(2025, 9, 4), date(2025, 8, 30), date(2025, 9, 1), date(2025, 8, 31),
          date(2025, 9, 6), date(2025, 9, 3), date(2025, 9, 2), date(2025, 9, 5))

    response = client.get("/api/events")

    assert response.status_code == 200
    dates = [item["event_date"] for item in response.get_json()]
    assert dates == ["2025-08-31", "2025-09-01", "2025-09-02", "2025-09-03", "2025-09-04"]


def test_feed_serializes_optional_fields(client, store):
    store.create({"event_date": date(2025, 9, 1), "title": "Open House", "time": "2:00 PM", "venue": "Main Hall"})
    store.create({"event_date": date(2025, 9, 2), "title": "Seminar"})

    body = client.get("/api/events").get_json()

    assert body[0] == {"id": 1, "event_date": "2025-09-01", "title": "Open House",
                       "time": "2:00 PM", "venue": "Main Hall"}
    assert body[1]["time"] is None
    assert body[1]["venue"] is None


def test_feed_uses_fixed_zone_date(client, store, clock):
    # 2025-08-31 17:30 UTC is already Sep 1 in UTC+8
    clock.now = fixed(2025, 9, 1, 1, 30)
    store.events[1] = Event(id=1, event_date=date(2025, 8, 31), title="Yesterday")
    assert client.get("/api/events").get_json() == []


def test_feed_is_public(client):
    assert client.get("/api/events").status_code == 200


def test_feed_store_failure(client, store):
    store.fail = True
    response = client.get("/api/events")
    assert response.status_code == 500
    assert response.get_json() == {"error": "connection refused"}


def test_cors_headers_on_api(client):
    response = client.get("/api/events", headers={"Origin": "http://display.local"})
    assert response.headers.get("Access-Control-Allow-Origin") == "*"


def test_health(client):
    body = client.get("/api/health").get_json()
    assert body["status"] == "ok"
    assert body["timestamp"].startswith("2025-08-31T23:00:00")
