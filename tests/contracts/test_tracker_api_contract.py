"""Tracker API Contract Tests

Exercises the /api/tracker routes through FastAPI's TestClient against the
in-memory test store.
"""

import pytest
from fastapi.testclient import TestClient

from daytally.web.server import create_app

MONDAY = "2024-03-04"


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c


def _add_work(client):
    response = client.post(
        "/api/tracker/schedules",
        json={
            "tag_id": "work",
            "start_time": "09:00",
            "end_time": "17:00",
            "weekdays": ["MON", "TUE", "WED", "THU", "FRI"],
            "starts_on": "2024-01-01",
        },
    )
    assert response.status_code == 201
    return response.json()["schedule"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


def test_empty_day(client):
    response = client.get(f"/api/tracker/days/{MONDAY}")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["slots"] == []


def test_bad_date_is_400(client):
    response = client.get("/api/tracker/days/2024-02-30")
    assert response.status_code == 400
    assert "Invalid date format" in response.json()["detail"]


def test_scheduled_day_with_overrides(client):
    _add_work(client)

    response = client.put(f"/api/tracker/days/{MONDAY}/slots/18", json={"tag_id": None})
    assert response.status_code == 200
    assert response.json()["slots"] == [{"slot": 18, "override": "cleared", "tag_id": None}]

    response = client.put(f"/api/tracker/days/{MONDAY}/slots", json={"slots": [2, 3], "tag_id": "exercise"})
    assert response.status_code == 200

    body = client.get(f"/api/tracker/days/{MONDAY}").json()
    tags = {s["slot"]: s["tag_id"] for s in body["slots"]}
    assert 18 not in tags
    assert tags[2] == "exercise"
    assert tags[19] == "work"
    assert body["count"] == 17


def test_slot_out_of_range_is_400(client):
    response = client.put(f"/api/tracker/days/{MONDAY}/slots/99", json={"tag_id": "work"})
    assert response.status_code == 400


def test_day_stats(client):
    _add_work(client)
    body = client.get(f"/api/tracker/days/{MONDAY}/stats").json()
    assert body["stats"][0]["tag_id"] == "work"
    assert body["logged_minutes"] == 480


def test_schedule_update_and_delete(client):
    schedule = _add_work(client)

    response = client.put(f"/api/tracker/schedules/{schedule['id']}", json={"end_time": "18:00"})
    assert response.status_code == 200
    assert response.json()["schedule"]["end_minute"] == 1080

    response = client.delete(f"/api/tracker/schedules/{schedule['id']}")
    assert response.status_code == 200
    assert client.get("/api/tracker/schedules").json()["total"] == 0


def test_unknown_schedule_is_404(client):
    response = client.delete("/api/tracker/schedules/schedule-missing")
    assert response.status_code == 404


def test_tag_lifecycle(client):
    response = client.post("/api/tracker/tags", json={"name": "Reading", "id": "reading", "color": "#112233"})
    assert response.status_code == 201

    response = client.put("/api/tracker/tags/reading", json={"name": "Books"})
    assert response.json()["tag"]["name"] == "Books"

    response = client.delete("/api/tracker/tags/reading")
    assert response.status_code == 200
    assert response.json()["deleted"]["id"] == "reading"

    assert client.delete("/api/tracker/tags/reading").status_code == 404


def test_duplicate_tag_is_400(client):
    response = client.post("/api/tracker/tags", json={"name": "Work", "id": "work"})
    assert response.status_code == 400


def test_settings(client):
    assert client.get("/api/tracker/settings").json()["settings"]["interval"] == 30

    response = client.put("/api/tracker/settings", json={"interval": 15})
    assert response.status_code == 200
    assert response.json()["settings"]["total_slots"] == 96

    assert client.put("/api/tracker/settings", json={"interval": 45}).status_code == 400


def test_blank_tag_id_is_400(client):
    response = client.put(f"/api/tracker/days/{MONDAY}/slots/3", json={"tag_id": ""})
    assert response.status_code == 400
    assert "Tag id cannot be empty" in response.json()["detail"]

    response = client.put(f"/api/tracker/days/{MONDAY}/slots", json={"slots": [3], "tag_id": " "})
    assert response.status_code == 400
    assert client.get(f"/api/tracker/days/{MONDAY}").json()["slots"] == []


def test_schedule_off_quarter_hour_is_400(client):
    response = client.post(
        "/api/tracker/schedules",
        json={"tag_id": "work", "start_time": "09:10", "end_time": "17:00"},
    )
    assert response.status_code == 400
