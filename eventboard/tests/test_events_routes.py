import pytest


def create(client, **overrides):
    payload = {"title": "T", "description": "D", "date": "2024-01-01"}
    payload.update(overrides)
    return client.post("/events", json=payload)


def test_create_event_success(client):
    response = create(client)

    assert response.status_code == 201
    data = response.get_json()
    assert data["success"] is True
    assert data["message"] == "Event created successfully"
    assert isinstance(data["event"]["id"], int)
    assert data["event"]["location"] == ""


@pytest.mark.parametrize("missing", ["title", "description", "date"])
def test_create_event_missing_field(client, missing):
    payload = {"title": "T", "description": "D", "date": "2024-01-01"}
    del payload[missing]

    response = client.post("/events", json=payload)

    assert response.status_code == 400
    assert response.get_json()["errors"] == [f"{missing.capitalize()} is required"]


def test_create_event_blank_title(client):
    response = create(client, title="   ")
    assert response.status_code == 400
    assert "Title is required" in response.get_json()["errors"]


def test_create_event_without_body(client):
    response = client.post("/events")
    assert response.status_code == 400
    assert len(response.get_json()["errors"]) == 3


def test_get_event(client):
    event_id = create(client, location="Room 1").get_json()["event"]["id"]

    response = client.get(f"/events/{event_id}")

    assert response.status_code == 200
    assert response.get_json()["event"]["location"] == "Room 1"


def test_get_event_not_found(client):
    response = client.get("/events/999")
    assert response.status_code == 404
    assert response.get_json() == {"success": False, "message": "Event not found"}


def test_list_events(client):
    create(client, title="Later", date="2024-05-01")
    create(client, title="Sooner", date="2024-01-01")

    response = client.get("/events")

    assert response.status_code == 200
    assert [e["title"] for e in response.get_json()["events"]] == ["Sooner", "Later"]


def test_event_lifecycle(client):
    created = create(client)
    assert created.status_code == 201
    event = created.get_json()["event"]

    updated = client.put(f"/events/{event['id']}", json={"location": "Hall"})
    assert updated.status_code == 200
    assert updated.get_json()["event"] == {**event, "location": "Hall"}

    first = client.delete(f"/events/{event['id']}")
    second = client.delete(f"/events/{event['id']}")
    assert first.status_code == 200
    assert second.status_code == 404


def test_update_event_ignores_unknown_fields(client):
    event = create(client).get_json()["event"]

    response = client.put(f"/events/{event['id']}", json={"organizer": "someone"})

    assert response.status_code == 200
    assert response.get_json()["event"] == event


def test_update_event_blank_field(client):
    event = create(client).get_json()["event"]

    response = client.put(f"/events/{event['id']}", json={"title": ""})

    assert response.status_code == 400
    assert response.get_json()["errors"] == ["Title cannot be empty"]


def test_update_event_not_found(client):
    response = client.put("/events/999", json={"title": "New"})
    assert response.status_code == 404


def test_unknown_route_returns_envelope(client):
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert response.get_json()["success"] is False


def test_unexpected_error_returns_500(client, mocker):
    mocker.patch(
        "eventboard.events_service.routes.EventStore.list_all",
        side_effect=RuntimeError("disk I/O error"),
    )

    response = client.get("/events")

    assert response.status_code == 500
    data = response.get_json()
    assert data["success"] is False
    assert data["error"] == "disk I/O error"


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_event_id_too_large_is_not_found(client, method):
    response = getattr(client, method)("/events/99999999999999999999", json={"title": "x"})

    assert response.status_code == 404
    assert response.get_json() == {"success": False, "message": "Event not found"}


def test_method_not_allowed_keeps_allow_header(client):
    event_id = create(client).get_json()["event"]["id"]

    response = client.patch(f"/events/{event_id}", json={"title": "x"})

    assert response.status_code == 405
    assert response.get_json()["success"] is False
    allowed = {m.strip() for m in response.headers["Allow"].split(",")}
    assert {"GET", "PUT", "DELETE"} <= allowed
