"""Event API tests."""

from src.models.event import Event


def image(content: bytes = b"event image"):
    return ("event.jpg", content, "image/jpeg")


def create_event(client, auth_headers, name="Launch Night", files=None):
    return client.post(
        "/events",
        headers=auth_headers,
        data={
            "name": name,
            "description": "Opening of the new site office",
            "location": "Main hall",
            "date": "2026-11-20",
            "time": "7:00 PM",
        },
        files=files or {},
    )


def test_create_and_list_events(client, auth_headers):
    """Test creating an event and reading it back with date and time."""
    response = create_event(client, auth_headers, files={"image2": image()})
    assert response.status_code == 200
    assert response.json()["message"] == "Successfully added event!"

    response = client.get("/events")
    assert response.status_code == 200
    events = response.json()
    assert len(events) == 1
    assert events[0]["date"] == "2026-11-20"
    assert events[0]["time"] == "7:00 PM"
    assert events[0]["image_keys"][0] is None
    assert events[0]["image_keys"][1] is not None


def test_create_duplicate_event(client, auth_headers, db):
    """Test creating the same event name twice fails."""
    create_event(client, auth_headers)

    response = create_event(client, auth_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Duplicate Event found."
    assert db.query(Event).count() == 1


def test_events_and_projects_do_not_share_names(client, auth_headers):
    """Test a project and an event may have the same name."""
    client.post("/project", headers=auth_headers, data={"name": "Launch Night"})

    response = create_event(client, auth_headers)
    assert response.status_code == 200


def test_update_event(client, auth_headers, blob_store):
    """Test updating an event's time and replacing its image."""
    create_event(client, auth_headers, files={"image1": image(b"old")})
    event = client.get("/events").json()[0]

    response = client.patch(
        "/events",
        headers=auth_headers,
        data={"id": str(event["id"]), "time": "8:00 PM"},
        files={"image1": image(b"new")},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Successfully updated event"
    updated = data["event"]
    assert updated["time"] == "8:00 PM"
    assert updated["date"] == "2026-11-20"
    assert updated["image_keys"][0] != event["image_keys"][0]
    assert list(blob_store.objects) == [updated["image_keys"][0]]


def test_update_missing_event(client, auth_headers):
    """Test updating an event that does not exist."""
    response = client.patch("/events", headers=auth_headers, data={"id": "42"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Event not found"


def test_update_event_by_underscore_id(client, auth_headers):
    """Test PATCH finds the event from an ``_id`` form field."""
    create_event(client, auth_headers)
    event = client.get("/events").json()[0]

    response = client.patch(
        "/events",
        headers=auth_headers,
        data={"_id": str(event["id"]), "location": "Rooftop"},
    )
    assert response.status_code == 200
    assert response.json()["event"]["location"] == "Rooftop"
    assert response.json()["event"]["name"] == "Launch Night"


def test_delete_event(client, auth_headers, blob_store):
    """Test deleting an event and its images."""
    create_event(client, auth_headers, files={"image1": image(), "image4": image()})
    event = client.get("/events").json()[0]

    response = client.delete(f"/events/{event['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Event deleted successfully"
    assert blob_store.objects == {}
    assert client.get("/events").json() == []


def test_delete_missing_event(client, auth_headers):
    """Test deleting an event that does not exist."""
    response = client.delete("/events/42", headers=auth_headers)
    assert response.status_code == 404
