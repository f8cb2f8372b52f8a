WEEKDAYS = {"startTime": "09:00", "endTime": "12:00", "days": ["Monday", "Wednesday"]}


def _set(client, headers, payload=WEEKDAYS):
    return client.post("/api/availability", json=payload, headers=headers)


def test_requires_authentication(client):
    assert client.get("/api/availability").status_code == 401
    assert _set(client, {}).status_code == 401


def test_set_and_get(client, auth):
    headers, user = auth

    res = _set(client, headers)
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Availability updated successfully"
    assert body["availability"]["userId"] == user["id"]
    assert body["availability"]["days"] == ["Monday", "Wednesday"]

    res = client.get("/api/availability", headers=headers)
    assert res.status_code == 200
    assert res.json()["startTime"] == "09:00"
    assert res.json()["endTime"] == "12:00"


def test_set_replaces_previous_window(client, auth):
    headers, _ = auth
    first = _set(client, headers).json()["availability"]
    second = _set(client, headers, {"startTime": "13:00", "endTime": "15:00", "days": ["friday"]}).json()[
        "availability"
    ]

    assert second["id"] == first["id"]
    assert second["days"] == ["Friday"]
    assert client.get("/api/availability", headers=headers).json()["startTime"] == "13:00"


def test_start_must_precede_end(client, auth):
    headers, _ = auth
    res = _set(client, headers, {"startTime": "12:00", "endTime": "09:00", "days": ["Monday"]})
    assert res.status_code == 400
    assert res.json()["message"] == "Start time must be earlier than end time"


def test_rejects_bad_time_format(client, auth):
    headers, _ = auth
    res = _set(client, headers, {"startTime": "9am", "endTime": "12:00", "days": ["Monday"]})
    assert res.status_code == 400


def test_rejects_unknown_day(client, auth):
    headers, _ = auth
    res = _set(client, headers, {"startTime": "09:00", "endTime": "12:00", "days": ["Someday"]})
    assert res.status_code == 400


def test_get_without_record(client, auth):
    headers, _ = auth
    res = client.get("/api/availability", headers=headers)
    assert res.status_code == 404
    assert res.json()["message"] == "No availability found"


def test_day_slots(client, auth):
    headers, _ = auth
    _set(client, headers)

    res = client.get("/api/availability/Monday", headers=headers)
    assert res.status_code == 200
    assert res.json() == {
        "startTime": "09:00",
        "endTime": "12:00",
        "timeSlots": ["09:00", "09:30", "10:00", "10:30", "11:00", "11:30"],
    }


def test_day_slots_inactive_day(client, auth):
    headers, _ = auth
    _set(client, headers)
    res = client.get("/api/availability/Tuesday", headers=headers)
    assert res.status_code == 404
    assert res.json()["message"] == "No availability found for this day"


def test_day_slots_invalid_day(client, auth):
    headers, _ = auth
    _set(client, headers)
    res = client.get("/api/availability/Caturday", headers=headers)
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid day of the week"


def test_duration_changes_slot_length(client, auth):
    headers, _ = auth
    _set(client, headers)

    res = client.put("/api/availability/duration", json={"duration": 60}, headers=headers)
    assert res.status_code == 200
    assert res.json()["availability"]["duration"] == 60

    slots = client.get("/api/availability/Wednesday", headers=headers).json()["timeSlots"]
    assert slots == ["09:00", "10:00", "11:00"]


def test_duration_without_availability(client, auth):
    headers, _ = auth
    res = client.put("/api/availability/duration", json={"duration": 45}, headers=headers)
    assert res.status_code == 404


def test_duration_must_be_positive(client, auth):
    headers, _ = auth
    _set(client, headers)
    res = client.put("/api/availability/duration", json={"duration": 0}, headers=headers)
    assert res.status_code == 400


def test_booking_link(client, auth):
    headers, user = auth
    res = client.get("/api/availability/booking-link", headers=headers)
    assert res.status_code == 200
    assert res.json() == {"bookingLink": f"http://frontend.test/book/{user['id']}"}
