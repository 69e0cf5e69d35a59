import uuid

from conftest import booking_payload


def _unique_email(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:10]}@example.com"


def _book(client, **overrides):
    return client.post("/api/bookings", json=booking_payload(**overrides))


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json().get("status") == "ok"


def test_list_tables_returns_default_layout(client):
    r = client.get("/api/tables")
    assert r.status_code == 200
    tables = r.get_json()["tables"]
    assert len(tables) == 12
    assert tables[0] == {"id": 1, "name": "Table 1", "capacity": 2}


def test_create_booking_201_returns_record(client):
    email = _unique_email("reserve")
    r = _book(client, email=email, guests=3)
    assert r.status_code == 201
    body = r.get_json()
    assert body["id"].startswith("BK")
    assert body["tableId"] == 3
    assert body["tableName"] == "Table 3"
    assert body["email"] == email
    assert body["displayTime"] == "7:00 PM"
    assert body["displayDate"] == "Sunday, 1 June 2025"


def test_create_booking_without_payload_400(client):
    r = client.post("/api/bookings", data="nope", content_type="text/plain")
    assert r.status_code == 400
    assert r.get_json()["code"] == "INVALID_PAYLOAD"


def test_invalid_email_422(client):
    r = _book(client, email="not-an-email")
    assert r.status_code == 422
    body = r.get_json()
    assert body["code"] == "VALIDATION_ERROR"
    assert any(d["field"] == "email" for d in body["details"])


def test_past_date_422(client):
    r = _book(client, date="2024-12-31")
    assert r.status_code == 422
    assert r.get_json()["code"] == "PAST_DATE"


def test_taken_table_409(client):
    assert _book(client, tableId=5).status_code == 201
    r = _book(client, tableId=5, email=_unique_email("late"))
    assert r.status_code == 409
    assert r.get_json()["code"] == "TABLE_UNAVAILABLE"


def test_full_slot_409(client):
    for _ in range(3):
        assert _book(client, guests=8).status_code == 201
    r = _book(client, guests=8)
    assert r.status_code == 409
    assert r.get_json()["code"] == "NO_TABLE_AVAILABLE"


def test_availability_requires_date(client):
    r = client.get("/api/tables/availability")
    assert r.status_code == 400
    assert r.get_json()["code"] == "MISSING_DATE"


def test_availability_rejects_bad_time(client):
    r = client.get("/api/tables/availability", query_string={"date": "2025-06-01", "time": "7pm"})
    assert r.status_code == 422
    assert r.get_json()["code"] == "BAD_TIME"


def test_availability_uses_session_user(client):
    assert _book(client, tableId=2).status_code == 201

    r = client.get("/api/tables/availability", query_string={"date": "2025-06-01", "time": "19:00"})
    assert r.status_code == 200
    tables = {t["id"]: t for t in r.get_json()["tables"]}
    assert tables[2]["status"] == "BOOKED_BY_SELF"
    assert tables[2]["guests"] == 2
    assert tables[1]["status"] == "AVAILABLE"

    other = client.application.test_client()
    r = other.get("/api/tables/availability", query_string={"date": "2025-06-01", "time": "19:00"})
    tables = {t["id"]: t for t in r.get_json()["tables"]}
    assert tables[2]["status"] == "BOOKED_BY_OTHER"


def test_availability_without_time(client):
    assert _book(client, tableId=2, time="20:30").status_code == 201
    r = client.get("/api/tables/availability", query_string={"date": "2025-06-01"})
    tables = {t["id"]: t for t in r.get_json()["tables"]}
    assert tables[2]["status"] == "BOOKED_BY_SELF_DIFFERENT_TIME"
    assert tables[2]["bookingTime"] == "8:30 PM"
    assert tables[3]["status"] == "UNKNOWN_NO_TIME_SELECTED"


def test_candidates_skip_taken_and_small_tables(client):
    assert _book(client, tableId=7, guests=5).status_code == 201
    r = client.get(
        "/api/tables/candidates",
        query_string={"date": "2025-06-01", "time": "19:00", "guests": 5},
    )
    assert r.status_code == 200
    assert [t["id"] for t in r.get_json()["tables"]] == [8, 9, 10, 11, 12]


def test_candidates_require_time(client):
    r = client.get("/api/tables/candidates", query_string={"date": "2025-06-01"})
    assert r.status_code == 400
    assert r.get_json()["code"] == "MISSING_TIME"


def test_my_bookings_and_cancel(client):
    email = _unique_email("mine")
    late = _book(client, email=email, time="21:00").get_json()
    early = _book(client, email=email, time="18:00").get_json()

    r = client.get("/api/bookings/mine")
    assert r.status_code == 200
    assert r.get_json()["email"] == email
    assert [b["id"] for b in r.get_json()["bookings"]] == [early["id"], late["id"]]

    assert client.delete(f"/api/bookings/{early['id']}").status_code == 204
    assert client.delete("/api/bookings/BK0").status_code == 204

    r = client.get("/api/bookings/mine")
    assert [b["id"] for b in r.get_json()["bookings"]] == [late["id"]]


def test_my_bookings_empty_for_new_browser(client):
    r = client.get("/api/bookings/mine")
    assert r.status_code == 200
    assert r.get_json()["bookings"] == []
