"""Request/response cycle through the FastAPI app"""
import logging
from datetime import time, timedelta

from conftest import at, make_business, make_closed_date, make_service


def slots_url(slug, day, service_id):
    return f"/api/v1/public/{slug}/available-times?date={day.isoformat()}&service_id={service_id}"


def booking_payload(service, start, name="Ana Jensen", phone="+45 12 34 56 78"):
    return {
        "service_id": str(service.id),
        "start_time": start.isoformat(),
        "customer_name": name,
        "customer_phone": phone,
    }


def test_health(client):
    assert client.get("/health/").json()["status"] == "healthy"
    detailed = client.get("/health/detailed").json()
    assert detailed["database"] == "healthy"
    assert detailed["redis"] == "not used"


def test_correlation_id_echoed(client):
    response = client.get("/health/", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"


def test_openapi_documents_engine_errors(client):
    schema = client.get("/openapi.json").json()

    create = schema["paths"]["/api/v1/public/{business_slug}/bookings"]["post"]["responses"]
    cancel = schema["paths"]["/api/v1/dashboard/businesses/{business_id}/bookings/{booking_id}/cancel"]["patch"]["responses"]
    for responses in (create, cancel):
        assert responses["409"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
        assert "404" in responses
    assert set(schema["components"]["schemas"]["ErrorResponse"]["properties"]) == {
        "error", "message", "status", "timestamp"
    }


def test_log_records_carry_correlation_id():
    from app.utils.my_logging import CorrelationIdFilter, correlation_id_var

    record = logging.LogRecord("app", logging.INFO, __file__, 1, "hello", None, None)
    token = correlation_id_var.set("req-42")
    try:
        assert CorrelationIdFilter().filter(record)
    finally:
        correlation_id_var.reset(token)

    assert record.correlation_id == "req-42"


def test_list_services(client, db, business, service):
    make_service(db, business, name="Retired", is_active=False)

    response = client.get("/api/v1/public/studio-nord/services")

    assert response.status_code == 200
    body = response.json()
    assert [s["name"] for s in body] == ["Haircut"]
    assert body[0]["duration_minutes"] == 30
    assert body[0]["formatted_duration"] == "30m"


def test_available_times(client, weekday_hours, service, future_monday):
    response = client.get(slots_url("studio-nord", future_monday, service.id))

    assert response.status_code == 200
    body = response.json()
    assert body["date"] == future_monday.isoformat()
    by_start = {s["start_time"]: s["available"] for s in body["slots"]}
    assert by_start[at(future_monday, 9).isoformat()] is True
    assert by_start[at(future_monday, 12).isoformat()] is False
    assert body["slots"][-1]["end_time"] == at(future_monday, 18).isoformat()


def test_available_times_closed_date_is_empty(client, db, weekday_hours, service, future_monday):
    make_closed_date(db, weekday_hours, future_monday)

    response = client.get(slots_url("studio-nord", future_monday, service.id))

    assert response.status_code == 200
    assert response.json()["slots"] == []


def test_available_times_errors(client, db, service, future_monday):
    make_business(db, slug="paused", is_active=False)

    not_found = client.get(slots_url("missing", future_monday, service.id))
    assert not_found.status_code == 404
    assert not_found.json()["error"] == "ResourceNotFound"

    inactive = client.get(slots_url("paused", future_monday, service.id))
    assert inactive.status_code == 403
    assert inactive.json()["error"] == "TenantInactive"

    bad_date = client.get(f"/api/v1/public/studio-nord/available-times?date=tomorrow&service_id={service.id}")
    assert bad_date.status_code == 422


def test_create_booking(client, weekday_hours, service, future_monday):
    response = client.post(
        "/api/v1/public/studio-nord/bookings",
        json=booking_payload(service, at(future_monday, 10)),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "confirmed"
    assert body["end_time"] == at(future_monday, 10, 30).isoformat()
    assert body["service"]["id"] == str(service.id)
    assert body["customer_name"] == "Ana Jensen"


def test_create_booking_conflict(client, weekday_hours, service, future_monday):
    payload = booking_payload(service, at(future_monday, 10))
    assert client.post("/api/v1/public/studio-nord/bookings", json=payload).status_code == 201

    response = client.post("/api/v1/public/studio-nord/bookings", json=payload)

    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "BookingConflict"
    assert "not available" in body["message"]


def test_create_booking_in_past(client, service, future_monday):
    response = client.post(
        "/api/v1/public/studio-nord/bookings",
        json=booking_payload(service, at(future_monday - timedelta(days=60), 10)),
    )

    assert response.status_code == 409
    assert response.json()["message"] == "Cannot book in the past"


def test_create_booking_validation(client, service, future_monday):
    response = client.post(
        "/api/v1/public/studio-nord/bookings",
        json=booking_payload(service, at(future_monday, 10), phone="call me"),
    )
    assert response.status_code == 422


def test_booked_slot_shows_unavailable(client, weekday_hours, service, future_monday):
    client.post("/api/v1/public/studio-nord/bookings", json=booking_payload(service, at(future_monday, 10)))

    body = client.get(slots_url("studio-nord", future_monday, service.id)).json()
    by_start = {s["start_time"]: s["available"] for s in body["slots"]}

    assert by_start[at(future_monday, 10).isoformat()] is False
    assert by_start[at(future_monday, 10, 30).isoformat()] is True


def test_public_bookings_by_date(client, weekday_hours, service, future_monday):
    client.post("/api/v1/public/studio-nord/bookings", json=booking_payload(service, at(future_monday, 10)))

    body = client.get(f"/api/v1/public/studio-nord/bookings?date={future_monday.isoformat()}").json()
    assert body["total"] == 1


# ============================================================================
# DASHBOARD
# ============================================================================

def test_dashboard_cancel_and_complete(client, weekday_hours, service, future_monday):
    base = f"/api/v1/dashboard/businesses/{weekday_hours.id}/bookings"
    first = client.post("/api/v1/public/studio-nord/bookings", json=booking_payload(service, at(future_monday, 10))).json()
    second = client.post("/api/v1/public/studio-nord/bookings", json=booking_payload(service, at(future_monday, 11))).json()

    cancelled = client.patch(f"{base}/{first['id']}/cancel")
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"

    again = client.patch(f"{base}/{first['id']}/complete")
    assert again.status_code == 409

    completed = client.patch(f"{base}/{second['id']}/complete")
    assert completed.json()["status"] == "completed"

    listing = client.get(base).json()
    assert listing["total"] == 2
    assert client.get(f"{base}?status=cancelled").json()["total"] == 1
    assert client.get(f"{base}/date?date={future_monday.isoformat()}").json()["total"] == 2
    assert client.get(f"{base}/today").status_code == 200

    # cancelled slot is offered again
    body = client.get(slots_url("studio-nord", future_monday, service.id)).json()
    by_start = {s["start_time"]: s["available"] for s in body["slots"]}
    assert by_start[at(future_monday, 10).isoformat()] is True


def test_dashboard_unknown_business(client):
    response = client.get("/api/v1/dashboard/businesses/6f1c2a4e-8a57-4f53-9f59-1d9c8f0e2b11/bookings")
    assert response.status_code == 404


def test_dashboard_hours(client, business, service, future_monday):
    base = f"/api/v1/dashboard/businesses/{business.id}"

    response = client.put(f"{base}/hours/0", json={
        "is_open": True,
        "open_time": "10:00",
        "close_time": "14:00",
        "break_start_time": "12:00",
        "break_end_time": "12:30",
    })
    assert response.status_code == 200
    assert response.json()["day_name"] == "MONDAY"

    invalid = client.put(f"{base}/hours/1", json={"is_open": True, "open_time": "10:00"})
    assert invalid.status_code == 422
    assert invalid.json()["error"] == "InvalidConfiguration"

    assert client.put(f"{base}/hours/9", json={"is_open": False}).status_code == 422

    hours = client.get(f"{base}/hours").json()
    assert len(hours) == 1

    body = client.get(slots_url("studio-nord", future_monday, service.id)).json()
    starts = [s["start_time"] for s in body["slots"]]
    assert starts[0] == at(future_monday, 10).isoformat()
    assert starts[-1] == at(future_monday, 13, 30).isoformat()

    # Tuesday has no row now that hours exist, so it is closed
    tuesday = future_monday + timedelta(days=1)
    assert client.get(slots_url("studio-nord", tuesday, service.id)).json()["slots"] == []


def test_dashboard_default_hours(client, business):
    response = client.post(f"/api/v1/dashboard/businesses/{business.id}/hours/defaults")

    assert response.status_code == 200
    assert len(response.json()) == 7


def test_dashboard_closed_dates(client, business, service, future_monday):
    base = f"/api/v1/dashboard/businesses/{business.id}/closed-dates"

    created = client.post(base, json={"closed_date": future_monday.isoformat(), "reason": "Holiday"})
    assert created.status_code == 201

    assert client.get(slots_url("studio-nord", future_monday, service.id)).json()["slots"] == []
    assert len(client.get(base).json()) == 1

    deleted = client.delete(f"{base}/{created.json()['id']}")
    assert deleted.status_code == 204
    assert client.delete(f"{base}/{created.json()['id']}").status_code == 404

    # fallback hours apply again since no weekly hours are configured
    slots = client.get(slots_url("studio-nord", future_monday, service.id)).json()["slots"]
    assert slots[0]["start_time"] == at(future_monday, 9).isoformat()
