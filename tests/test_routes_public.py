import uuid

import pytest

from salonbook.models import Booking, Service
from tests.conftest import failing_query, next_weekday

BASE = "/api/v1/public/profiles"


@pytest.fixture
def monday():
    return next_weekday(0)


def booking_payload(service_id, day, at="10:00", **client):
    contact = {"name": "Jana", "phone": "+421900000001", "email": "jana@example.com"}
    contact.update(client)
    return {"service_id": str(service_id), "date": day.isoformat(), "time": at, "client": contact}


class TestProfileAndServices:

    def test_public_profile(self, client, profile):
        response = client.get(f"{BASE}/studio-anna")
        assert response.status_code == 200
        assert response.json() == {
            "slug": "studio-anna",
            "name": "Studio Anna",
            "phone": "+421900111222",
            "timezone": "Europe/Bratislava",
        }

    def test_unknown_slug(self, client):
        response = client.get(f"{BASE}/nobody")
        assert response.status_code == 404
        assert response.json()["reason"] == "not_found"

    def test_only_active_services_listed(self, client, db, profile, haircut):
        response = client.get(f"{BASE}/studio-anna/services")
        assert response.json()["total"] == 1

        haircut.is_active = False
        db.commit()
        response = client.get(f"{BASE}/studio-anna/services")
        assert response.json() == {"total": 0, "services": []}

    def test_services_read_failure_is_503(self, client, db, profile, haircut):
        with failing_query(db, Service):
            response = client.get(f"{BASE}/studio-anna/services")

        assert response.status_code == 503
        assert response.json()["reason"] == "store_unavailable"


class TestSlots:

    def test_day_slots(self, client, haircut, workweek, monday):
        response = client.get(
            f"{BASE}/studio-anna/slots",
            params={"date": monday.isoformat(), "service_id": str(haircut.id)}
        )
        assert response.status_code == 200
        slots = response.json()["slots"]
        assert slots[0]["local_time"] == "09:00"
        assert slots[-1]["local_time"] == "16:00"
        assert all(slot["available"] for slot in slots)

    def test_no_service_selected(self, client, workweek, monday):
        response = client.get(f"{BASE}/studio-anna/slots", params={"date": monday.isoformat()})
        assert response.status_code == 200
        assert response.json()["slots"] == []

    def test_unknown_service(self, client, profile, monday):
        response = client.get(
            f"{BASE}/studio-anna/slots",
            params={"date": monday.isoformat(), "service_id": str(uuid.uuid4())}
        )
        assert response.status_code == 404

    def test_bad_date(self, client, profile):
        response = client.get(f"{BASE}/studio-anna/slots", params={"date": "next monday"})
        assert response.status_code == 422

    def test_week_view(self, client, haircut, workweek, monday):
        response = client.get(
            f"{BASE}/studio-anna/slots/week",
            params={"week_start": monday.isoformat(), "service_id": str(haircut.id)}
        )
        days = response.json()["days"]
        assert len(days) == 7
        assert len(days[monday.isoformat()]) == 15


class TestCreateBooking:

    def test_book_then_slot_is_gone(self, client, db, haircut, workweek, monday):
        response = client.post(f"{BASE}/studio-anna/bookings", json=booking_payload(haircut.id, monday))
        assert response.status_code == 201
        assert response.json()["status"] == "pending"

        slots = client.get(
            f"{BASE}/studio-anna/slots",
            params={"date": monday.isoformat(), "service_id": str(haircut.id)}
        ).json()["slots"]
        ten = next(s for s in slots if s["local_time"] == "10:00")
        assert ten["available"] is False

    def test_double_booking_is_rejected(self, client, db, haircut, workweek, monday):
        first = client.post(f"{BASE}/studio-anna/bookings", json=booking_payload(haircut.id, monday))
        second = client.post(
            f"{BASE}/studio-anna/bookings", json=booking_payload(haircut.id, monday, at="10:30")
        )

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["reason"] == "slot_taken"
        assert db.query(Booking).count() == 1

    def test_missing_name(self, client, haircut, workweek, monday):
        response = client.post(
            f"{BASE}/studio-anna/bookings", json=booking_payload(haircut.id, monday, name=" ")
        )
        assert response.status_code == 422
        assert response.json()["reason"] == "validation_error"

    def test_outside_working_hours(self, client, haircut, workweek, monday):
        response = client.post(
            f"{BASE}/studio-anna/bookings", json=booking_payload(haircut.id, monday, at="18:00")
        )
        assert response.status_code == 422

    def test_invalid_email(self, client, haircut, workweek, monday):
        response = client.post(
            f"{BASE}/studio-anna/bookings", json=booking_payload(haircut.id, monday, email="nope")
        )
        assert response.status_code == 422
