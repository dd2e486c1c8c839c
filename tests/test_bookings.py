from datetime import date, datetime, time, timedelta

import pytest

from conftest import book


def slots(client, salon, day, **params):
    response = client.get(
        "/bookings/available-slots",
        params={"salonId": salon["id"], "date": day, "serviceId": salon["service"]["id"], **params},
    )
    assert response.status_code == 200, response.text
    return response.json()


def test_empty_day_offers_default_window(client, salon, future_day):
    available = slots(client, salon, future_day)
    assert available[0] == "09:00"
    assert available[-1] == "17:00"
    assert len(available) == 17


def test_create_booking(client, salon, customer, future_day):
    response = book(client, customer, salon, future_day, customerNotes="<b>fringe</b>")
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["status"] == "pending"
    assert body["bookingReference"].startswith("BK-")
    assert body["bookingReference"] == body["bookingReference"].upper()
    assert body["totalPrice"] == 2500
    assert body["finalPrice"] == 2500
    assert body["discountAmount"] == 0
    assert body["durationMinutes"] == 60
    assert "<b>" not in body["customerNotes"]

    service = client.get(f"/salons/{salon['id']}/services").json()[0]
    assert service["bookingCount"] == 1


def test_overlapping_booking_is_rejected(client, salon, customer, other_customer, future_day):
    assert book(client, customer, salon, future_day, "10:00").status_code == 201

    clash = book(client, other_customer, salon, future_day, "10:30")
    assert clash.status_code == 400
    assert clash.json()["detail"] == "This time slot is not available"

    assert book(client, other_customer, salon, future_day, "11:00").status_code == 201

    available = slots(client, salon, future_day)
    for taken in ("09:30", "10:00", "10:30", "11:00", "11:30"):
        assert taken not in available
    assert "09:00" in available
    assert "12:00" in available


def test_staff_filter_limits_conflicts(client, salon, customer, other_customer, owner, future_day):
    first = book(client, customer, salon, future_day, "10:00", staffId=salon["staff"]["id"])
    assert first.status_code == 201

    second_stylist = client.post(
        f"/salons/{salon['id']}/staff", json={"name": "Ruwan"}, headers=owner["headers"]
    ).json()
    assert "10:00" in slots(client, salon, future_day, staffId=second_stylist["id"])
    assert "10:00" not in slots(client, salon, future_day, staffId=salon["staff"]["id"])

    parallel = book(client, other_customer, salon, future_day, "10:00", staffId=second_stylist["id"])
    assert parallel.status_code == 201


def test_staff_not_accepting_bookings(client, salon, customer, owner, future_day):
    staff_id = salon["staff"]["id"]
    client.patch(
        f"/salons/{salon['id']}/staff/{staff_id}", json={"acceptsBookings": False}, headers=owner["headers"]
    )
    assert slots(client, salon, future_day, staffId=staff_id) == []
    response = book(client, customer, salon, future_day, staffId=staff_id)
    assert response.status_code == 400


def test_booking_outside_working_hours(client, salon, customer, future_day):
    assert book(client, customer, salon, future_day, "17:30").status_code == 400
    assert book(client, customer, salon, future_day, "08:00").status_code == 400


def test_booking_in_the_past(client, salon, customer):
    yesterday = (date.today() - timedelta(days=2)).isoformat()
    assert book(client, customer, salon, yesterday).status_code == 400


def test_invalid_time_format(client, salon, customer, future_day):
    assert book(client, customer, salon, future_day, "9am").status_code == 422


def test_unknown_service(client, salon, customer, future_day):
    payload = {"salonId": salon["id"], "serviceId": 999, "appointmentDate": future_day, "appointmentTime": "10:00"}
    assert client.post("/bookings", json=payload, headers=customer["headers"]).status_code == 404


def test_configured_hours_and_closed_days(client, salon, customer, owner):
    day = date.today() + timedelta(days=7)
    weekday = day.strftime("%A").lower()
    next_day = day + timedelta(days=1)
    closed_weekday = next_day.strftime("%A").lower()
    hours = {weekday: {"open": "10:00", "close": "13:00"}, closed_weekday: {"closed": True}}
    updated = client.patch(f"/salons/{salon['id']}", json={"workingHours": hours}, headers=owner["headers"])
    assert updated.status_code == 200, updated.text

    assert slots(client, salon, day.isoformat()) == ["10:00", "10:30", "11:00", "11:30", "12:00"]
    assert slots(client, salon, next_day.isoformat()) == []
    assert book(client, customer, salon, next_day.isoformat(), "10:00").status_code == 400


def test_read_access(client, salon, customer, other_customer, owner, future_day):
    booking = book(client, customer, salon, future_day).json()

    assert client.get(f"/bookings/{booking['id']}", headers=customer["headers"]).status_code == 200
    assert client.get(f"/bookings/{booking['id']}", headers=owner["headers"]).status_code == 200
    assert client.get(f"/bookings/{booking['id']}", headers=other_customer["headers"]).status_code == 403

    by_reference = client.get(
        f"/bookings/reference/{booking['bookingReference'].lower()}", headers=customer["headers"]
    )
    assert by_reference.status_code == 200
    assert by_reference.json()["id"] == booking["id"]

    mine = client.get("/bookings/my-bookings", headers=customer["headers"]).json()
    assert [b["id"] for b in mine] == [booking["id"]]
    assert client.get("/bookings/my-bookings", headers=other_customer["headers"]).json() == []

    salon_view = client.get(f"/bookings/salon/{salon['id']}", headers=owner["headers"])
    assert [b["id"] for b in salon_view.json()] == [booking["id"]]
    assert client.get(f"/bookings/salon/{salon['id']}", headers=customer["headers"]).status_code == 403


def test_cancel_frees_the_slot(client, salon, customer, other_customer, future_day):
    booking = book(client, customer, salon, future_day).json()

    denied = client.patch(f"/bookings/{booking['id']}/cancel", json={}, headers=other_customer["headers"])
    assert denied.status_code == 403

    cancelled = client.patch(
        f"/bookings/{booking['id']}/cancel", json={"reason": "Sick"}, headers=customer["headers"]
    )
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"
    assert cancelled.json()["cancelledAt"] is not None

    assert "10:00" in slots(client, salon, future_day)

    again = client.patch(f"/bookings/{booking['id']}/cancel", headers=customer["headers"])
    assert again.status_code == 400


def test_reschedule_keeps_previous_slot(client, salon, customer, future_day):
    booking = book(client, customer, salon, future_day, "10:00").json()

    # Moving within its own slot does not conflict with itself
    response = client.patch(
        f"/bookings/{booking['id']}/reschedule",
        json={"newDate": future_day, "newTime": "10:30"},
        headers=customer["headers"],
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["status"] == "rescheduled"
    assert body["appointmentTime"] == "10:30"
    assert body["previousAppointmentTime"] == "10:00"
    assert body["previousAppointmentDate"] == future_day


def test_reschedule_into_taken_slot(client, salon, customer, other_customer, future_day):
    book(client, customer, salon, future_day, "10:00")
    mine = book(client, other_customer, salon, future_day, "14:00").json()
    response = client.patch(
        f"/bookings/{mine['id']}/reschedule",
        json={"newDate": future_day, "newTime": "10:30"},
        headers=other_customer["headers"],
    )
    assert response.status_code == 400


@pytest.mark.parametrize(
    "path,allowed",
    [
        (["confirmed", "in_progress", "completed"], True),
        (["confirmed", "no_show"], True),
        (["completed"], False),
        (["confirmed", "completed", "cancelled"], False),
    ],
)
def test_status_transitions(client, salon, customer, owner, future_day, path, allowed):
    booking = book(client, customer, salon, future_day).json()
    responses = [
        client.patch(f"/bookings/{booking['id']}/status", json={"status": s}, headers=owner["headers"])
        for s in path
    ]
    *leading, last = responses
    assert all(r.status_code == 200 for r in leading)
    assert (last.status_code == 200) is allowed


def test_completion_stamps_and_counts(client, salon, customer, owner, future_day):
    booking = book(client, customer, salon, future_day, staffId=salon["staff"]["id"]).json()
    client.patch(f"/bookings/{booking['id']}/status", json={"status": "confirmed"}, headers=owner["headers"])
    done = client.patch(
        f"/bookings/{booking['id']}/status", json={"status": "completed"}, headers=owner["headers"]
    ).json()
    assert done["completedAt"] is not None

    staff = client.get(f"/salons/{salon['id']}/staff").json()[0]
    assert staff["completedBookings"] == 1


def test_customer_cannot_change_status(client, salon, customer, future_day):
    booking = book(client, customer, salon, future_day).json()
    response = client.patch(
        f"/bookings/{booking['id']}/status", json={"status": "confirmed"}, headers=customer["headers"]
    )
    assert response.status_code == 403


def test_salon_with_bookings_is_deactivated_not_deleted(client, salon, customer, owner, future_day):
    book(client, customer, salon, future_day)
    response = client.delete(f"/salons/{salon['id']}", headers=owner["headers"])
    assert response.json()["message"] == "Salon deactivated"
    assert client.get("/salons").json() == []


def test_short_service_inside_existing_booking_is_rejected(
    client, salon, customer, other_customer, owner, future_day
):
    trim = client.post(
        f"/salons/{salon['id']}/services",
        json={"name": "Fringe Trim", "category": "haircut", "price": 900, "durationMinutes": 30},
        headers=owner["headers"],
    )
    assert trim.status_code == 201, trim.text
    assert book(client, customer, salon, future_day, "10:00").status_code == 201

    inside = book(client, other_customer, salon, future_day, "10:30", serviceId=trim.json()["id"])
    assert inside.status_code == 400
    assert inside.json()["detail"] == "This time slot is not available"

    after = book(client, other_customer, salon, future_day, "11:00", serviceId=trim.json()["id"])
    assert after.status_code == 201
    assert after.json()["durationMinutes"] == 30


def test_past_day_has_no_slots(client, salon):
    three_days_ago = (date.today() - timedelta(days=3)).isoformat()
    assert slots(client, salon, three_days_ago) == []


@pytest.fixture
def midday(monkeypatch, future_day):
    now = datetime.combine(date.fromisoformat(future_day), time(12, 0))
    monkeypatch.setattr("salon_api.domain.bookings.service.utcnow", lambda: now)
    return future_day


def test_elapsed_times_today_are_not_offered(client, salon, midday):
    available = slots(client, salon, midday)
    assert available[0] == "12:30"
    assert "12:00" not in available
    assert "09:00" not in available


def test_booking_an_elapsed_time_today_is_rejected(client, salon, customer, midday):
    morning = book(client, customer, salon, midday, "09:00")
    assert morning.status_code == 400
    assert morning.json()["detail"] == "Appointment time has already passed"

    assert book(client, customer, salon, midday, "12:00").status_code == 400
    assert book(client, customer, salon, midday, "12:30").status_code == 201
