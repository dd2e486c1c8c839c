from conftest import book


def test_booking_lifecycle_notifies_customer(client, salon, customer, owner, future_day):
    booking = book(client, customer, salon, future_day).json()
    client.patch(
        f"/bookings/{booking['id']}/reschedule",
        json={"newDate": future_day, "newTime": "14:00"},
        headers=customer["headers"],
    )
    client.patch(f"/bookings/{booking['id']}/cancel", json={"reason": "Travel"}, headers=customer["headers"])

    notifications = client.get("/notifications", headers=customer["headers"]).json()
    types = {n["type"] for n in notifications}
    assert types == {"booking_confirmation", "booking_rescheduled", "booking_cancelled"}
    assert all(n["status"] == "sent" and n["channel"] == "in_app" for n in notifications)
    assert all(booking["bookingReference"] in n["message"] for n in notifications)

    assert client.get("/notifications", headers=owner["headers"]).json() == []


def test_read_tracking(client, salon, customer, other_customer, future_day):
    book(client, customer, salon, future_day, "10:00")
    book(client, customer, salon, future_day, "12:00")

    assert client.get("/notifications/unread-count", headers=customer["headers"]).json() == {"unread": 2}

    first = client.get("/notifications", headers=customer["headers"]).json()[0]
    assert client.patch(f"/notifications/{first['id']}/read", headers=other_customer["headers"]).status_code == 404

    read = client.patch(f"/notifications/{first['id']}/read", headers=customer["headers"])
    assert read.status_code == 200
    assert read.json()["status"] == "read"
    assert read.json()["readAt"] is not None

    unread = client.get("/notifications", params={"unreadOnly": "true"}, headers=customer["headers"]).json()
    assert len(unread) == 1

    marked = client.post("/notifications/mark-all-read", headers=customer["headers"])
    assert marked.json() == {"updated": 1}
    assert client.get("/notifications/unread-count", headers=customer["headers"]).json() == {"unread": 0}
