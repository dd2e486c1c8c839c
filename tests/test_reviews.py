from conftest import book


def complete(client, owner, booking_id):
    for status in ("confirmed", "completed"):
        response = client.patch(f"/bookings/{booking_id}/status", json={"status": status}, headers=owner["headers"])
        assert response.status_code == 200, response.text


def test_review_updates_salon_rating(client, salon, customer, other_customer):
    first = client.post(
        "/reviews", json={"salonId": salon["id"], "rating": 5, "comment": "Lovely"}, headers=customer["headers"]
    )
    assert first.status_code == 201, first.text
    assert first.json()["isVerified"] is False

    client.post("/reviews", json={"salonId": salon["id"], "rating": 2}, headers=other_customer["headers"])

    detail = client.get(f"/salons/{salon['id']}").json()
    assert detail["averageRating"] == 3.5
    assert detail["totalReviews"] == 2

    reviews = client.get(f"/reviews/salon/{salon['id']}").json()
    assert len(reviews) == 2


def test_review_of_completed_booking_is_verified(client, salon, customer, owner, future_day):
    booking = book(client, customer, salon, future_day).json()
    complete(client, owner, booking["id"])

    payload = {
        "salonId": salon["id"],
        "bookingId": booking["id"],
        "staffId": salon["staff"]["id"],
        "rating": 4,
        "detailedRatings": {"service": 4, "cleanliness": 5},
    }
    response = client.post("/reviews", json=payload, headers=customer["headers"])
    assert response.status_code == 201, response.text
    assert response.json()["isVerified"] is True

    duplicate = client.post("/reviews", json=payload, headers=customer["headers"])
    assert duplicate.status_code == 400


def test_review_of_someone_elses_booking(client, salon, customer, other_customer, future_day):
    booking = book(client, customer, salon, future_day).json()
    response = client.post(
        "/reviews",
        json={"salonId": salon["id"], "bookingId": booking["id"], "rating": 1},
        headers=other_customer["headers"],
    )
    assert response.status_code == 403


def test_review_validation(client, salon, customer):
    assert client.post("/reviews", json={"salonId": 999, "rating": 4}, headers=customer["headers"]).status_code == 404
    bad_rating = client.post("/reviews", json={"salonId": salon["id"], "rating": 6}, headers=customer["headers"])
    assert bad_rating.status_code == 422


def test_comment_is_escaped(client, salon, customer):
    response = client.post(
        "/reviews",
        json={"salonId": salon["id"], "rating": 4, "comment": "<script>alert(1)</script>"},
        headers=customer["headers"],
    )
    assert "<script>" not in response.json()["comment"]


def test_owner_response_and_helpful(client, salon, customer, other_customer, owner):
    review = client.post(
        "/reviews", json={"salonId": salon["id"], "rating": 5}, headers=customer["headers"]
    ).json()

    denied = client.patch(
        f"/reviews/{review['id']}/respond", json={"response": "Thanks!"}, headers=customer["headers"]
    )
    assert denied.status_code == 403

    answered = client.patch(
        f"/reviews/{review['id']}/respond", json={"response": "Thanks!"}, headers=owner["headers"]
    )
    assert answered.status_code == 200
    assert answered.json()["salonResponse"] == "Thanks!"
    assert answered.json()["salonResponseDate"] is not None

    client.patch(f"/reviews/{review['id']}/helpful", headers=other_customer["headers"])
    helpful = client.patch(f"/reviews/{review['id']}/helpful", headers=customer["headers"])
    assert helpful.json()["helpfulCount"] == 2

    assert client.get("/reviews/999").status_code == 404
