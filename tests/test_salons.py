from conftest import SALON_PAYLOAD


def test_create_salon_promotes_customer_to_owner(client, owner):
    response = client.post("/salons", json=SALON_PAYLOAD, headers=owner["headers"])
    assert response.status_code == 201
    body = response.json()
    assert body["slug"].startswith("glow-studio-")
    assert body["verificationStatus"] == "pending"
    assert body["phone"] == "+94771234567"

    profile = client.get("/auth/profile", headers=owner["headers"]).json()
    assert profile["role"] == "salon_owner"

    my_salon = client.get("/salons/my-salon", headers=owner["headers"])
    assert my_salon.status_code == 200
    assert my_salon.json()["id"] == body["id"]


def test_second_salon_is_rejected(client, owner):
    assert client.post("/salons", json=SALON_PAYLOAD, headers=owner["headers"]).status_code == 201
    assert client.post("/salons", json=SALON_PAYLOAD, headers=owner["headers"]).status_code == 400


def test_unverified_salons_are_not_listed(client, owner):
    client.post("/salons", json=SALON_PAYLOAD, headers=owner["headers"])
    assert client.get("/salons").json() == []


def test_listing_filters(client, salon):
    listed = client.get("/salons").json()
    assert [s["id"] for s in listed] == [salon["id"]]

    assert client.get("/salons", params={"city": "colombo"}).json()[0]["id"] == salon["id"]
    assert client.get("/salons", params={"city": "Galle"}).json() == []
    assert client.get("/salons", params={"minRating": 4}).json() == []


def test_nearby_search_annotates_distance(client, salon):
    near = client.get("/salons/nearby", params={"lat": 6.93, "lng": 79.86}).json()
    assert len(near) == 1
    assert near[0]["distanceKm"] < 1

    # Kandy is ~95 km away
    assert client.get("/salons/nearby", params={"lat": 7.2906, "lng": 80.6337}).json() == []
    far = client.get("/salons/nearby", params={"lat": 7.2906, "lng": 80.6337, "radius": 150}).json()
    assert len(far) == 1


def test_detail_view_counts_and_includes_catalog(client, salon):
    first = client.get(f"/salons/{salon['id']}").json()
    second = client.get(f"/salons/{salon['id']}").json()
    assert second["viewCount"] == first["viewCount"] + 1
    assert [s["name"] for s in second["services"]] == ["Haircut"]
    assert [s["name"] for s in second["staff"]] == ["Dilini"]

    by_slug = client.get(f"/salons/slug/{salon['slug']}")
    assert by_slug.status_code == 200


def test_missing_salon_is_404(client):
    assert client.get("/salons/999").status_code == 404
    assert client.get("/salons/slug/nope").status_code == 404


def test_only_owner_can_update(client, salon, customer, owner):
    forbidden = client.patch(f"/salons/{salon['id']}", json={"city": "Galle"}, headers=customer["headers"])
    assert forbidden.status_code == 403

    renamed = client.patch(
        f"/salons/{salon['id']}", json={"businessName": "Shine Lounge"}, headers=owner["headers"]
    )
    assert renamed.status_code == 200
    assert renamed.json()["slug"].startswith("shine-lounge-")


def test_verification_is_admin_only(client, owner, customer):
    salon_id = client.post("/salons", json=SALON_PAYLOAD, headers=owner["headers"]).json()["id"]
    response = client.patch(
        f"/salons/{salon_id}/verification", json={"status": "verified"}, headers=customer["headers"]
    )
    assert response.status_code == 403


def test_discounted_price_must_be_lower(client, salon, owner):
    response = client.post(
        f"/salons/{salon['id']}/services",
        json={"name": "Color", "category": "hair_color", "price": 5000, "discountedPrice": 5000, "durationMinutes": 90},
        headers=owner["headers"],
    )
    assert response.status_code == 422


def test_service_and_staff_management(client, salon, owner, customer):
    service_id = salon["service"]["id"]
    updated = client.patch(
        f"/salons/{salon['id']}/services/{service_id}", json={"price": 3000}, headers=owner["headers"]
    )
    assert updated.status_code == 200
    assert updated.json()["price"] == 3000

    denied = client.post(
        f"/salons/{salon['id']}/staff", json={"name": "Intruder"}, headers=customer["headers"]
    )
    assert denied.status_code == 403

    staff_id = salon["staff"]["id"]
    deleted = client.delete(f"/salons/{salon['id']}/staff/{staff_id}", headers=owner["headers"])
    assert deleted.status_code == 200
    assert client.get(f"/salons/{salon['id']}/staff").json() == []


def test_delete_salon_without_bookings(client, salon, owner):
    response = client.delete(f"/salons/{salon['id']}", headers=owner["headers"])
    assert response.status_code == 200
    assert response.json()["message"] == "Salon deleted"
    assert client.get(f"/salons/{salon['id']}").status_code == 404
