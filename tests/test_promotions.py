from datetime import timedelta

import pytest

from conftest import book
from salon_api.shared.dates import utcnow


def window(start_days=-1, end_days=30):
    now = utcnow()
    return (now + timedelta(days=start_days)).isoformat(), (now + timedelta(days=end_days)).isoformat()


@pytest.fixture
def promotion(client, salon, owner):
    start, end = window()
    response = client.post(
        "/promotions",
        json={
            "title": "Festive 20",
            "type": "percentage_discount",
            "code": "festive20",
            "discountValue": 20,
            "maxDiscountAmount": 400,
            "minPurchaseAmount": 1000,
            "startDate": start,
            "endDate": end,
        },
        headers=owner["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()


def validate(client, user, code, service_id, amount):
    response = client.post(
        "/promotions/validate",
        json={"code": code, "serviceId": service_id, "amount": amount},
        headers=user["headers"],
    )
    assert response.status_code == 200, response.text
    return response.json()


def test_code_is_upper_cased_and_unique(client, salon, owner, promotion):
    assert promotion["code"] == "FESTIVE20"
    start, end = window()
    duplicate = client.post(
        "/promotions",
        json={"title": "Again", "type": "fixed_discount", "code": "Festive20", "discountValue": 100,
              "startDate": start, "endDate": end},
        headers=owner["headers"],
    )
    assert duplicate.status_code == 409


def test_end_date_must_follow_start(client, salon, owner):
    start, end = window(5, 1)
    response = client.post(
        "/promotions",
        json={"title": "Backwards", "type": "fixed_discount", "code": "BACK", "discountValue": 100,
              "startDate": start, "endDate": end},
        headers=owner["headers"],
    )
    assert response.status_code == 422


def test_only_salon_owners_create(client, customer):
    start, end = window()
    response = client.post(
        "/promotions",
        json={"title": "Nope", "type": "fixed_discount", "code": "NOPE", "discountValue": 100,
              "startDate": start, "endDate": end},
        headers=customer["headers"],
    )
    assert response.status_code == 403


def test_salon_listing_shows_live_promotions(client, salon, owner, promotion):
    start, end = window(3, 10)
    client.post(
        "/promotions",
        json={"title": "Later", "type": "fixed_discount", "code": "LATER", "discountValue": 100,
              "startDate": start, "endDate": end},
        headers=owner["headers"],
    )
    listed = client.get(f"/promotions/salon/{salon['id']}").json()
    assert [p["code"] for p in listed] == ["FESTIVE20"]


def test_validate_applies_cap(client, salon, customer, promotion):
    service_id = salon["service"]["id"]

    result = validate(client, customer, "festive20", service_id, 1500)
    assert result == {"valid": True, "discount": 300, "finalAmount": 1200, "promotionId": promotion["id"], "reason": None}

    capped = validate(client, customer, "FESTIVE20", service_id, 5000)
    assert capped["discount"] == 400
    assert capped["finalAmount"] == 4600


def test_validate_rejections(client, salon, owner, customer, promotion):
    service_id = salon["service"]["id"]

    unknown = validate(client, customer, "NOSUCH", service_id, 1500)
    assert unknown["valid"] is False
    assert unknown["finalAmount"] == 1500

    too_small = validate(client, customer, "FESTIVE20", service_id, 500)
    assert too_small["valid"] is False
    assert "Minimum" in too_small["reason"]

    assert validate(client, customer, "FESTIVE20", 999, 1500)["valid"] is False

    client.patch(f"/promotions/{promotion['id']}", json={"excludedServiceIds": [service_id]}, headers=owner["headers"])
    assert validate(client, customer, "FESTIVE20", service_id, 1500)["valid"] is False

    client.patch(
        f"/promotions/{promotion['id']}",
        json={"excludedServiceIds": [], "status": "inactive"},
        headers=owner["headers"],
    )
    assert validate(client, customer, "FESTIVE20", service_id, 1500)["reason"] == "Promotion is not active"


def test_usage_limit(client, salon, owner, customer, db, promotion):
    from salon_api.models_billing import Promotion

    client.patch(f"/promotions/{promotion['id']}", json={"usageLimit": 1}, headers=owner["headers"])
    db.query(Promotion).filter(Promotion.id == promotion["id"]).update({Promotion.usage_count: 1})
    db.commit()

    result = validate(client, customer, "FESTIVE20", salon["service"]["id"], 1500)
    assert result["reason"] == "Promotion usage limit reached"


def test_first_time_only(client, salon, owner, customer, future_day):
    start, end = window()
    client.post(
        "/promotions",
        json={"title": "Welcome", "type": "first_time_customer", "code": "WELCOME", "discountValue": 10,
              "isFirstTimeOnly": True, "startDate": start, "endDate": end},
        headers=owner["headers"],
    )
    assert validate(client, customer, "WELCOME", salon["service"]["id"], 2500)["discount"] == 250

    book(client, customer, salon, future_day)
    assert validate(client, customer, "WELCOME", salon["service"]["id"], 2500)["valid"] is False


def test_promotions_are_not_applied_to_bookings(client, salon, customer, promotion, future_day):
    booking = book(client, customer, salon, future_day).json()
    assert booking["discountAmount"] == 0
    assert booking["finalPrice"] == 2500


def test_update_and_delete_are_owner_only(client, salon, owner, customer, promotion):
    url = f"/promotions/{promotion['id']}"
    assert client.patch(url, json={"title": "Hacked"}, headers=customer["headers"]).status_code == 403

    updated = client.patch(url, json={"title": "Festive Twenty"}, headers=owner["headers"])
    assert updated.json()["title"] == "Festive Twenty"

    assert client.delete(url, headers=customer["headers"]).status_code == 403
    assert client.delete(url, headers=owner["headers"]).status_code == 200
    assert client.get(f"/promotions/salon/{salon['id']}").json() == []
