def test_plan_catalogue(client):
    plans = {p["type"]: p for p in client.get("/subscriptions/plans").json()}
    assert plans["customer_plus"]["monthlyPrice"] == 990
    assert plans["customer_plus"]["tryOnCredits"] == 80
    assert plans["customer_pro"]["monthlyPrice"] == 1990
    assert plans["customer_pro"]["tryOnCredits"] == 250
    assert plans["salon_growth"]["monthlyPrice"] == 2500
    assert plans["salon_pro"]["monthlyPrice"] == 6500
    assert plans["salon_starter"]["audience"] == "salon"
    assert plans["customer_plus"]["currency"] == "LKR"


def test_customer_subscription_grants_credits(client, customer):
    response = client.post(
        "/subscriptions", json={"type": "customer_plus", "billingCycle": "monthly"}, headers=customer["headers"]
    )
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["status"] == "active"
    assert body["price"] == 990

    profile = client.get("/users/me/customer-profile", headers=customer["headers"]).json()
    assert profile["subscriptionTier"] == "plus"
    assert profile["tryOnCredits"] == 80
    assert profile["subscriptionEndDate"] is not None

    current = client.get("/subscriptions/me", headers=customer["headers"])
    assert current.json()["id"] == body["id"]


def test_upgrade_cancels_previous_plan(client, customer):
    plus = client.post("/subscriptions", json={"type": "customer_plus"}, headers=customer["headers"]).json()
    pro = client.post(
        "/subscriptions", json={"type": "customer_pro", "billingCycle": "yearly"}, headers=customer["headers"]
    ).json()

    assert client.get("/subscriptions/me", headers=customer["headers"]).json()["id"] == pro["id"]
    assert pro["price"] == 1990 * 12

    cancel_old = client.patch(f"/subscriptions/{plus['id']}/cancel", headers=customer["headers"])
    assert cancel_old.status_code == 400

    profile = client.get("/users/me/customer-profile", headers=customer["headers"]).json()
    assert profile["subscriptionTier"] == "pro"


def test_cancel_falls_back_to_free(client, customer, other_customer):
    subscription = client.post(
        "/subscriptions", json={"type": "customer_pro"}, headers=customer["headers"]
    ).json()

    denied = client.patch(f"/subscriptions/{subscription['id']}/cancel", headers=other_customer["headers"])
    assert denied.status_code == 403

    cancelled = client.patch(
        f"/subscriptions/{subscription['id']}/cancel", json={"reason": "Too pricey"}, headers=customer["headers"]
    )
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"
    assert cancelled.json()["cancellationReason"] == "Too pricey"

    profile = client.get("/users/me/customer-profile", headers=customer["headers"]).json()
    assert profile["subscriptionTier"] == "free"
    assert profile["tryOnCredits"] == 0

    assert client.get("/subscriptions/me", headers=customer["headers"]).status_code == 404


def test_salon_plan_requires_salon(client, customer):
    response = client.post("/subscriptions", json={"type": "salon_growth"}, headers=customer["headers"])
    assert response.status_code == 400


def test_salon_plan_updates_salon_tier(client, salon, owner):
    response = client.post("/subscriptions", json={"type": "salon_growth"}, headers=owner["headers"])
    assert response.status_code == 201
    assert client.get(f"/salons/{salon['id']}").json()["subscriptionTier"] == "growth"

    # Customer and salon plans are tracked separately
    client.post("/subscriptions", json={"type": "customer_plus"}, headers=owner["headers"])
    salon_plan = client.get("/subscriptions/me", params={"audience": "salon"}, headers=owner["headers"]).json()
    assert salon_plan["type"] == "salon_growth"
