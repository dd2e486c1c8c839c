def test_update_me(client, customer):
    response = client.patch(
        "/users/me", json={"name": "Nimali P.", "city": "Kandy"}, headers=customer["headers"]
    )
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Nimali P."
    assert body["city"] == "Kandy"


def test_customer_profile_defaults_to_free_tier(client, customer):
    response = client.get("/users/me/customer-profile", headers=customer["headers"])
    assert response.status_code == 200
    body = response.json()
    assert body["subscriptionTier"] == "free"
    assert body["tryOnCredits"] == 0
    assert body["remainingTryOns"] == 5
    assert body["remainingWeeklyTryOns"] == 5
    assert body["weeklyResetDate"] is None


def test_update_customer_profile_preferences(client, customer):
    response = client.patch(
        "/users/me/customer-profile",
        json={"preferences": {"hairType": "curly"}, "autoRenew": True},
        headers=customer["headers"],
    )
    assert response.status_code == 200
    assert response.json()["preferences"] == {"hairType": "curly"}
    assert response.json()["autoRenew"] is True


def test_admin_has_no_customer_profile(client, admin):
    assert client.get("/users/me/customer-profile", headers=admin["headers"]).status_code == 404
