import uuid

from salon_api.rate_limiter import check_rate_limit


def test_fixed_window_counter_in_memory():
    key = f"test:{uuid.uuid4()}"
    assert check_rate_limit(key, 2, 60)[0] is True
    assert check_rate_limit(key, 2, 60)[0] is True

    allowed, count, ttl = check_rate_limit(key, 2, 60)
    assert allowed is False
    assert count == 2
    assert 0 < ttl <= 60


def test_login_is_not_throttled_when_disabled(client, customer):
    for _ in range(12):
        response = client.post("/auth/login", json={"email": "customer@example.com", "password": "wrong"})
        assert response.status_code == 401
