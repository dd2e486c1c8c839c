from conftest import PASSWORD, auth_header


def test_register_creates_customer_without_password(client):
    response = client.post(
        "/auth/register",
        json={"email": "New@Example.com", "name": "Amaya", "password": PASSWORD, "phone": "0771234567"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User registered successfully"
    assert body["user"]["email"] == "new@example.com"
    assert body["user"]["role"] == "customer"
    assert body["user"]["phone"] == "+94771234567"
    assert "password" not in body["user"]


def test_register_duplicate_email_conflicts(client, customer):
    response = client.post(
        "/auth/register", json={"email": "customer@example.com", "name": "Again", "password": PASSWORD}
    )
    assert response.status_code == 409


def test_register_rejects_short_password(client):
    response = client.post("/auth/register", json={"email": "a@example.com", "name": "A", "password": "abc"})
    assert response.status_code == 422


def test_login_wrong_password(client, customer):
    response = client.post("/auth/login", json={"email": "customer@example.com", "password": "nope"})
    assert response.status_code == 401


def test_login_unknown_user(client):
    response = client.post("/auth/login", json={"email": "ghost@example.com", "password": PASSWORD})
    assert response.status_code == 401


def test_profile_requires_token(client):
    assert client.get("/auth/profile").status_code == 401
    assert client.get("/auth/profile", headers=auth_header("garbage")).status_code == 401


def test_profile_returns_current_user(client, customer):
    response = client.get("/auth/profile", headers=customer["headers"])
    assert response.status_code == 200
    assert response.json()["email"] == "customer@example.com"


def test_refresh_issues_new_access_token(client, customer):
    response = client.post("/auth/refresh", json={"refreshToken": customer["refresh"]})
    assert response.status_code == 200
    token = response.json()["accessToken"]
    assert client.get("/auth/profile", headers=auth_header(token)).status_code == 200


def test_access_token_cannot_be_used_as_refresh_token(client, customer):
    access = customer["headers"]["Authorization"].split(" ", 1)[1]
    assert client.post("/auth/refresh", json={"refreshToken": access}).status_code == 401


def test_refresh_token_cannot_be_used_as_access_token(client, customer):
    assert client.get("/auth/profile", headers=auth_header(customer["refresh"])).status_code == 401


def test_create_admin_requires_admin(client, customer, admin):
    payload = {"email": "second-admin@example.com", "name": "Second", "password": PASSWORD}

    assert client.post("/auth/create-admin", json=payload, headers=customer["headers"]).status_code == 403

    response = client.post("/auth/create-admin", json=payload, headers=admin["headers"])
    assert response.status_code == 201
    assert response.json()["role"] == "admin"

    duplicate = client.post("/auth/create-admin", json=payload, headers=admin["headers"])
    assert duplicate.status_code == 409


def test_health_endpoints(client):
    assert client.get("/").status_code == 200
    response = client.get("/health")
    assert response.json() == {"status": "healthy"}


def test_security_headers_are_set(client):
    response = client.get("/")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
