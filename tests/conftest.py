import os
import tempfile
from datetime import date, timedelta

# Environment must be in place before salon_api.config is imported
_db_dir = tempfile.mkdtemp(prefix="salon-api-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["TRYON_USE_QUEUE"] = "false"
os.environ["IMAGE_GENERATION_URL"] = ""
os.environ["JWT_SECRET"] = "test-access-secret"
os.environ["REFRESH_TOKEN_SECRET"] = "test-refresh-secret"
os.environ["APP_URL"] = "http://testserver-frontend"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from salon_api.database import Base, SessionLocal, engine  # noqa: E402
from salon_api.main import app  # noqa: E402
from salon_api.models import UserRole  # noqa: E402
from salon_api.domain.users.repository import UserRepository  # noqa: E402
from salon_api.security_utils import hash_password_bcrypt  # noqa: E402

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register_and_login(client: TestClient, email: str, name: str = "Test User") -> dict:
    response = client.post("/auth/register", json={"email": email, "name": name, "password": PASSWORD})
    assert response.status_code == 201, response.text
    login = client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert login.status_code == 200, login.text
    body = login.json()
    return {"user": body["user"], "headers": auth_header(body["accessToken"]), "refresh": body["refreshToken"]}


@pytest.fixture
def customer(client):
    return register_and_login(client, "customer@example.com", "Nimali Perera")


@pytest.fixture
def other_customer(client):
    return register_and_login(client, "other@example.com", "Kasun Silva")


@pytest.fixture
def admin(client, db):
    UserRepository.create_user(
        db,
        email="admin@example.com",
        name="Admin",
        password=hash_password_bcrypt(PASSWORD),
        role=UserRole.ADMIN.value,
    )
    login = client.post("/auth/login", json={"email": "admin@example.com", "password": PASSWORD})
    assert login.status_code == 200, login.text
    body = login.json()
    return {"user": body["user"], "headers": auth_header(body["accessToken"])}


@pytest.fixture
def owner(client):
    return register_and_login(client, "owner@example.com", "Salon Owner")


SALON_PAYLOAD = {
    "businessName": "Glow Studio",
    "phone": "0771234567",
    "address": "12 Galle Road",
    "city": "Colombo",
    "latitude": 6.9271,
    "longitude": 79.8612,
}


@pytest.fixture
def salon(client, owner, admin):
    """A verified salon with default hours, one 60 minute service and one stylist"""
    response = client.post("/salons", json=SALON_PAYLOAD, headers=owner["headers"])
    assert response.status_code == 201, response.text
    salon_id = response.json()["id"]

    verify = client.patch(
        f"/salons/{salon_id}/verification", json={"status": "verified"}, headers=admin["headers"]
    )
    assert verify.status_code == 200, verify.text

    service = client.post(
        f"/salons/{salon_id}/services",
        json={"name": "Haircut", "category": "haircut", "price": 2500, "durationMinutes": 60},
        headers=owner["headers"],
    )
    assert service.status_code == 201, service.text

    staff = client.post(f"/salons/{salon_id}/staff", json={"name": "Dilini"}, headers=owner["headers"])
    assert staff.status_code == 201, staff.text

    return {"id": salon_id, "service": service.json(), "staff": staff.json(), "slug": response.json()["slug"]}


@pytest.fixture
def future_day() -> str:
    return (date.today() + timedelta(days=7)).isoformat()


def book(client: TestClient, user: dict, salon: dict, day: str, time: str = "10:00", **extra):
    payload = {
        "salonId": salon["id"],
        "serviceId": salon["service"]["id"],
        "appointmentDate": day,
        "appointmentTime": time,
        **extra,
    }
    return client.post("/bookings", json=payload, headers=user["headers"])
