from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from salon_api.models import CustomerProfile
from salon_api.shared.dates import utcnow


@pytest.fixture
def hairstyle(client, admin):
    response = client.post(
        "/ai-tryon/hairstyles",
        json={"name": "Textured Crop", "imageUrl": "https://cdn.example.com/crop.jpg", "category": "short"},
        headers=admin["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def premium_hairstyle(client, admin):
    response = client.post(
        "/ai-tryon/hairstyles",
        json={
            "name": "Bridal Updo",
            "imageUrl": "https://cdn.example.com/updo.jpg",
            "category": "updo",
            "isPremium": True,
        },
        headers=admin["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()


def start_tryon(client, user, hairstyle_id):
    return client.post(
        "/ai-tryon",
        json={"originalImageUrl": "https://cdn.example.com/me.jpg", "hairstyleId": hairstyle_id},
        headers=user["headers"],
    )


def set_profile(db, user, **values):
    profile = db.query(CustomerProfile).filter(CustomerProfile.user_id == user["user"]["id"]).one()
    for key, value in values.items():
        setattr(profile, key, value)
    db.commit()


def test_hairstyle_creation_is_admin_only(client, customer):
    response = client.post(
        "/ai-tryon/hairstyles",
        json={"name": "Fade", "imageUrl": "https://cdn.example.com/fade.jpg", "category": "short"},
        headers=customer["headers"],
    )
    assert response.status_code == 403


def test_hairstyle_listing_filters(client, hairstyle, premium_hairstyle):
    everything = client.get("/ai-tryon/hairstyles").json()
    assert {h["id"] for h in everything} == {hairstyle["id"], premium_hairstyle["id"]}

    premium = client.get("/ai-tryon/hairstyles", params={"isPremium": "true"}).json()
    assert [h["id"] for h in premium] == [premium_hairstyle["id"]]

    short = client.get("/ai-tryon/hairstyles", params={"category": "short"}).json()
    assert [h["id"] for h in short] == [hairstyle["id"]]


def test_tryon_is_processed_in_background(client, customer, hairstyle):
    response = start_tryon(client, customer, hairstyle["id"])
    assert response.status_code == 201, response.text
    created = response.json()
    assert created["status"] == "pending"

    session = client.get(f"/ai-tryon/{created['id']}", headers=customer["headers"]).json()
    assert session["status"] == "completed"
    assert session["resultImageUrl"] == "https://placeholder-result-image.com/result.jpg"
    assert session["generationMetadata"]["batchProcessed"] is False
    assert session["processingTimeMs"] is not None

    listed = client.get("/ai-tryon/hairstyles").json()
    assert listed[0]["tryOnCount"] == 1

    mine = client.get("/ai-tryon/my-sessions", headers=customer["headers"]).json()
    assert [s["id"] for s in mine] == [created["id"]]


def test_free_tier_weekly_limit(client, customer, hairstyle):
    for _ in range(5):
        assert start_tryon(client, customer, hairstyle["id"]).status_code == 201

    sixth = start_tryon(client, customer, hairstyle["id"])
    assert sixth.status_code == 400
    assert sixth.json()["detail"] == "Insufficient try-on credits"

    profile = client.get("/users/me/customer-profile", headers=customer["headers"]).json()
    assert profile["weeklyTryOnsUsed"] == 5
    assert profile["remainingTryOns"] == 0
    assert profile["weeklyResetDate"] is not None


def test_paid_tier_decrements_credits(client, db, customer, premium_hairstyle):
    set_profile(db, customer, subscription_tier="plus", try_on_credits=1)

    assert start_tryon(client, customer, premium_hairstyle["id"]).status_code == 201
    profile = client.get("/users/me/customer-profile", headers=customer["headers"]).json()
    assert profile["tryOnCredits"] == 0

    assert start_tryon(client, customer, premium_hairstyle["id"]).status_code == 400


def test_premium_hairstyle_requires_paid_tier(client, customer, premium_hairstyle):
    response = start_tryon(client, customer, premium_hairstyle["id"])
    assert response.status_code == 400

    # Rejected requests do not consume the allowance
    profile = client.get("/users/me/customer-profile", headers=customer["headers"]).json()
    assert profile["remainingTryOns"] == 5


def test_unknown_hairstyle(client, customer):
    assert start_tryon(client, customer, 999).status_code == 404


def test_sessions_are_private(client, customer, other_customer, hairstyle):
    session_id = start_tryon(client, customer, hairstyle["id"]).json()["id"]
    assert client.get(f"/ai-tryon/{session_id}", headers=other_customer["headers"]).status_code == 403
    assert client.get("/ai-tryon/999", headers=customer["headers"]).status_code == 404


def test_save_counts_once(client, customer, hairstyle):
    session_id = start_tryon(client, customer, hairstyle["id"]).json()["id"]
    first = client.patch(f"/ai-tryon/{session_id}/save", headers=customer["headers"])
    second = client.patch(f"/ai-tryon/{session_id}/save", headers=customer["headers"])
    assert first.status_code == 200
    assert second.json()["isSaved"] is True

    assert client.get("/ai-tryon/hairstyles").json()[0]["saveCount"] == 1


def test_share_is_idempotent_and_counts_views(client, customer, hairstyle):
    session_id = start_tryon(client, customer, hairstyle["id"]).json()["id"]

    first = client.post(f"/ai-tryon/{session_id}/share", headers=customer["headers"]).json()
    second = client.post(f"/ai-tryon/{session_id}/share", headers=customer["headers"]).json()
    assert first["shareToken"] == second["shareToken"]
    assert first["shareUrl"] == f"http://testserver-frontend/shared/tryon/{first['shareToken']}"

    public = client.get(f"/ai-tryon/shared/{first['shareToken']}")
    assert public.status_code == 200
    assert public.json()["viewCount"] == 1
    assert "originalImageUrl" not in public.json()
    assert client.get(f"/ai-tryon/shared/{first['shareToken']}").json()["viewCount"] == 2

    assert client.get("/ai-tryon/shared/unknown-token").status_code == 404


def test_expired_weekly_window_rolls_over_on_tryon(client, db, customer, hairstyle):
    set_profile(db, customer, weekly_try_ons_used=5, weekly_reset_date=utcnow() - timedelta(days=1))

    assert start_tryon(client, customer, hairstyle["id"]).status_code == 201

    profile = client.get("/users/me/customer-profile", headers=customer["headers"]).json()
    assert profile["weeklyTryOnsUsed"] == 1
    assert profile["remainingWeeklyTryOns"] == 4
    assert datetime.fromisoformat(profile["weeklyResetDate"]) > utcnow() + timedelta(days=6)


@pytest.fixture
def queue_enabled(monkeypatch):
    monkeypatch.setattr("salon_api.domain.ai_tryon.service.TRYON_USE_QUEUE", True)
    monkeypatch.setattr("salon_api.worker._job_pool", None)
    monkeypatch.setattr("salon_api.worker._job_pool_failed_at", None)
    return monkeypatch


class RecordingPool:
    def __init__(self):
        self.jobs = []

    async def enqueue_job(self, function, *args):
        self.jobs.append((function, *args))
        return SimpleNamespace(job_id=f"job-{len(self.jobs)}")


def test_queued_tryons_share_one_pool(client, customer, hairstyle, queue_enabled):
    pools = []

    async def connect(settings):
        pools.append(RecordingPool())
        return pools[-1]

    queue_enabled.setattr("salon_api.worker.create_pool", connect)

    first = start_tryon(client, customer, hairstyle["id"]).json()
    second = start_tryon(client, customer, hairstyle["id"]).json()

    assert len(pools) == 1
    assert pools[0].jobs == [
        ("process_tryon_session_task", first["id"]),
        ("process_tryon_session_task", second["id"]),
    ]
    session = client.get(f"/ai-tryon/{first['id']}", headers=customer["headers"]).json()
    assert session["status"] == "pending"


def test_unreachable_queue_falls_back_without_reconnecting(client, customer, hairstyle, queue_enabled):
    attempts = []

    async def refuse(settings):
        attempts.append(settings)
        raise ConnectionError("Redis unavailable")

    queue_enabled.setattr("salon_api.worker.create_pool", refuse)

    first = start_tryon(client, customer, hairstyle["id"])
    second = start_tryon(client, customer, hairstyle["id"])

    assert first.status_code == 201
    assert second.status_code == 201
    assert len(attempts) == 1
    session = client.get(f"/ai-tryon/{second.json()['id']}", headers=customer["headers"]).json()
    assert session["status"] == "completed"
