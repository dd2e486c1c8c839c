import pytest


@pytest.fixture
def portfolio_item(client, salon, owner):
    response = client.post(
        "/portfolio",
        json={
            "title": "Balayage",
            "category": "hair_color",
            "afterImage": "https://cdn.example.com/after.jpg",
            "beforeImage": "https://cdn.example.com/before.jpg",
            "staffId": salon["staff"]["id"],
            "serviceId": salon["service"]["id"],
            "sortOrder": 2,
        },
        headers=owner["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_listing_orders_featured_first(client, salon, owner, portfolio_item):
    featured = client.post(
        "/portfolio",
        json={"title": "Bridal look", "category": "bridal", "afterImage": "https://cdn.example.com/b.jpg",
              "isFeatured": True, "sortOrder": 9},
        headers=owner["headers"],
    ).json()
    client.post(
        "/portfolio",
        json={"title": "Hidden", "category": "other", "afterImage": "https://cdn.example.com/h.jpg",
              "isVisible": False},
        headers=owner["headers"],
    )

    listed = client.get(f"/portfolio/salon/{salon['id']}").json()
    assert [i["id"] for i in listed] == [featured["id"], portfolio_item["id"]]

    colour = client.get(f"/portfolio/salon/{salon['id']}", params={"category": "hair_color"}).json()
    assert [i["id"] for i in colour] == [portfolio_item["id"]]


def test_staff_and_service_must_belong_to_salon(client, salon, owner):
    response = client.post(
        "/portfolio",
        json={"title": "Cut", "category": "haircut", "afterImage": "https://cdn.example.com/c.jpg", "staffId": 999},
        headers=owner["headers"],
    )
    assert response.status_code == 404


def test_customers_cannot_add_items(client, customer):
    response = client.post(
        "/portfolio",
        json={"title": "Cut", "category": "haircut", "afterImage": "https://cdn.example.com/c.jpg"},
        headers=customer["headers"],
    )
    assert response.status_code == 403


def test_views_and_likes(client, customer, portfolio_item):
    url = f"/portfolio/{portfolio_item['id']}"
    assert client.get(url).json()["viewCount"] == 1
    assert client.get(url).json()["viewCount"] == 2

    assert client.patch(f"{url}/like").status_code == 401
    assert client.patch(f"{url}/like", headers=customer["headers"]).json()["likeCount"] == 1
    assert client.get("/portfolio/999").status_code == 404


def test_update_and_delete_are_owner_only(client, owner, customer, portfolio_item):
    url = f"/portfolio/{portfolio_item['id']}"
    assert client.patch(url, json={"title": "Mine now"}, headers=customer["headers"]).status_code == 403
    assert client.patch(url, json={"isFeatured": True}, headers=owner["headers"]).json()["isFeatured"] is True

    assert client.delete(url, headers=customer["headers"]).status_code == 403
    assert client.delete(url, headers=owner["headers"]).status_code == 200
    assert client.get(url).status_code == 404
