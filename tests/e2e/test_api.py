"""
End-to-end tests for the marketplace API.

These run against a deployed stage given by ``API_BASE_URL`` and are skipped
when it is not set.
"""

import uuid

import httpx
import pytest


def _unique_email(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}@example.com"


@pytest.fixture
def seller(integration_client: httpx.Client):
    response = integration_client.post("/auth/register", json={
        "name": "E2E Seller",
        "email": _unique_email("seller"),
        "password": "secret123",
        "role": "seller",
    })
    assert response.status_code == 201
    return response.json()


@pytest.mark.e2e
class TestMarketplaceAPI:
    """End-to-end tests for the marketplace API."""

    def test_preflight(self, integration_client: httpx.Client):
        response = integration_client.options("/storefronts")

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_profile_requires_token(self, integration_client: httpx.Client):
        response = integration_client.get("/auth/profile")

        assert response.status_code == 401

    def test_seller_flow(self, integration_client: httpx.Client, seller):
        auth = {"Authorization": f"Bearer {seller['token']}"}

        storefront = integration_client.post("/storefronts", headers=auth, json={
            "name": "E2E Shop",
            "description": "Created by the end-to-end suite",
            "category": "testing",
        })
        assert storefront.status_code == 201
        store_id = storefront.json()["storefront"]["storeId"]

        item = integration_client.post("/items", json={
            "storeId": store_id,
            "name": "E2E Item",
            "description": "Test item",
            "price": 19.99,
            "category": "testing",
        })
        assert item.status_code == 201
        item_id = item.json()["item"]["id"]

        items = integration_client.get("/items", params={"storeId": store_id})
        assert [listed["id"] for listed in items.json()["items"]] == [item_id]

        review = integration_client.post("/reviews", headers=auth, json={
            "itemId": item_id, "rating": 4, "comment": "Works end to end",
        })
        assert review.status_code == 201

        duplicate = integration_client.post("/reviews", headers=auth, json={
            "itemId": item_id, "rating": 5, "comment": "Again",
        })
        assert duplicate.status_code == 409

        reviews = integration_client.get("/reviews", params={"itemId": item_id}).json()
        assert reviews["averageRating"] == 4.0
        assert reviews["totalReviews"] == 1

    def test_order_flow(self, integration_client: httpx.Client, seller):
        auth = {"Authorization": f"Bearer {seller['token']}"}

        created = integration_client.post("/orders", headers=auth, json={
            "items": [{"itemId": "e2e-missing-item", "quantity": 1, "price": 1.5}],
            "shippingAddress": "1 Test Lane",
            "total": 1.5,
        })
        assert created.status_code == 201

        orders = integration_client.get("/orders", headers=auth)
        assert orders.status_code == 200
        listed = orders.json()["orders"]
        assert [order["orderId"] for order in listed] == [created.json()["order"]["orderId"]]
        assert listed[0]["items"][0]["itemDetails"] is None
