"""HTTP API tests using FastAPI's TestClient over in-memory SQLite."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from storefront.application.notifications import NotificationDispatcher
from storefront.infrastructure.api.app import create_app
from tests.fakes import FakeEmailAdapter

ALICE = {"X-User-Id": "u1"}
BOB = {"X-User-Id": "u2"}
ADMIN = {"X-User-Id": "admin"}


@pytest.fixture()
def email():
    return FakeEmailAdapter()


@pytest.fixture()
def client(seeded, email):
    app = create_app(uow_factory=seeded, notifications=NotificationDispatcher(email))
    return TestClient(app)


class TestHealthAndIdentity:

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_missing_user_header(self, client):
        resp = client.get("/cart")
        assert resp.status_code == 401
        assert "message" in resp.json()

    def test_unknown_user(self, client):
        resp = client.get("/cart", headers={"X-User-Id": "ghost"})
        assert resp.status_code == 401


class TestCheckoutApi:

    def test_checkout_two_products(self, client, seeded, email):
        client.post("/cart/items", json={"product_id": "A", "quantity": 1}, headers=ALICE)
        client.post("/cart/items", json={"product_id": "B", "quantity": 1}, headers=ALICE)

        resp = client.post(
            "/checkout",
            json={"shipping_method": "standard", "payment_method_id": "pm-1"},
            headers=ALICE,
        )

        assert resp.status_code == 201
        body = resp.json()
        assert body["total"] == "$15.00"
        assert body["status"] == "PENDING"
        assert len(body["items"]) == 2
        assert body["payment_method_id"] == "pm-1"

        assert client.get("/products/A").json()["stock"] == 1
        assert client.get("/products/B").json()["stock"] == 0
        assert client.get("/cart", headers=ALICE).json()["lines"] == []
        assert len(email.sent_emails) == 1

    def test_out_of_stock_returns_400(self, client):
        client.post("/cart/items", json={"product_id": "B", "quantity": 1}, headers=ALICE)
        client.put("/products/B", json={"stock": 0}, headers=ADMIN)

        resp = client.post("/checkout", json={}, headers=ALICE)

        assert resp.status_code == 400
        assert resp.json() == {"message": "Gadget is out of stock"}
        assert client.get("/orders", headers=ALICE).json() == []
        assert client.get("/cart", headers=ALICE).json()["item_count"] == 1

    def test_empty_cart_returns_400(self, client):
        resp = client.post("/checkout", json={}, headers=ALICE)
        assert resp.status_code == 400
        assert resp.json()["message"] == "No items in cart"

    def test_failed_email_still_201(self, client, email):
        email.configure(raise_error=ConnectionError("smtp down"))
        client.post("/cart/items", json={"product_id": "A"}, headers=ALICE)

        resp = client.post("/checkout", json={}, headers=ALICE)

        assert resp.status_code == 201


class TestCartApi:

    def test_add_update_remove(self, client):
        resp = client.post("/cart/items", json={"product_id": "A", "quantity": 1}, headers=ALICE)
        assert resp.status_code == 201
        assert resp.json()["total"] == "$10.00"

        resp = client.put("/cart/items/A", json={"quantity": 2}, headers=ALICE)
        assert resp.json()["item_count"] == 2

        resp = client.delete("/cart/items/A", headers=ALICE)
        assert resp.status_code == 204
        assert client.get("/cart", headers=ALICE).json()["lines"] == []

    def test_add_beyond_stock(self, client):
        resp = client.post("/cart/items", json={"product_id": "B", "quantity": 2}, headers=ALICE)
        assert resp.status_code == 400

    def test_unknown_product(self, client):
        resp = client.post("/cart/items", json={"product_id": "Z"}, headers=ALICE)
        assert resp.status_code == 404

    def test_clear(self, client):
        client.post("/cart/items", json={"product_id": "A"}, headers=ALICE)
        assert client.delete("/cart", headers=ALICE).status_code == 204
        assert client.get("/cart", headers=ALICE).json()["item_count"] == 0


class TestReviewApi:

    def test_rating_follows_reviews(self, client):
        resp = client.post("/products/A/reviews", json={"rating": 4}, headers=ALICE)
        assert resp.status_code == 201
        client.post("/products/A/reviews", json={"rating": 2}, headers=BOB)

        product = client.get("/products/A").json()
        assert product["rating"] == "3.00"
        assert product["review_count"] == 2

    def test_duplicate_review_returns_400(self, client):
        client.post("/products/A/reviews", json={"rating": 4}, headers=ALICE)
        resp = client.post("/products/A/reviews", json={"rating": 5}, headers=ALICE)
        assert resp.status_code == 400
        assert resp.json() == {"message": "Product already reviewed"}

    def test_edit_and_delete(self, client):
        review_id = client.post(
            "/products/A/reviews", json={"rating": 4}, headers=ALICE
        ).json()["id"]

        assert client.put(f"/reviews/{review_id}", json={"rating": 1}, headers=BOB).status_code == 403
        assert client.put(f"/reviews/{review_id}", json={"rating": 2}, headers=ALICE).status_code == 200
        assert client.get("/products/A").json()["rating"] == "2.00"

        assert client.delete(f"/reviews/{review_id}", headers=ALICE).status_code == 204
        product = client.get("/products/A").json()
        assert product["rating"] == "0.00"
        assert product["review_count"] == 0

    def test_helpful_and_list(self, client):
        review_id = client.post(
            "/products/A/reviews", json={"rating": 5, "title": "Nice"}, headers=ALICE
        ).json()["id"]

        resp = client.post(f"/reviews/{review_id}/helpful", headers=BOB)
        assert resp.json()["helpful"] == 1

        reviews = client.get("/products/A/reviews").json()
        assert [(r["id"], r["title"]) for r in reviews] == [(review_id, "Nice")]

    def test_invalid_rating(self, client):
        resp = client.post("/products/A/reviews", json={"rating": 9}, headers=ALICE)
        assert resp.status_code == 400


class TestOrderApi:

    def _place(self, client) -> int:
        client.post("/cart/items", json={"product_id": "A"}, headers=ALICE)
        return client.post("/checkout", json={}, headers=ALICE).json()["id"]

    def test_owner_and_admin_can_read(self, client):
        order_id = self._place(client)
        assert client.get(f"/orders/{order_id}", headers=ALICE).status_code == 200
        assert client.get(f"/orders/{order_id}", headers=ADMIN).status_code == 200
        assert client.get(f"/orders/{order_id}", headers=BOB).status_code == 403

    def test_missing_order(self, client):
        assert client.get("/orders/999", headers=ALICE).status_code == 404

    def test_admin_transitions(self, client):
        order_id = self._place(client)

        resp = client.put(f"/orders/{order_id}/status", json={"status": "SHIPPED"}, headers=ADMIN)
        assert resp.json()["status"] == "SHIPPED"

        resp = client.put(
            f"/orders/{order_id}/payment", json={"payment_status": "PAID"}, headers=ADMIN
        )
        assert resp.json()["payment_status"] == "PAID"
        assert resp.json()["status"] == "SHIPPED"

    def test_customer_cannot_transition(self, client):
        order_id = self._place(client)
        resp = client.put(f"/orders/{order_id}/status", json={"status": "SHIPPED"}, headers=ALICE)
        assert resp.status_code == 403

    def test_invalid_status(self, client):
        order_id = self._place(client)
        resp = client.put(f"/orders/{order_id}/status", json={"status": "LOST"}, headers=ADMIN)
        assert resp.status_code == 400


class TestProductApi:

    def test_admin_creates_product(self, client):
        resp = client.post(
            "/products", json={"name": "Doohickey", "price": "3.50", "stock": 4}, headers=ADMIN
        )
        assert resp.status_code == 201
        assert resp.json()["price"] == "$3.50"

    def test_customer_cannot_create(self, client):
        resp = client.post("/products", json={"name": "Nope", "price": "1.00"}, headers=ALICE)
        assert resp.status_code == 403

    def test_delete_unordered_product(self, client):
        assert client.delete("/products/C", headers=ADMIN).status_code == 204
        assert client.get("/products/C").status_code == 404

    def test_delete_ordered_product_conflicts(self, client):
        client.post("/cart/items", json={"product_id": "A"}, headers=ALICE)
        client.post("/checkout", json={}, headers=ALICE)

        resp = client.delete("/products/A", headers=ADMIN)

        assert resp.status_code == 409
        assert client.get("/products/A").status_code == 200

    def test_list(self, client):
        names = [p["name"] for p in client.get("/products").json()]
        assert names == ["Gadget", "Gizmo", "Widget"]


class TestUserApi:

    def test_register_sends_welcome(self, client, email):
        resp = client.post("/users", json={"name": "Carol", "email": "carol@example.com"})
        assert resp.status_code == 201
        assert resp.json()["role"] == "CUSTOMER"
        assert email.sent_emails[0]["to"] == "carol@example.com"

    def test_duplicate_email(self, client):
        resp = client.post("/users", json={"name": "Alice", "email": "alice@example.com"})
        assert resp.status_code == 400


class TestMalformedInputApi:

    def test_missing_review_rating(self, client):
        resp = client.post("/products/A/reviews", json={}, headers=ALICE)
        assert resp.status_code == 400
        assert "rating" in resp.json()["message"]

    def test_non_numeric_quantity(self, client):
        resp = client.post(
            "/cart/items", json={"product_id": "A", "quantity": "lots"}, headers=ALICE
        )
        assert resp.status_code == 400
        assert "quantity" in resp.json()["message"]

    def test_non_numeric_order_id(self, client):
        assert client.get("/orders/abc", headers=ALICE).status_code == 400

    def test_page_out_of_range(self, client):
        assert client.get("/products?page=0").status_code == 400


class TestListingApi:

    def test_products_paginated(self, client):
        first = [p["name"] for p in client.get("/products?page=1&limit=2").json()]
        second = [p["name"] for p in client.get("/products?page=2&limit=2").json()]
        assert first == ["Gadget", "Gizmo"]
        assert second == ["Widget"]

    def test_top_products(self, client):
        client.post("/products/A/reviews", json={"rating": 4}, headers=ALICE)
        client.post("/products/B/reviews", json={"rating": 5}, headers=ALICE)
        client.post("/products/C/reviews", json={"rating": 2}, headers=ALICE)

        top = client.get("/products/top").json()

        assert [p["name"] for p in top] == ["Gadget", "Widget"]
        assert [p["name"] for p in client.get("/products/top?limit=1").json()] == ["Gadget"]

    def test_show_review(self, client):
        review_id = client.post(
            "/products/A/reviews", json={"rating": 3, "title": "Fine"}, headers=ALICE
        ).json()["id"]

        resp = client.get(f"/reviews/{review_id}")

        assert resp.status_code == 200
        assert resp.json()["title"] == "Fine"
        assert client.get("/reviews/999").status_code == 404

    def test_reviews_filtered_by_user(self, client):
        client.post("/products/A/reviews", json={"rating": 3}, headers=ALICE)
        client.post("/products/A/reviews", json={"rating": 5}, headers=BOB)

        reviews = client.get("/products/A/reviews?user_id=u2").json()

        assert [r["rating"] for r in reviews] == [5]
        assert len(client.get("/products/A/reviews?limit=1").json()) == 1

    def test_all_orders_for_admin_only(self, client):
        client.post("/cart/items", json={"product_id": "A"}, headers=ALICE)
        client.post("/checkout", json={}, headers=ALICE)
        client.post("/cart/items", json={"product_id": "B"}, headers=BOB)
        client.post("/checkout", json={}, headers=BOB)

        resp = client.get("/orders/all", headers=ADMIN)

        assert resp.status_code == 200
        assert [o["buyer_id"] for o in resp.json()] == ["u2", "u1"]
        assert len(client.get("/orders/all?limit=1", headers=ADMIN).json()) == 1
        assert client.get("/orders/all", headers=ALICE).status_code == 403
