"""
Tests for admin review of orders and the role gate.
"""

import asyncio
import logging
import sqlite3

import pytest

from leadprovider_api.app.core.config import settings
from leadprovider_api.app.services.auth_service import AuthService
from leadprovider_api.app.services.order_service import OrderService
from tests.conftest import auth_header, register, register_admin


@pytest.fixture
def admin_token(client):
    return register_admin(client)


@pytest.fixture
def placed_order(client):
    """A user with one pending order; returns ``(token, order_id)``."""
    token = register(client, "a@x.com")
    client.post("/api/cart", json={"serviceId": 1}, headers=auth_header(token))
    order_id = client.post("/api/orders", headers=auth_header(token)).json()["orderId"]
    return token, order_id


class TestAdminGate:

    @pytest.mark.parametrize(
        "method, path, body",
        [
            ("get", "/api/admin/orders", None),
            ("put", "/api/admin/orders/1", {"status": "approved"}),
        ],
    )
    def test_regular_user_is_forbidden(self, client, method, path, body):
        token = register(client, "a@x.com")
        kwargs = {"headers": auth_header(token)}
        if body is not None:
            kwargs["json"] = body
        response = getattr(client, method)(path, **kwargs)
        assert response.status_code == 403

    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer nonsense"}])
    def test_missing_or_invalid_token_is_forbidden(self, client, headers):
        response = client.get("/api/admin/orders", headers=headers)
        assert response.status_code == 403

    def test_token_issued_before_promotion_keeps_user_role(self, client):
        stale = register(client, "boss@x.com", "pw")
        asyncio.run(AuthService.set_role("boss@x.com", "admin"))
        assert client.get("/api/admin/orders", headers=auth_header(stale)).status_code == 403


class TestReview:

    def test_admin_lists_all_orders_with_owner_email(self, client, admin_token, placed_order):
        other = register(client, "b@x.com")
        client.post("/api/orders", json={"items": [{"id": 2}]}, headers=auth_header(other))

        response = client.get("/api/admin/orders", headers=auth_header(admin_token))
        assert response.status_code == 200
        orders = response.json()
        assert [order["user_email"] for order in orders] == ["b@x.com", "a@x.com"]
        assert orders[1]["items"][0]["service_title"] == "Data Appending Enrichment"

    def test_approval_is_visible_to_user_and_admin(self, client, admin_token, placed_order):
        token, order_id = placed_order
        response = client.put(
            f"/api/admin/orders/{order_id}",
            json={"status": "approved"},
            headers=auth_header(admin_token),
        )
        assert response.status_code == 200
        assert response.json()["order"]["status"] == "approved"
        assert response.json()["order"]["id"] == order_id

        own = client.get("/api/orders", headers=auth_header(token)).json()
        assert own[0]["status"] == "approved"
        everyone = client.get("/api/admin/orders", headers=auth_header(admin_token)).json()
        assert everyone[0]["status"] == "approved"

    @pytest.mark.parametrize("status", ["pending", "shipped", "", None])
    def test_invalid_status_is_rejected(self, client, admin_token, placed_order, status):
        _, order_id = placed_order
        response = client.put(
            f"/api/admin/orders/{order_id}",
            json={"status": status},
            headers=auth_header(admin_token),
        )
        assert response.status_code == 400
        assert "Invalid status" in response.json()["message"]

    def test_unknown_order_is_not_found(self, client, admin_token):
        response = client.put(
            "/api/admin/orders/4242",
            json={"status": "rejected"},
            headers=auth_header(admin_token),
        )
        assert response.status_code == 404
        assert response.json() == {"message": "Order not found"}

    def test_lenient_policy_allows_changing_a_reviewed_order(self, client, admin_token, placed_order):
        _, order_id = placed_order
        headers = auth_header(admin_token)
        client.put(f"/api/admin/orders/{order_id}", json={"status": "rejected"}, headers=headers)
        response = client.put(f"/api/admin/orders/{order_id}", json={"status": "approved"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["order"]["status"] == "approved"

    def test_strict_policy_only_moves_pending_orders(self, client, admin_token, placed_order, monkeypatch):
        monkeypatch.setattr(settings, "order_status_policy", "strict")
        _, order_id = placed_order
        headers = auth_header(admin_token)
        first = client.put(f"/api/admin/orders/{order_id}", json={"status": "rejected"}, headers=headers)
        assert first.status_code == 200
        second = client.put(f"/api/admin/orders/{order_id}", json={"status": "approved"}, headers=headers)
        assert second.status_code == 409
        orders = client.get("/api/admin/orders", headers=headers).json()
        assert orders[0]["status"] == "rejected"

    def test_unexpected_storage_error_is_logged_and_hidden(
        self, client, admin_token, placed_order, monkeypatch, caplog
    ):
        _, order_id = placed_order

        async def broken_get_order(order_id):
            raise sqlite3.OperationalError("no such table: orders_secret_shadow")

        monkeypatch.setattr(OrderService, "get_order", broken_get_order)
        with caplog.at_level(logging.ERROR, logger="leadprovider_api"):
            response = client.put(
                f"/api/admin/orders/{order_id}",
                json={"status": "approved"},
                headers=auth_header(admin_token),
            )

        assert response.status_code == 500
        assert response.json() == {"message": "Server error"}
        assert "orders_secret_shadow" not in response.text
        logged = [record for record in caplog.records if "Unhandled storage error" in record.getMessage()]
        assert len(logged) == 1
        assert logged[0].levelno == logging.ERROR
        assert f"/api/admin/orders/{order_id}" in logged[0].getMessage()
        assert isinstance(logged[0].exc_info[1], sqlite3.OperationalError)


def test_full_purchase_and_review_scenario(client):
    register(client, "a@x.com", "pw123")
    login = client.post("/api/login", json={"email": "a@x.com", "password": "pw123"})
    token = login.json()["token"]
    for service_id in (1, 3):
        client.post("/api/cart", json={"serviceId": service_id}, headers=auth_header(token))
    order_id = client.post("/api/orders", headers=auth_header(token)).json()["orderId"]

    order = client.get("/api/orders", headers=auth_header(token)).json()[0]
    assert order["id"] == order_id
    assert [item["service_title"] for item in order["items"]] == [
        "Data Appending Enrichment",
        "Prospect List Building",
    ]

    admin_token = register_admin(client)
    approved = client.put(
        f"/api/admin/orders/{order_id}",
        json={"status": "approved"},
        headers=auth_header(admin_token),
    )
    assert approved.status_code == 200
    assert client.get("/api/orders", headers=auth_header(token)).json()[0]["status"] == "approved"
