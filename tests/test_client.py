"""
Tests for the HTTP client, driven against the app through TestClient.
"""

import asyncio

import pytest

from leadprovider_api.app.services.auth_service import AuthService
from leadprovider_client import LeadProviderAPI


@pytest.fixture
def api(client):
    return LeadProviderAPI(base_url=str(client.base_url), session=client)


def test_health(api):
    assert api.health()


def test_session_without_login(api):
    assert api.check_session() == {"loggedIn": False}


def test_register_keeps_token(api):
    token, error = api.register("a@x.com", "pw123")
    assert error is None
    assert api.token == token
    assert api.check_session()["email"] == "a@x.com"
    api.logout()
    assert api.check_session() == {"loggedIn": False}


def test_errors_carry_status_and_message(api):
    token, error = api.login("nobody@x.com", "pw")
    assert token is None
    assert error == {"status_code": 401, "message": "Invalid credentials"}


def test_cart_and_orders(api):
    api.register("a@x.com", "pw123")
    services, _ = api.list_services()
    assert len(services) == 7

    cart, error = api.add_to_cart(3)
    assert error is None
    assert [item["id"] for item in cart] == [3]
    api.add_to_cart(5)
    cart, _ = api.remove_from_cart(5)
    assert [item["id"] for item in cart] == [3]

    order_id, error = api.place_order()
    assert error is None
    orders, _ = api.list_orders()
    assert orders[0]["id"] == order_id

    order_id, error = api.place_order()
    assert order_id is None
    assert error["status_code"] == 400


def test_client_held_cart_and_admin_review(api, client):
    api.register("a@x.com", "pw123")
    order_id, _ = api.place_order(items=[{"id": 1, "title": "Data Appending Enrichment"}])

    admin = LeadProviderAPI(base_url=str(client.base_url), session=client)
    admin.register("admin@x.com", "adminpw")
    orders, error = admin.list_all_orders()
    assert orders == []
    assert error["status_code"] == 403

    asyncio.run(AuthService.set_role("admin@x.com", "admin"))
    admin.login("admin@x.com", "adminpw")
    orders, error = admin.list_all_orders()
    assert error is None
    assert orders[0]["user_email"] == "a@x.com"

    order, error = admin.set_order_status(order_id, "rejected")
    assert error is None
    assert order["status"] == "rejected"
    mine, _ = api.list_orders()
    assert mine[0]["status"] == "rejected"
