"""Integration tests for Cart API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import cart_router, order_router
from ordering.cart.cart import Cart
from ordering.domain import ordering
from ordering.order.order import Order
from pricing.api import router as pricing_router
from pricing.domain import pricing
from products.memory_adapter import get_catalogue
from protean.utils.globals import current_domain
from shared.api import register_exception_handlers, route_to_domains


@pytest.fixture()
def client():
    app = FastAPI()
    route_to_domains(app, {"/pricing": pricing, "/carts": ordering, "/orders": ordering})
    register_exception_handlers(app)
    app.include_router(pricing_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    return TestClient(app)


@pytest.fixture()
def stocked(client):
    get_catalogue().add_product("prod-001", name="Widget", brand="Acme")
    response = client.put(
        "/pricing/prod-001",
        json={"list_prices": [{"price": 10.0, "currency": "USD", "zone": "global"}]},
    )
    assert response.status_code == 200


def _add_item(client, user_id="user-001", product_id="prod-001", quantity=1):
    response = client.post(f"/carts/{user_id}/items/{product_id}", json={"quantity": quantity})
    assert response.status_code == 200
    return response


class TestCartItemEndpoints:
    def test_add_item_and_get_cart(self, client, stocked):
        _add_item(client, quantity=2)

        response = client.get("/carts/user-001")
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 20.0
        assert body["items"][0]["product_name"] == "Widget"
        assert body["items"][0]["quantity"] == 2

    def test_update_item_quantity(self, client, stocked):
        _add_item(client)
        response = client.put("/carts/user-001/items/prod-001", json={"quantity": 3})
        assert response.status_code == 200
        assert current_domain.repository_for(Cart).get("user-001").total == 30.0

    def test_remove_item(self, client, stocked):
        _add_item(client)
        response = client.delete("/carts/user-001/items/prod-001")
        assert response.status_code == 200
        assert current_domain.repository_for(Cart).get("user-001").items == []

    def test_unknown_product(self, client):
        response = client.post("/carts/user-001/items/ghost", json={"quantity": 1})
        assert response.status_code == 404
        assert response.json()["error"] == "ProductNotFound"

    def test_missing_item(self, client):
        response = client.delete("/carts/user-001/items/ghost")
        assert response.status_code == 404
        assert response.json()["error"] == "ItemNotFound"

    def test_negative_quantity_rejected(self, client, stocked):
        response = client.post("/carts/user-001/items/prod-001", json={"quantity": -1})
        assert response.status_code == 422

    def test_unknown_cart(self, client):
        response = client.get("/carts/nobody")
        assert response.status_code == 404
        assert response.json() == {
            "error": "CartNotFound",
            "kind": "not_found",
            "message": "Cart not found",
            "details": {"user_id": ["Cart not found"]},
        }


class TestCartDetailsEndpoints:
    def test_set_addresses(self, client, address_payload):
        assert client.put("/carts/user-001/billing-address", json=address_payload).status_code == 200
        assert client.put("/carts/user-001/shipping-address", json=address_payload).status_code == 200

        body = client.get("/carts/user-001").json()
        assert body["billing_address"]["city"] == "Springfield"
        assert body["shipping_address"]["postal_code"] == "62701"

    def test_invalid_address(self, client, address_payload):
        address_payload["street"] = "   "
        del address_payload["city"]
        response = client.put("/carts/user-001/billing-address", json=address_payload)
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "AddressNotValid"
        assert "street" in body["message"]
        assert "city" in body["message"]

    def test_update_email(self, client):
        assert client.put("/carts/user-001/email", json={"email": "jane@shop.io"}).status_code == 200
        assert client.get("/carts/user-001").json()["email"] == "jane@shop.io"

    def test_invalid_email(self, client):
        response = client.put("/carts/user-001/email", json={"email": "jane"})
        assert response.status_code == 400
        assert response.json()["error"] == "EmailNotValid"

    def test_clear(self, client, stocked):
        _add_item(client)
        assert client.delete("/carts/user-001").status_code == 200
        assert client.get("/carts/user-001").json()["items"] == []


class TestCheckoutEndpoint:
    def test_checkout(self, client, stocked, address_payload):
        _add_item(client, quantity=2)
        client.put("/carts/user-001/billing-address", json=address_payload)
        client.put("/carts/user-001/email", json={"email": "jane@shop.io"})

        response = client.post("/carts/user-001/checkout")

        assert response.status_code == 201
        order_id = response.json()["order_id"]
        order = current_domain.repository_for(Order).get(order_id)
        assert order.total == 20.0
        cart = client.get("/carts/user-001").json()
        assert cart["items"] == []
        assert cart["previous_order_ids"] == [order_id]

    def test_checkout_empty_cart(self, client):
        response = client.post("/carts/user-001/checkout")
        assert response.status_code == 400
        assert response.json()["error"] == "EmptyItems"

