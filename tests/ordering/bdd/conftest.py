"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.address import Address
from ordering.order.events import OrderCancelled, OrderShipped
from ordering.order.order import Order
from pytest_bdd import given, parsers, then

ADDRESS = dict(street="1 Main St", city="Springfield", state_or_region="IL", country="US", postal_code="62701")

# Map event name strings to classes for dynamic lookup
_ORDER_EVENT_CLASSES = {
    "OrderShipped": OrderShipped,
    "OrderCancelled": OrderCancelled,
}


def _new_order(email="jane@shop.io"):
    order = Order.create("order-001")
    order.initialize(
        user_id="user-001",
        email=email,
        items=[
            {
                "product_id": "prod-001",
                "product_name": "Widget",
                "product_brand": "Acme",
                "price": 10.0,
                "quantity": 2,
            }
        ],
        billing_address=Address(**ADDRESS),
        shipping_address=None,
        total=20.0,
        currency="USD",
    )
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps — Order
# ---------------------------------------------------------------------------
@given("a new order with items, a billing address and an email", target_fixture="order")
def new_order():
    return _new_order()


@given("a new order without an email", target_fixture="order")
def new_order_without_email():
    return _new_order(email=None)


@given("a shipped order", target_fixture="order")
def shipped_order():
    order = _new_order()
    order.ship()
    order._events.clear()
    return order


@given("a cancelled order", target_fixture="order")
def cancelled_order():
    order = _new_order()
    order.cancel()
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then(parsers.cfparse("an {event_type} event is raised"))
def order_event_raised(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in order._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in order._events]}"
