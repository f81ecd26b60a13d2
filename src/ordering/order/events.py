"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderInitialized:
    """An order's contents were copied in from a checkout request."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    currency = String(required=True, max_length=10)
    initialized_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderItemAdded:
    __version__ = 1

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    price = Float(required=True)
    new_total = Float(required=True)


@ordering.event(part_of="Order")
class OrderItemQuantityUpdated:
    __version__ = 1

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    new_total = Float(required=True)


@ordering.event(part_of="Order")
class OrderItemRemoved:
    __version__ = 1

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    new_total = Float(required=True)


@ordering.event(part_of="Order")
class OrderEmailUpdated:
    __version__ = 1

    order_id = Identifier(required=True)


@ordering.event(part_of="Order")
class OrderAddressUpdated:
    __version__ = 1

    order_id = Identifier(required=True)
    address_type = String(required=True, max_length=20)  # "billing" or "shipping"


@ordering.event(part_of="Order")
class OrderShipped:
    """The order left the New state for Shipped."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    shipped_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """The order left the New state for Cancelled."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    cancelled_at = DateTime(required=True)
