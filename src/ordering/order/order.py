"""Order aggregate — created at checkout, then moves through a small lifecycle.

State Machine (3 states):
    NEW → SHIPPED
    NEW → CANCELLED

Shipped and Cancelled are terminal. Every change to an order's contents is
only allowed while it is New; any other request fails with ActionNotAllowed
carrying the current status.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject
from protean.utils.globals import current_domain

from ordering.address import Address
from ordering.domain import ordering
from ordering.order.events import (
    OrderAddressUpdated,
    OrderCancelled,
    OrderEmailUpdated,
    OrderInitialized,
    OrderItemAdded,
    OrderItemQuantityUpdated,
    OrderItemRemoved,
    OrderShipped,
)
from shared.config import CURRENCY_DEFAULT
from shared.email import validate_email
from shared.exceptions import (
    ActionNotAllowed,
    BillingAddressNotSet,
    EmptyEmail,
    EmptyItems,
    ItemNotFound,
    OrderNotFound,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    NEW = "New"
    SHIPPED = "Shipped"
    CANCELLED = "Cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.NEW: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A line item with the product details and unit price captured when it was added."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    product_brand = String(max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_id = Identifier(identifier=True, required=True)
    user_id = Identifier(default="anonymous")
    email = String(max_length=254)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.NEW.value,
    )
    items = HasMany(OrderItem)
    billing_address = ValueObject(Address)
    shipping_address = ValueObject(Address)
    total = Float(default=0.0)
    currency = String(max_length=10, default=CURRENCY_DEFAULT)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, order_id):
        now = datetime.now(UTC)
        return cls(
            order_id=str(order_id),
            status=OrderStatus.NEW.value,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Guards
    # -------------------------------------------------------------------
    def _assert_modifiable(self):
        current = OrderStatus(self.status)
        if current != OrderStatus.NEW:
            raise ActionNotAllowed(current)

    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise ActionNotAllowed(current)

    def _recalculate_total(self):
        self.total = sum((item.price * item.quantity for item in self.items), 0.0)
        self.updated_at = datetime.now(UTC)

    def find_item(self, product_id) -> OrderItem | None:
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Initialization
    # -------------------------------------------------------------------
    def initialize(self, user_id, email, items, billing_address, shipping_address, total, currency):
        """Copy checkout data into the order.

        ``items`` are dicts with product_id, product_name, product_brand,
        price and quantity. Allowed for as long as the order is New, so a
        repeated request overwrites the previous contents.
        """
        self._assert_modifiable()

        for existing in list(self.items):
            self.remove_items(existing)
        for item in items:
            self.add_items(OrderItem(**item))

        self.user_id = user_id
        self.email = email
        self.billing_address = billing_address
        self.shipping_address = shipping_address
        self.total = total
        self.currency = currency
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            OrderInitialized(
                order_id=self.order_id,
                user_id=self.user_id,
                item_count=len(items),
                total=self.total,
                currency=self.currency,
                initialized_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Order modification (only in NEW state)
    # -------------------------------------------------------------------
    def assert_items_modifiable(self):
        """Check up front, before any lookups are made for a new item."""
        self._assert_modifiable()

    def add_item(self, product_id, product_name, product_brand, price, quantity):
        """Append a newly priced item."""
        self._assert_modifiable()

        self.add_items(
            OrderItem(
                product_id=product_id,
                product_name=product_name,
                product_brand=product_brand,
                price=price,
                quantity=quantity,
            )
        )
        self._recalculate_total()

        self.raise_(
            OrderItemAdded(
                order_id=self.order_id,
                product_id=str(product_id),
                quantity=quantity,
                price=price,
                new_total=self.total,
            )
        )

    def increase_item_quantity(self, product_id, quantity):
        """Add ``quantity`` to an existing item."""
        self._assert_modifiable()

        item = self.find_item(product_id)
        if item is None:
            raise ItemNotFound(product_id)
        self._set_quantity(item, item.quantity + quantity)

    def update_item_quantity(self, product_id, quantity):
        """Overwrite the quantity of an existing item."""
        self._assert_modifiable()

        item = self.find_item(product_id)
        if item is None:
            raise ItemNotFound(product_id)
        self._set_quantity(item, quantity)

    def _set_quantity(self, item: OrderItem, quantity):
        previous_quantity = item.quantity
        item.quantity = quantity
        self._recalculate_total()

        self.raise_(
            OrderItemQuantityUpdated(
                order_id=self.order_id,
                product_id=str(item.product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
                new_total=self.total,
            )
        )

    def remove_item(self, product_id):
        self._assert_modifiable()

        item = self.find_item(product_id)
        if item is None:
            raise ItemNotFound(product_id)

        self.remove_items(item)
        self._recalculate_total()

        self.raise_(
            OrderItemRemoved(
                order_id=self.order_id,
                product_id=str(item.product_id),
                new_total=self.total,
            )
        )

    def update_email(self, email):
        self._assert_modifiable()

        self.email = validate_email(email)
        self.updated_at = datetime.now(UTC)
        self.raise_(OrderEmailUpdated(order_id=self.order_id))

    def update_billing_address(self, address: Address):
        self._assert_modifiable()

        self.billing_address = address
        self.updated_at = datetime.now(UTC)
        self.raise_(OrderAddressUpdated(order_id=self.order_id, address_type="billing"))

    def update_shipping_address(self, address: Address):
        self._assert_modifiable()

        self.shipping_address = address
        self.updated_at = datetime.now(UTC)
        self.raise_(OrderAddressUpdated(order_id=self.order_id, address_type="shipping"))

    # -------------------------------------------------------------------
    # Order lifecycle transitions
    # -------------------------------------------------------------------
    def ship(self):
        """Ship a New order that has items, a billing address and an email."""
        self._assert_can_transition(OrderStatus.SHIPPED)

        if not self.items:
            raise EmptyItems()
        if self.billing_address is None:
            raise BillingAddressNotSet()
        if self.email is None:
            raise EmptyEmail()

        self.status = OrderStatus.SHIPPED.value
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(OrderShipped(order_id=self.order_id, user_id=self.user_id, shipped_at=now))

    def cancel(self):
        """Cancel a New order. No other precondition applies."""
        self._assert_can_transition(OrderStatus.CANCELLED)

        self.status = OrderStatus.CANCELLED.value
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(OrderCancelled(order_id=self.order_id, user_id=self.user_id, cancelled_at=now))


def load_order(order_id) -> Order:
    """Fetch a stored order, raising OrderNotFound for an unknown id."""
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError as exc:
        raise OrderNotFound(order_id) from exc
