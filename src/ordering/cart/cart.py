"""Cart aggregate — one per user, accumulates items until checkout.

The cart is created the first time a user touches it and is never deleted:
checkout clears it and records the new order id in its history. Item prices
are snapshots taken when the item was added and are not re-resolved later.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject
from protean.utils.globals import current_domain

from ordering.address import Address
from ordering.cart.events import (
    CartAddressUpdated,
    CartCheckedOut,
    CartCleared,
    CartEmailUpdated,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)
from ordering.domain import ordering
from shared.config import get_settings
from shared.email import validate_email
from shared.exceptions import BillingAddressNotSet, EmptyEmail, EmptyItems, ItemNotFound


@ordering.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    product_brand = String(max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=0)


@ordering.aggregate
class Cart:
    user_id = Identifier(identifier=True, required=True)
    email = String(max_length=254)
    items = HasMany(CartItem)
    billing_address = ValueObject(Address)
    shipping_address = ValueObject(Address)
    total = Float(default=0.0)
    currency = String(required=True, max_length=10)
    previous_order_ids = Text()  # JSON array of order ids
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id, currency=None):
        now = datetime.now(UTC)
        return cls(
            user_id=str(user_id),
            currency=currency or get_settings().default_currency,
            total=0.0,
            previous_order_ids=json.dumps([]),
            created_at=now,
            updated_at=now,
        )

    def _recalculate_total(self):
        self.total = sum((item.price * item.quantity for item in self.items), 0.0)
        self.updated_at = datetime.now(UTC)

    def find_item(self, product_id) -> CartItem | None:
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def order_history(self) -> list[str]:
        return json.loads(self.previous_order_ids) if self.previous_order_ids else []

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, product_name, product_brand, price, quantity):
        """Append a newly priced item."""
        item = CartItem(
            product_id=product_id,
            product_name=product_name,
            product_brand=product_brand,
            price=price,
            quantity=quantity,
        )
        self.add_items(item)
        self._recalculate_total()

        self.raise_(
            CartItemAdded(
                user_id=self.user_id,
                product_id=str(product_id),
                quantity=quantity,
                price=price,
            )
        )

    def update_item_quantity(self, product_id, quantity):
        """Overwrite the quantity of an existing item."""
        item = self.find_item(product_id)
        if item is None:
            raise ItemNotFound(product_id)

        previous_quantity = item.quantity
        item.quantity = quantity
        self._recalculate_total()

        self.raise_(
            CartQuantityUpdated(
                user_id=self.user_id,
                product_id=str(item.product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        item = self.find_item(product_id)
        if item is None:
            raise ItemNotFound(product_id)

        self.remove_items(item)
        self._recalculate_total()

        self.raise_(CartItemRemoved(user_id=self.user_id, product_id=str(item.product_id)))

    # -------------------------------------------------------------------
    # Contact details
    # -------------------------------------------------------------------
    def set_billing_address(self, address: Address):
        self.billing_address = address
        self.updated_at = datetime.now(UTC)
        self.raise_(CartAddressUpdated(user_id=self.user_id, address_type="billing"))

    def set_shipping_address(self, address: Address):
        self.shipping_address = address
        self.updated_at = datetime.now(UTC)
        self.raise_(CartAddressUpdated(user_id=self.user_id, address_type="shipping"))

    def set_email(self, email):
        """Store the email as given; it is checked at checkout."""
        self.email = email
        self.updated_at = datetime.now(UTC)
        self.raise_(CartEmailUpdated(user_id=self.user_id))

    def update_email(self, email):
        """Store the email after checking it is well formed."""
        self.set_email(validate_email(email))

    # -------------------------------------------------------------------
    # Cart lifecycle
    # -------------------------------------------------------------------
    def clear(self):
        """Empty items and addresses. Email and order history are kept."""
        for item in list(self.items):
            self.remove_items(item)
        self.billing_address = None
        self.shipping_address = None
        self.total = 0.0
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(user_id=self.user_id))

    def validate_for_checkout(self):
        if not self.items:
            raise EmptyItems()
        if self.billing_address is None:
            raise BillingAddressNotSet()
        if self.email is None:
            raise EmptyEmail()

    def order_created(self, order_id):
        """Clear the cart and remember the order it produced."""
        self.clear()
        self.previous_order_ids = json.dumps(self.order_history() + [str(order_id)])

        self.raise_(
            CartCheckedOut(
                user_id=self.user_id,
                order_id=str(order_id),
                checked_out_at=datetime.now(UTC),
            )
        )


def find_cart(user_id) -> Cart | None:
    try:
        return current_domain.repository_for(Cart).get(user_id)
    except ObjectNotFoundError:
        return None


def cart_for(user_id) -> Cart:
    """Load the user's cart, or start a new one on first access."""
    cart = find_cart(user_id)
    return cart if cart is not None else Cart.create(user_id)
