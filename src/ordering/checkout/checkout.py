"""Checkout — turns a user's cart into a new order.

Flow:
    1. The cart is checked: items, billing address and email must be present
    2. A fresh order id is generated and the order is initialized from the cart
    3. The cart is cleared and the order id appended to its history
    4. Recommendations for the user are refreshed in the background

Steps 2 and 3 run in one unit of work. If the order cannot be created the
whole unit is rolled back, the cart is left exactly as it was and the caller
gets OrderCreate with the underlying error chained.
"""

import uuid

from protean import handle
from protean.exceptions import ValidationError as ProteanValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart, cart_for
from ordering.checkout.recommendations import refresh_recommendations
from ordering.domain import cart_locks, logger, ordering
from ordering.order.creation import initialize_order
from shared.exceptions import OrderCreate, ShoppingError


@ordering.command(part_of="Cart")
class CheckoutCart:
    user_id = Identifier(required=True)


def generate_order_id() -> str:
    return str(uuid.uuid4())


def order_lines_from_cart(cart: Cart) -> list[dict]:
    return [
        {
            "product_id": item.product_id,
            "product_name": item.product_name,
            "product_brand": item.product_brand,
            "price": item.price,
            "quantity": item.quantity,
        }
        for item in cart.items
    ]


@ordering.command_handler(part_of=Cart)
class CheckoutHandler:
    @handle(CheckoutCart)
    def checkout(self, command):
        cart = cart_for(command.user_id)
        cart.validate_for_checkout()

        order_id = generate_order_id()
        log = logger.bind(user_id=cart.user_id, order_id=order_id)
        log.info("checkout_started", item_count=len(cart.items), total=cart.total)

        try:
            initialize_order(
                order_id=order_id,
                user_id=cart.user_id,
                email=cart.email,
                items=order_lines_from_cart(cart),
                billing_address=cart.billing_address,
                shipping_address=cart.shipping_address,
                total=cart.total,
                currency=cart.currency,
            )
        except (ShoppingError, ProteanValidationError) as exc:
            log.warning("checkout_order_failed", error=str(exc), error_type=type(exc).__name__)
            raise OrderCreate() from exc

        cart.order_created(order_id)
        current_domain.repository_for(Cart).add(cart)
        log.info("checkout_completed")
        return order_id


async def checkout(user_id: str) -> str:
    """Check out the user's cart and return the new order id."""
    async with cart_locks.hold(user_id):
        order_id = current_domain.process(CheckoutCart(user_id=user_id), asynchronous=False)

    refresh_recommendations(user_id)
    return order_id
