"""Order creation — command, handler and the helper checkout shares with them."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.address import Address, parse_address
from ordering.domain import logger, ordering
from ordering.order.order import Order
from shared.config import CURRENCY_DEFAULT


@ordering.command(part_of="Order")
class InitializeOrder:
    """Copy a checked-out cart into the order addressed by ``order_id``.

    The order is created on first use. The total is stored as given.
    """

    order_id = Identifier(required=True)
    user_id = Identifier(default="anonymous")
    email = String(max_length=254)
    items = Text()  # JSON array of line item dicts
    billing_address = Text()  # JSON: address dict
    shipping_address = Text()  # JSON: address dict
    total = Float(default=0.0)
    currency = String(max_length=10, default=CURRENCY_DEFAULT)


def initialize_order(
    order_id: str,
    user_id: str,
    email: str | None,
    items: list[dict],
    billing_address: Address | None,
    shipping_address: Address | None,
    total: float,
    currency: str,
) -> str:
    """Create (or overwrite while New) the order ``order_id`` and stage it in the repository."""
    repo = current_domain.repository_for(Order)
    try:
        order = repo.get(order_id)
    except ObjectNotFoundError:
        order = Order.create(order_id)

    logger.info("order_initializing", order_id=order_id, user_id=user_id, item_count=len(items))
    order.initialize(
        user_id=user_id,
        email=email,
        items=items,
        billing_address=billing_address,
        shipping_address=shipping_address,
        total=total,
        currency=currency,
    )
    repo.add(order)
    return order.order_id


def _optional_address(raw: str | None) -> Address | None:
    return parse_address(json.loads(raw)) if raw else None


@ordering.command_handler(part_of=Order)
class InitializeOrderHandler:
    @handle(InitializeOrder)
    def initialize_order(self, command):
        return initialize_order(
            order_id=command.order_id,
            user_id=command.user_id,
            email=command.email,
            items=json.loads(command.items) if command.items else [],
            billing_address=_optional_address(command.billing_address),
            shipping_address=_optional_address(command.shipping_address),
            total=command.total,
            currency=command.currency,
        )
