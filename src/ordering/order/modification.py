"""Order modification — commands, handler and the add-item flow.

Handles email and address changes and item additions, removals and quantity
updates. All modifications are only allowed while the order is New.
"""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.address import parse_address
from ordering.domain import logger, order_locks, ordering
from ordering.item_lookup import lookup_item
from ordering.order.order import Order, load_order


@ordering.command(part_of="Order")
class UpdateOrderEmail:
    order_id = Identifier(required=True)
    email = String(required=True, max_length=254)


@ordering.command(part_of="Order")
class UpdateOrderBillingAddress:
    order_id = Identifier(required=True)
    address = Text(required=True)  # JSON: address dict


@ordering.command(part_of="Order")
class UpdateOrderShippingAddress:
    order_id = Identifier(required=True)
    address = Text(required=True)  # JSON: address dict


@ordering.command(part_of="Order")
class AddOrderItem:
    """Add a product to an order, or increase its quantity if already present.

    ``product_name``, ``product_brand`` and ``price`` carry the snapshot for
    a product that is new to the order.
    """

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)
    product_name = String(max_length=255)
    product_brand = String(max_length=255)
    price = Float(min_value=0.0)


@ordering.command(part_of="Order")
class RemoveOrderItem:
    order_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command(part_of="Order")
class UpdateOrderItemQuantity:
    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)


@ordering.command_handler(part_of=Order)
class ModifyOrderHandler:
    @handle(UpdateOrderEmail)
    def update_email(self, command):
        order = load_order(command.order_id)
        logger.info("order_email_updating", order_id=command.order_id)
        order.update_email(command.email)
        current_domain.repository_for(Order).add(order)

    @handle(UpdateOrderBillingAddress)
    def update_billing_address(self, command):
        order = load_order(command.order_id)
        logger.info("order_billing_address_updating", order_id=command.order_id)
        order.update_billing_address(parse_address(json.loads(command.address)))
        current_domain.repository_for(Order).add(order)

    @handle(UpdateOrderShippingAddress)
    def update_shipping_address(self, command):
        order = load_order(command.order_id)
        logger.info("order_shipping_address_updating", order_id=command.order_id)
        order.update_shipping_address(parse_address(json.loads(command.address)))
        current_domain.repository_for(Order).add(order)

    @handle(AddOrderItem)
    def add_item(self, command):
        order = load_order(command.order_id)
        logger.info(
            "order_item_adding",
            order_id=command.order_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )

        if order.find_item(command.product_id) is not None:
            order.increase_item_quantity(command.product_id, command.quantity)
        else:
            order.add_item(
                product_id=command.product_id,
                product_name=command.product_name,
                product_brand=command.product_brand,
                price=command.price,
                quantity=command.quantity,
            )
        current_domain.repository_for(Order).add(order)

    @handle(RemoveOrderItem)
    def remove_item(self, command):
        order = load_order(command.order_id)
        logger.info("order_item_removing", order_id=command.order_id, product_id=command.product_id)
        order.remove_item(command.product_id)
        current_domain.repository_for(Order).add(order)

    @handle(UpdateOrderItemQuantity)
    def update_item_quantity(self, command):
        order = load_order(command.order_id)
        logger.info(
            "order_item_quantity_updating",
            order_id=command.order_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )
        order.update_item_quantity(command.product_id, command.quantity)
        current_domain.repository_for(Order).add(order)


async def add_order_item(order_id: str, product_id: str, quantity: int) -> None:
    """Add ``product_id`` to a New order, pricing it first if the order does not hold it yet."""
    async with order_locks.hold(order_id):
        order = load_order(order_id)
        # Status is checked before any catalogue or pricing lookups
        order.assert_items_modifiable()

        command = AddOrderItem(order_id=order_id, product_id=product_id, quantity=quantity)
        if order.find_item(product_id) is None:
            product, price = await lookup_item(product_id, order.currency)
            command = AddOrderItem(
                order_id=order_id,
                product_id=product_id,
                quantity=quantity,
                product_name=product.name,
                product_brand=product.brand,
                price=price.price,
            )

        current_domain.process(command, asynchronous=False)
