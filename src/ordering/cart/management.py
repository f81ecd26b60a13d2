"""Cart management — addresses, email, clearing and retrieval."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.address import parse_address
from ordering.cart.cart import Cart, cart_for, find_cart
from ordering.domain import logger, ordering
from shared.exceptions import CartNotFound


@ordering.command(part_of="Cart")
class SetBillingAddress:
    user_id = Identifier(required=True)
    address = Text(required=True)  # JSON: address dict


@ordering.command(part_of="Cart")
class SetShippingAddress:
    user_id = Identifier(required=True)
    address = Text(required=True)  # JSON: address dict


@ordering.command(part_of="Cart")
class SetEmail:
    """Store an email without checking it; checkout reads it later."""

    user_id = Identifier(required=True)
    email = String(required=True, max_length=254)


@ordering.command(part_of="Cart")
class UpdateEmail:
    """Store an email after checking that it is well formed."""

    user_id = Identifier(required=True)
    email = String(required=True, max_length=254)


@ordering.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(SetBillingAddress)
    def set_billing_address(self, command):
        cart = cart_for(command.user_id)
        logger.info("cart_billing_address_updating", user_id=command.user_id)
        cart.set_billing_address(parse_address(json.loads(command.address)))
        current_domain.repository_for(Cart).add(cart)

    @handle(SetShippingAddress)
    def set_shipping_address(self, command):
        cart = cart_for(command.user_id)
        logger.info("cart_shipping_address_updating", user_id=command.user_id)
        cart.set_shipping_address(parse_address(json.loads(command.address)))
        current_domain.repository_for(Cart).add(cart)

    @handle(SetEmail)
    def set_email(self, command):
        cart = cart_for(command.user_id)
        cart.set_email(command.email)
        current_domain.repository_for(Cart).add(cart)

    @handle(UpdateEmail)
    def update_email(self, command):
        cart = cart_for(command.user_id)
        logger.info("cart_email_updating", user_id=command.user_id)
        cart.update_email(command.email)
        current_domain.repository_for(Cart).add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = cart_for(command.user_id)
        logger.info("cart_clearing", user_id=command.user_id)
        cart.clear()
        current_domain.repository_for(Cart).add(cart)


def get_cart(user_id) -> Cart:
    """Read a cart without creating it, raising CartNotFound for a user who never had one."""
    cart = find_cart(user_id)
    if cart is None:
        raise CartNotFound(user_id)
    return cart
