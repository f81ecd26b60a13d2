"""Cart item management — commands, handler and the add-item flow.

Adding a product the cart does not hold yet needs a catalogue and a price
lookup, which are awaited before the command is processed. The snapshot
they produce travels in the command, so the handler itself stays synchronous.
"""

from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart, cart_for, find_cart
from ordering.domain import cart_locks, logger, ordering
from ordering.item_lookup import lookup_item
from shared.config import get_settings


@ordering.command(part_of="Cart")
class AddToCart:
    """Add a product to the cart, or overwrite its quantity if already present.

    ``product_name``, ``product_brand`` and ``price`` carry the snapshot for
    a product that is new to the cart.
    """

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)
    product_name = String(max_length=255)
    product_brand = String(max_length=255)
    price = Float(min_value=0.0)


@ordering.command(part_of="Cart")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)


@ordering.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        cart = cart_for(command.user_id)
        logger.info(
            "cart_item_adding",
            user_id=command.user_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )

        if cart.find_item(command.product_id) is not None:
            cart.update_item_quantity(command.product_id, command.quantity)
        else:
            cart.add_item(
                product_id=command.product_id,
                product_name=command.product_name,
                product_brand=command.product_brand,
                price=command.price,
                quantity=command.quantity,
            )
        current_domain.repository_for(Cart).add(cart)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart = cart_for(command.user_id)
        logger.info(
            "cart_item_quantity_updating",
            user_id=command.user_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )
        cart.update_item_quantity(command.product_id, command.quantity)
        current_domain.repository_for(Cart).add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = cart_for(command.user_id)
        logger.info("cart_item_removing", user_id=command.user_id, product_id=command.product_id)
        cart.remove_item(command.product_id)
        current_domain.repository_for(Cart).add(cart)


async def add_to_cart(user_id: str, product_id: str, quantity: int) -> None:
    """Add ``product_id`` to the user's cart, pricing it first if it is new to the cart."""
    async with cart_locks.hold(user_id):
        cart = find_cart(user_id)
        command = AddToCart(user_id=user_id, product_id=product_id, quantity=quantity)

        if cart is None or cart.find_item(product_id) is None:
            currency = cart.currency if cart is not None else get_settings().default_currency
            product, price = await lookup_item(product_id, currency)
            command = AddToCart(
                user_id=user_id,
                product_id=product_id,
                quantity=quantity,
                product_name=product.name,
                product_brand=product.brand,
                price=price.price,
            )

        current_domain.process(command, asynchronous=False)
