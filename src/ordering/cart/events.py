"""Domain events for the Cart aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart with its price captured at that moment."""

    __version__ = 1

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    price = Float(required=True)


@ordering.event(part_of="Cart")
class CartQuantityUpdated:
    """The quantity of a cart item was changed."""

    __version__ = 1

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartItemRemoved:
    """An item was removed from the cart."""

    __version__ = 1

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.event(part_of="Cart")
class CartAddressUpdated:
    """The billing or shipping address of the cart was set."""

    __version__ = 1

    user_id = Identifier(required=True)
    address_type = String(required=True, max_length=20)  # "billing" or "shipping"


@ordering.event(part_of="Cart")
class CartEmailUpdated:
    __version__ = 1

    user_id = Identifier(required=True)


@ordering.event(part_of="Cart")
class CartCleared:
    """Items and addresses were removed from the cart."""

    __version__ = 1

    user_id = Identifier(required=True)


@ordering.event(part_of="Cart")
class CartCheckedOut:
    """The cart was converted into a new order and cleared."""

    __version__ = 1

    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    checked_out_at = DateTime(required=True)
