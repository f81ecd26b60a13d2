"""Address value object shared by carts and orders."""

from protean.exceptions import ValidationError
from protean.fields import String

from ordering.domain import ordering
from shared.exceptions import AddressNotValid


@ordering.value_object
class Address:
    """A postal address captured on a cart or order.

    Addresses are snapshots: an order keeps the address it was created with
    even if the cart it came from is later given a different one.
    """

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state_or_region = String(required=True, max_length=100)
    country = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    name = String(max_length=255)
    phone_number = String(max_length=50)


def parse_address(data: dict) -> Address:
    """Build an Address from raw input, reporting structural problems as AddressNotValid."""
    cleaned = {key: value.strip() if isinstance(value, str) else value for key, value in data.items()}
    cleaned = {key: value for key, value in cleaned.items() if value not in (None, "")}
    try:
        return Address(**cleaned)
    except ValidationError as exc:
        raise AddressNotValid(f"Invalid address: {', '.join(sorted(exc.messages))}") from exc


def address_to_dict(address: Address | None) -> dict | None:
    return address.to_dict() if address is not None else None
