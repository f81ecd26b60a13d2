"""Typed errors shared by the Pricing and Ordering contexts.

Every failure an operation can report is a concrete subclass of one of four
kinds, so callers can branch on the kind (NotFound, Validation,
StateConflict, Upstream) or on the exact variant. The kinds sit on top of
Protean's own exceptions, so a NotFound is also an ``ObjectNotFoundError``
and a Validation error is also a Protean ``ValidationError``. Errors carry a
``messages`` mapping shaped like ``{"field": ["text"]}``.
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError
from protean.exceptions import ValidationError as ProteanValidationError


class ShoppingError(Exception):
    kind = "error"
    field = "error"
    default_message = "Operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__({self.field: [self.message]})
        self.messages = {self.field: [self.message]}

    def __str__(self) -> str:
        return self.message

    @property
    def code(self) -> str:
        return type(self).__name__


# ---------------------------------------------------------------------------
# Kinds
# ---------------------------------------------------------------------------
class NotFoundError(ShoppingError, ObjectNotFoundError):
    kind = "not_found"


class ValidationError(ShoppingError, ProteanValidationError):
    kind = "validation"


class StateConflictError(ShoppingError, InvalidOperationError):
    kind = "state_conflict"


class UpstreamError(ShoppingError):
    kind = "upstream"


# ---------------------------------------------------------------------------
# NotFound variants
# ---------------------------------------------------------------------------
class _ProductScopedNotFound(NotFoundError):
    field = "product_id"

    def __init__(self, product_id: str):
        self.product_id = str(product_id)
        super().__init__()


class ProductNotFound(_ProductScopedNotFound):
    default_message = "Product not found"


class PricingNotFound(_ProductScopedNotFound):
    default_message = "Pricing not found"


class ItemNotFound(_ProductScopedNotFound):
    default_message = "Item not found"


class CartNotFound(NotFoundError):
    field = "user_id"
    default_message = "Cart not found"

    def __init__(self, user_id: str):
        self.user_id = str(user_id)
        super().__init__()


class OrderNotFound(NotFoundError):
    field = "order_id"
    default_message = "Order not found"

    def __init__(self, order_id: str):
        self.order_id = str(order_id)
        super().__init__()


# ---------------------------------------------------------------------------
# Validation variants
# ---------------------------------------------------------------------------
class EmptyItems(ValidationError):
    field = "items"
    default_message = "Empty items"


class EmptyEmail(ValidationError):
    field = "email"
    default_message = "Email not set"


class BillingAddressNotSet(ValidationError):
    field = "billing_address"
    default_message = "Billing address not set"


class EmailNotValid(ValidationError):
    field = "email"
    default_message = "Invalid email"


class AddressNotValid(ValidationError):
    field = "address"
    default_message = "Invalid address"


# ---------------------------------------------------------------------------
# StateConflict variants
# ---------------------------------------------------------------------------
class ActionNotAllowed(StateConflictError):
    field = "status"

    def __init__(self, status):
        # Accepts an OrderStatus member or its raw value
        self.status = getattr(status, "value", status)
        super().__init__(f"Can not update order with status {self.status}")


# ---------------------------------------------------------------------------
# Upstream variants
# ---------------------------------------------------------------------------
class OrderCreate(UpstreamError):
    field = "order"
    default_message = "Failed to create order"
