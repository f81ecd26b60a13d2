"""Ordering bounded context — Shopping Cart and Order Management.

Handles the per-user shopping cart, the order lifecycle, and the checkout
flow that converts a cart into an order.
"""

import structlog
from protean.domain import Domain

from shared.concurrency import BackgroundTasks, KeyedLocks

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)

# Mutations of one cart (keyed by user id) or one order run one at a time
cart_locks = KeyedLocks("cart")
order_locks = KeyedLocks("order")

background = BackgroundTasks("ordering")
