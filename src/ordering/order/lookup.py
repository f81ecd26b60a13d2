"""Order retrieval."""

from ordering.domain import logger
from ordering.order.order import Order, load_order


def get_order(order_id: str) -> Order:
    """Read an order, raising OrderNotFound for an unknown id."""
    logger.debug("order_lookup", order_id=order_id)
    return load_order(order_id)
