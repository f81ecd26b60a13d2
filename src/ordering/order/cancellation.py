"""Order cancellation — command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order, load_order


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = load_order(command.order_id)
        order.cancel()
        current_domain.repository_for(Order).add(order)
        logger.info("order_cancelled", order_id=command.order_id, user_id=order.user_id)
