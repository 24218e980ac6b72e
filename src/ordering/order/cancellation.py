"""Order cancellation: an administrative action on pending orders."""

import structlog
from sqlalchemy.orm import Session

from ordering.order.order import Order
from shared.auth import Actor, Capability, authorize
from shared.exceptions import NotFound

logger = structlog.get_logger(__name__)


def cancel_order(session: Session, actor: Actor | None, order_id: int) -> Order:
    actor = authorize(actor, Capability.MANAGE_ORDERS)

    order = session.get(Order, order_id)
    if order is None:
        raise NotFound(f"Order {order_id} not found")

    order.cancel()
    session.flush()

    logger.info("Order cancelled", order_id=order.id, cancelled_by=actor.user_id)
    return order
