"""Checkout coordinator: turns a cart into an order and confirms its payment.

Flow:
    1. create_order: valid cart lines → pending Order with line snapshots,
       cart cleared. Runs inside the caller's unit of work, so either all
       three writes (order, lines, cart clear) are committed or none is.
    2. confirm_payment: pending → paid, with a simulated payment reference.
       No payment gateway is involved.
"""

import structlog
from sqlalchemy.orm import Session

from ordering.cart.items import clear
from ordering.cart.view import list_lines
from ordering.order.history import get_order
from ordering.order.order import Order
from shared.auth import Actor, require_user
from shared.exceptions import EmptyCart

logger = structlog.get_logger(__name__)


def create_order(session: Session, actor: Actor | None) -> Order:
    """Place an order for everything in the actor's cart at current catalogue prices."""
    actor = require_user(actor)

    lines = list_lines(session, actor)
    if not lines:
        raise EmptyCart()

    order = Order.place(
        user_id=actor.user_id,
        lines=[(line.product, line.quantity) for line in lines],
    )
    session.add(order)
    session.flush()

    clear(session, actor)

    logger.info(
        "Order created",
        order_id=order.id,
        user_id=actor.user_id,
        lines=len(order.lines),
        total=str(order.total),
    )
    return order


def confirm_payment(session: Session, actor: Actor | None, order_id: int) -> Order:
    """Mark one of the actor's pending orders as paid.

    Missing and foreign orders raise ``NotFound``; orders that are no longer
    pending cannot be paid again.
    """
    actor = require_user(actor)

    order = get_order(session, actor, order_id)
    order.mark_paid()
    session.flush()

    logger.info("Payment confirmed", order_id=order.id, user_id=actor.user_id, payment_id=order.payment_id)
    return order
