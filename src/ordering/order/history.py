"""Order reads scoped to the acting user."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from ordering.order.order import Order
from shared.auth import Actor, require_user
from shared.exceptions import NotFound


def list_orders(session: Session, actor: Actor | None) -> list[Order]:
    """The actor's orders with their lines, most recent first."""
    actor = require_user(actor)
    return list(
        session.scalars(
            select(Order).where(Order.user_id == actor.user_id).order_by(Order.created_at.desc(), Order.id.desc())
        )
    )


def get_order(session: Session, actor: Actor | None, order_id: int) -> Order:
    """Fetch one of the actor's orders; other users' orders are reported as missing."""
    actor = require_user(actor)
    order = session.scalar(select(Order).where(Order.id == order_id, Order.user_id == actor.user_id))
    if order is None:
        raise NotFound(f"Order {order_id} not found")
    return order
