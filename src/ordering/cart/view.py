"""Cart reads: current lines, live total, and the combined cart view."""

from dataclasses import dataclass
from decimal import Decimal

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from catalogue.shared.money import to_money
from ordering.cart import catalogue_events  # noqa: F401  registers the product-deletion listener
from ordering.cart.cart import CartLine
from shared.auth import Actor, require_user

logger = structlog.get_logger(__name__)


@dataclass
class CartView:
    lines: list[CartLine]
    total: Decimal


def list_lines(session: Session, actor: Actor | None) -> list[CartLine]:
    """Return the actor's cart lines with their products, oldest first.

    Side effect: lines whose product no longer exists are deleted and left
    out of the result. Pruning is idempotent, so running it on every read is
    safe even though it is not atomic with the read itself.
    """
    actor = require_user(actor)

    lines = list(
        session.scalars(
            select(CartLine)
            .where(CartLine.user_id == actor.user_id)
            .order_by(CartLine.created_at, CartLine.id)
            .execution_options(populate_existing=True)
        ).unique()
    )

    valid, orphaned = [], []
    for line in lines:
        (valid if line.product is not None else orphaned).append(line)

    for line in orphaned:
        session.delete(line)
    if orphaned:
        session.flush()
        logger.info("Pruned cart lines for deleted products", user_id=actor.user_id, lines=len(orphaned))

    return valid


def cart_total(lines: list[CartLine]) -> Decimal:
    return to_money(sum((line.subtotal for line in lines), Decimal("0")))


def total(session: Session, actor: Actor | None) -> Decimal:
    """Sum of current catalogue price times quantity over the actor's valid lines."""
    return cart_total(list_lines(session, actor))


def view(session: Session, actor: Actor | None) -> CartView:
    lines = list_lines(session, actor)
    return CartView(lines=lines, total=cart_total(lines))
