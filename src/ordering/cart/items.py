"""Cart line management: add, remove, clear."""

import structlog
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from catalogue.product.product import Product
from ordering.cart.cart import CartLine
from shared.auth import Actor, require_user
from shared.exceptions import InvalidInput, NotFound

logger = structlog.get_logger(__name__)


def add_line(session: Session, actor: Actor | None, product_id: int, quantity: int = 1) -> CartLine:
    """Add ``quantity`` of a product to the actor's cart.

    A product already in the cart has its line incremented instead of getting
    a second line. The increment is computed by the database
    (``quantity = quantity + n``) so concurrent adds do not overwrite each other.
    """
    actor = require_user(actor)

    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidInput({"quantity": ["Quantity must be at least 1"]})

    if session.get(Product, product_id) is None:
        raise NotFound(f"Product {product_id} not found")

    line = session.scalar(
        select(CartLine).where(
            CartLine.user_id == actor.user_id,
            CartLine.product_id == product_id,
        )
    )

    if line is not None:
        line.quantity = CartLine.quantity + quantity
    else:
        line = CartLine(user_id=actor.user_id, product_id=product_id, quantity=quantity)
        session.add(line)

    session.flush()
    session.refresh(line)

    logger.info(
        "Item added to cart",
        user_id=actor.user_id,
        product_id=product_id,
        added=quantity,
        quantity=line.quantity,
    )
    return line


def remove_line(session: Session, actor: Actor | None, line_id: int) -> bool:
    """Delete one of the actor's lines. Lines that are absent or belong to someone else are left alone."""
    actor = require_user(actor)

    result = session.execute(
        delete(CartLine).where(
            CartLine.id == line_id,
            CartLine.user_id == actor.user_id,
        )
    )
    removed = bool(result.rowcount)
    if removed:
        logger.info("Item removed from cart", user_id=actor.user_id, line_id=line_id)
    return removed


def clear(session: Session, actor: Actor | None) -> int:
    actor = require_user(actor)

    result = session.execute(delete(CartLine).where(CartLine.user_id == actor.user_id))
    logger.info("Cart cleared", user_id=actor.user_id, lines=result.rowcount)
    return result.rowcount
