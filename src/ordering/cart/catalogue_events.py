"""Ordering reacts to catalogue changes that affect carts.

When a product is deleted, cart lines pointing at it lose their product
reference in the same transaction. The lines themselves are left in place:
``ordering.cart.view.list_lines`` prunes them the next time the owner looks
at the cart. Order lines are snapshots and are not touched.
"""

import structlog
from sqlalchemy import event, update

from catalogue.product.product import Product
from ordering.cart.cart import CartLine

logger = structlog.get_logger(__name__)


@event.listens_for(Product, "before_delete")
def detach_deleted_product(mapper, connection, target):  # noqa: ARG001
    result = connection.execute(
        update(CartLine.__table__).where(CartLine.__table__.c.product_id == target.id).values(product_id=None)
    )
    if result.rowcount:
        logger.info("Cart lines detached from deleted product", product_id=target.id, lines=result.rowcount)
