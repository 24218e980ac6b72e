"""Product deletion.

Order lines are snapshots and never reference products, so history is
unaffected. Cart lines lose their product reference and are pruned the
next time their owner looks at the cart.
"""

import structlog
from sqlalchemy.orm import Session

from catalogue.product.listing import find_by_code
from shared.auth import Actor, Capability, authorize

logger = structlog.get_logger(__name__)


def delete_product(session: Session, actor: Actor | None, code: str) -> None:
    authorize(actor, Capability.MANAGE_CATALOGUE)

    product = find_by_code(session, code)
    product_id = product.id
    session.delete(product)
    session.flush()

    logger.info("Product deleted", product_id=product_id, code=code)
