"""Product details update."""

import structlog
from sqlalchemy.orm import Session

from catalogue.product.listing import code_taken, find_by_code
from catalogue.product.product import Product
from shared.auth import Actor, Capability, authorize
from shared.exceptions import Duplicate

logger = structlog.get_logger(__name__)


def update_product(session: Session, actor: Actor | None, product_code: str, /, **fields) -> Product:
    """Update the product currently identified by ``product_code``.

    Accepted fields: ``name``, ``code``, ``price``, ``description``, ``image``.
    Fields that are not passed are left untouched. Nothing is changed when
    any field is invalid or the new code belongs to another product.
    """
    authorize(actor, Capability.MANAGE_CATALOGUE)

    product = find_by_code(session, product_code)

    new_code = (fields.get("code") or "").strip()
    if new_code and code_taken(session, new_code, exclude_id=product.id):
        raise Duplicate(f"Product code {new_code} already exists")

    changes = product.update_details(**fields)
    session.flush()

    logger.info("Product updated", product_id=product.id, code=product.code, fields=sorted(changes))
    return product
