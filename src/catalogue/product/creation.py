"""Product creation."""

import structlog
from sqlalchemy.orm import Session

from catalogue.product.listing import code_taken
from catalogue.product.product import Product
from shared.auth import Actor, Capability, authorize
from shared.exceptions import Duplicate

logger = structlog.get_logger(__name__)


def create_product(
    session: Session,
    actor: Actor | None,
    name: str,
    code: str,
    price,
    description: str | None = None,
    image: str | None = None,
) -> Product:
    authorize(actor, Capability.MANAGE_CATALOGUE)

    product = Product.create(
        name=name,
        code=code,
        price=price,
        description=description,
        image=image,
    )
    if code_taken(session, product.code):
        raise Duplicate(f"Product code {product.code} already exists")

    session.add(product)
    session.flush()

    logger.info("Product created", product_id=product.id, code=product.code, price=str(product.price))
    return product
