"""Catalogue reads."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from catalogue.product.product import Product
from shared.exceptions import NotFound


def code_taken(session: Session, code: str, exclude_id: int | None = None) -> bool:
    query = select(Product.id).where(Product.code == code)
    if exclude_id is not None:
        query = query.where(Product.id != exclude_id)
    return session.scalar(query) is not None


def find_by_code(session: Session, code: str) -> Product:
    product = session.scalar(select(Product).where(Product.code == (code or "").strip()))
    if product is None:
        raise NotFound(f"Product {code} not found")
    return product


def list_products(session: Session) -> list[Product]:
    """All products, newest first."""
    return list(session.scalars(select(Product).order_by(Product.created_at.desc(), Product.id.desc())))
