"""Shopping cart lines: what a user intends to buy, before checkout.

A user's cart is simply the set of their ``CartLine`` rows. Lines reference
products and never store prices; prices are resolved from the catalogue at
display and checkout time.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalogue.product.product import Product
from shared.utils.db import Base, utcnow


class CartLine(Base):
    __tablename__ = "cart_lines"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_cart_lines_user_product"),
        CheckConstraint("quantity >= 1", name="ck_cart_lines_quantity_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Nulled when the product is deleted; such lines are pruned on the next cart read
    product_id: Mapped[int | None] = mapped_column(ForeignKey("products.id", ondelete="SET NULL"), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    product: Mapped[Product | None] = relationship(Product, lazy="joined")

    def __repr__(self):
        return f"<CartLine user={self.user_id} product={self.product_id} qty={self.quantity}>"

    @property
    def subtotal(self):
        return self.product.price * self.quantity
