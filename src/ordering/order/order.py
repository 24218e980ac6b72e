"""Order aggregate: an immutable record of a checkout and its payment state.

State machine:
    PENDING → PAID
    PENDING → CANCELLED

Order lines are snapshots of product name and price taken when the order is
created. They never reference the catalogue, so later price changes or
product deletions cannot alter an existing order.
"""

import time
from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalogue.shared.money import to_money
from shared.exceptions import InvalidInput
from shared.utils.db import Base, utcnow


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.PAID: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


class OrderLine(Base):
    """A purchased product as it was at checkout time: name, unit price, quantity."""

    __tablename__ = "order_lines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped["Order"] = relationship(back_populates="lines")

    @classmethod
    def snapshot(cls, product, quantity):
        return cls(name=product.name, price=to_money(product.price), quantity=quantity)

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=OrderStatus.PENDING.value)
    payment_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    lines: Mapped[list[OrderLine]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by=OrderLine.id,
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Order {self.id} {self.status} {self.total}>"

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, lines):
        """Create a pending order from ``(product, quantity)`` pairs.

        The total is fixed here from the prices captured in the snapshots.
        """
        if not lines:
            raise InvalidInput({"lines": ["An order needs at least one line"]})

        snapshots = [OrderLine.snapshot(product, quantity) for product, quantity in lines]
        order = cls(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            total=to_money(sum((line.subtotal for line in snapshots), Decimal("0"))),
            lines=snapshots,
        )
        order.verify_total()
        return order

    def verify_total(self):
        expected = to_money(sum((line.subtotal for line in self.lines), Decimal("0")))
        if to_money(self.total) != expected:
            raise InvalidInput({"total": [f"Order total {self.total} does not match its lines ({expected})"]})

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidInput({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def mark_paid(self, payment_id=None):
        """Record a (simulated) successful payment."""
        self._assert_can_transition(OrderStatus.PAID)
        self.status = OrderStatus.PAID.value
        self.payment_id = payment_id or self.new_payment_reference()

    def cancel(self):
        self._assert_can_transition(OrderStatus.CANCELLED)
        self.status = OrderStatus.CANCELLED.value

    def new_payment_reference(self) -> str:
        """Millisecond timestamp plus order id: unique because an order is paid at most once."""
        return f"PAYMENT-{time.time_ns() // 1_000_000}-{self.id}"
