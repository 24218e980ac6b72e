"""Application tests for order history and administrative cancellation."""

import pytest
from ordering.cart.items import add_line
from ordering.checkout.coordinator import confirm_payment, create_order
from ordering.order.cancellation import cancel_order
from ordering.order.history import get_order, list_orders
from ordering.order.order import OrderStatus

from shared.exceptions import Forbidden, InvalidInput, NotFound


def _place(session, actor, product, quantity=1):
    add_line(session, actor, product.id, quantity)
    return create_order(session, actor)


class TestListOrders:
    def test_most_recent_first(self, session, shopper, products):
        first = _place(session, shopper, products["A"])
        second = _place(session, shopper, products["B"])

        assert [o.id for o in list_orders(session, shopper)] == [second.id, first.id]

    def test_only_own_orders(self, session, shopper, other_shopper, products):
        _place(session, shopper, products["A"])
        theirs = _place(session, other_shopper, products["B"])

        assert [o.id for o in list_orders(session, other_shopper)] == [theirs.id]

    def test_no_orders(self, session, shopper):
        assert list_orders(session, shopper) == []


class TestGetOrder:
    def test_own_order(self, session, shopper, products):
        order = _place(session, shopper, products["A"], 3)

        found = get_order(session, shopper, order.id)
        assert found.lines[0].quantity == 3

    def test_other_users_order(self, session, shopper, other_shopper, products):
        order = _place(session, shopper, products["A"])
        with pytest.raises(NotFound):
            get_order(session, other_shopper, order.id)


class TestCancelOrder:
    def test_admin_cancels_pending_order(self, session, admin, shopper, products):
        order = _place(session, shopper, products["A"])

        cancelled = cancel_order(session, admin, order.id)
        assert cancelled.status == OrderStatus.CANCELLED.value

    def test_paid_order_cannot_be_cancelled(self, session, admin, shopper, products):
        order = _place(session, shopper, products["A"])
        confirm_payment(session, shopper, order.id)

        with pytest.raises(InvalidInput):
            cancel_order(session, admin, order.id)

    def test_cancelled_order_cannot_be_paid(self, session, admin, shopper, products):
        order = _place(session, shopper, products["A"])
        cancel_order(session, admin, order.id)

        with pytest.raises(InvalidInput):
            confirm_payment(session, shopper, order.id)

    def test_owner_cannot_cancel(self, session, shopper, products):
        order = _place(session, shopper, products["A"])
        with pytest.raises(Forbidden):
            cancel_order(session, shopper, order.id)

    def test_missing_order(self, session, admin):
        with pytest.raises(NotFound):
            cancel_order(session, admin, 9999)
