"""Application tests for catalogue management operations."""

from decimal import Decimal

import pytest
from catalogue.product.creation import create_product
from catalogue.product.details import update_product
from catalogue.product.listing import find_by_code, list_products
from catalogue.product.product import Product
from catalogue.product.removal import delete_product

from shared.exceptions import Duplicate, Forbidden, InvalidInput, NotFound, Unauthenticated


def _create(session, actor, **overrides):
    defaults = {"name": "Orange Juice", "code": "PROD001", "price": "25.50"}
    defaults.update(overrides)
    return create_product(session, actor, **defaults)


class TestCreateProduct:
    def test_admin_creates_product(self, session, admin):
        product = _create(session, admin, description="1L", image="/products/product_01.png")

        stored = session.get(Product, product.id)
        assert stored.code == "PROD001"
        assert stored.price == Decimal("25.50")
        assert stored.description == "1L"
        assert stored.image == "/products/product_01.png"

    def test_regular_user_forbidden(self, session, shopper):
        with pytest.raises(Forbidden):
            _create(session, shopper)
        assert session.query(Product).count() == 0

    def test_anonymous_unauthenticated(self, session):
        with pytest.raises(Unauthenticated):
            _create(session, None)

    def test_duplicate_code(self, session, admin):
        _create(session, admin)
        with pytest.raises(Duplicate):
            _create(session, admin, name="Another Juice")

    def test_invalid_price(self, session, admin):
        with pytest.raises(InvalidInput) as exc:
            _create(session, admin, price="-1")
        assert "price" in exc.value.messages


class TestListAndFind:
    def test_newest_first(self, session, admin):
        _create(session, admin, code="FIRST")
        _create(session, admin, code="SECOND")
        _create(session, admin, code="THIRD")

        assert [p.code for p in list_products(session)] == ["THIRD", "SECOND", "FIRST"]

    def test_empty_catalogue(self, session):
        assert list_products(session) == []

    def test_find_by_code(self, session, admin):
        created = _create(session, admin)
        assert find_by_code(session, "PROD001").id == created.id

    def test_find_missing(self, session):
        with pytest.raises(NotFound):
            find_by_code(session, "NOPE")


class TestUpdateProduct:
    def test_partial_update(self, session, admin):
        _create(session, admin, description="Original")

        product = update_product(session, admin, "PROD001", price="24.00")

        assert product.price == Decimal("24.00")
        assert product.name == "Orange Juice"
        assert product.description == "Original"

    def test_change_code(self, session, admin):
        _create(session, admin)
        update_product(session, admin, "PROD001", code="PROD100")

        assert find_by_code(session, "PROD100").name == "Orange Juice"
        with pytest.raises(NotFound):
            find_by_code(session, "PROD001")

    def test_keeping_own_code_is_not_a_duplicate(self, session, admin):
        _create(session, admin)
        product = update_product(session, admin, "PROD001", code="PROD001", name="Renamed")
        assert product.name == "Renamed"

    def test_code_collision(self, session, admin):
        _create(session, admin)
        _create(session, admin, code="PROD002")
        with pytest.raises(Duplicate):
            update_product(session, admin, "PROD002", code="PROD001")

    def test_invalid_update(self, session, admin):
        _create(session, admin)
        with pytest.raises(InvalidInput):
            update_product(session, admin, "PROD001", name="")
        assert find_by_code(session, "PROD001").name == "Orange Juice"

    def test_missing_product(self, session, admin):
        with pytest.raises(NotFound):
            update_product(session, admin, "NOPE", price="1.00")

    def test_regular_user_forbidden(self, session, admin, shopper):
        _create(session, admin)
        with pytest.raises(Forbidden):
            update_product(session, shopper, "PROD001", price="1.00")


class TestDeleteProduct:
    def test_admin_deletes(self, session, admin):
        _create(session, admin)
        delete_product(session, admin, "PROD001")
        assert session.query(Product).count() == 0

    def test_missing_product(self, session, admin):
        with pytest.raises(NotFound):
            delete_product(session, admin, "NOPE")

    def test_regular_user_forbidden(self, session, admin, shopper):
        _create(session, admin)
        with pytest.raises(Forbidden):
            delete_product(session, shopper, "PROD001")
        assert session.query(Product).count() == 1
