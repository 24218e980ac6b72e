"""Application tests for the demo catalogue."""

from catalogue.product.listing import find_by_code
from catalogue.product.product import Product
from catalogue.utils.seed import DEMO_PRODUCTS, seed_catalogue


class TestSeedCatalogue:
    def test_seeds_empty_catalogue(self, session):
        assert seed_catalogue(session) == len(DEMO_PRODUCTS)
        assert session.query(Product).count() == len(DEMO_PRODUCTS)
        assert find_by_code(session, "PROD001").name == DEMO_PRODUCTS[0]["name"]

    def test_is_idempotent(self, session):
        seed_catalogue(session)
        assert seed_catalogue(session) == 0
        assert session.query(Product).count() == len(DEMO_PRODUCTS)

    def test_leaves_existing_catalogue_alone(self, session, products):
        assert seed_catalogue(session) == 0
        assert session.query(Product).count() == 2
