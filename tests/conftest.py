import os
from decimal import Decimal
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the configuration environment before anything reads (and caches)
    the settings.
    """
    os.environ["STOREFRONT_ENV"] = session.config.option.env

    from shared.config import get_settings

    get_settings.cache_clear()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from shared.utils.db import drop_db, setup_db

    setup_db()

    yield

    drop_db()


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup the database after every test"""
    yield

    from shared.utils.db import Base, get_engine

    with get_engine().begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture()
def session():
    """A unit of work that stays open for the whole test and commits at the end."""
    from shared.utils.db import unit_of_work

    with unit_of_work() as session:
        yield session


@pytest.fixture()
def admin(session):
    from identity.user.registration import bootstrap_admin

    user = bootstrap_admin(session, "Admin", "admin@example.com", "admin123")
    return user.as_actor()


@pytest.fixture()
def shopper(session):
    from identity.user.registration import register_user

    user = register_user(session, "Shopper", "shopper@example.com", "shopper123")
    return user.as_actor()


@pytest.fixture()
def other_shopper(session):
    from identity.user.registration import register_user

    user = register_user(session, "Other Shopper", "other@example.com", "other123")
    return user.as_actor()


@pytest.fixture()
def products(session, admin):
    """Two products: A at 10.00 and B at 5.00."""
    from catalogue.product.creation import create_product

    return {
        "A": create_product(session, admin, name="Product A", code="A", price=Decimal("10.00")),
        "B": create_product(session, admin, name="Product B", code="B", price=Decimal("5.00")),
    }


# ---------------------------------------------------------------------------
# HTTP API fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def api_app():
    """The storefront routers behind a session cookie, without the app lifespan."""
    from catalogue.api import product_router
    from fastapi import FastAPI
    from identity.api import router as identity_router
    from ordering.api import cart_router, order_router
    from starlette.middleware.sessions import SessionMiddleware

    from shared.api import register_exception_handlers

    app = FastAPI()
    app.add_middleware(SessionMiddleware, secret_key="test-secret")
    register_exception_handlers(app)
    app.include_router(identity_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    return app


@pytest.fixture()
def accounts():
    """Committed admin and shopper accounts, as ``{role: (email, password)}``."""
    from identity.user.registration import bootstrap_admin, register_user

    from shared.utils.db import unit_of_work

    with unit_of_work() as session:
        bootstrap_admin(session, "Admin", "admin@example.com", "admin123")
        register_user(session, "Shopper", "shopper@example.com", "shopper123")
        register_user(session, "Other Shopper", "other@example.com", "other123")

    return {
        "admin": ("admin@example.com", "admin123"),
        "shopper": ("shopper@example.com", "shopper123"),
        "other": ("other@example.com", "other123"),
    }


@pytest.fixture()
def client_for(api_app, accounts):
    """Build a test client, optionally logged in as one of ``accounts``."""
    from fastapi.testclient import TestClient

    def _client(who=None):
        client = TestClient(api_app, raise_server_exceptions=False)
        if who is not None:
            email, password = accounts[who]
            response = client.post("/auth/login", json={"email": email, "password": password})
            assert response.status_code == 200
        return client

    return _client
