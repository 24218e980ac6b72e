"""Tests for the assembled application, error mapping and management CLI."""

import pytest
from catalogue.product.product import Product
from fastapi import FastAPI
from fastapi.testclient import TestClient
from identity.user.user import User

from shared.api import register_exception_handlers
from shared.utils.db import unit_of_work


class TestAssembledApp:
    def test_health(self):
        from app import create_app

        client = TestClient(create_app())
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "env": "test"}

    def test_routes_registered(self):
        from app import create_app

        paths = set(create_app().openapi()["paths"])
        assert {"/auth/login", "/products", "/cart", "/orders/{order_id}/confirm"} <= paths

    def test_seed_demo_data_is_idempotent(self):
        from app import seed_demo_data

        seed_demo_data()
        seed_demo_data()

        with unit_of_work() as session:
            assert session.query(User).count() == 2
            assert session.query(User).filter_by(role="admin").count() == 1
            assert session.query(Product).count() == 11


class TestUnhandledErrors:
    def test_unexpected_exception_is_500(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/boom")
        def boom():
            raise RuntimeError("kaboom")

        response = TestClient(app, raise_server_exceptions=False).get("/boom")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestManageCommands:
    def test_create_admin(self, capsys):
        from manage import main

        assert main(["create-admin", "--name", "Ada", "--email", "ada@example.com", "--password", "secret1"]) == 0
        assert "ada@example.com" in capsys.readouterr().out

        with unit_of_work() as session:
            assert session.query(User).filter_by(email="ada@example.com").one().role == "admin"

    def test_create_admin_twice_fails(self, capsys):
        from manage import main

        args = ["create-admin", "--name", "Ada", "--email", "ada@example.com", "--password", "secret1"]
        main(args)
        assert main(args) == 1
        assert "already registered" in capsys.readouterr().err

    def test_seed(self):
        from manage import main

        assert main(["seed"]) == 0
        with unit_of_work() as session:
            assert session.query(Product).count() == 11

    def test_unknown_command(self):
        from manage import main

        with pytest.raises(SystemExit):
            main(["explode"])
