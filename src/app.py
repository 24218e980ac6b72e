"""Storefront FastAPI application.

JSON API over the identity, catalogue and ordering domains. The logged-in
user lives in a signed session cookie and is handed to every operation as an
explicit ``Actor``.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

import structlog
from catalogue.api import product_router
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from identity.api import router as identity_router
from ordering.api import cart_router, order_router
from starlette.middleware.sessions import SessionMiddleware

from shared.api import register_exception_handlers
from shared.config import get_settings
from shared.utils.db import setup_db, unit_of_work
from shared.utils.logging import add_context, clear_context, configure_logging

logger = structlog.get_logger(__name__)


def seed_demo_data() -> None:
    """Create the demo accounts and catalogue if they are missing."""
    from catalogue.utils.seed import seed_catalogue
    from identity.user.registration import bootstrap_admin, email_taken, register_user

    settings = get_settings()
    with unit_of_work() as session:
        if not email_taken(session, settings.admin_email):
            bootstrap_admin(session, settings.admin_name, settings.admin_email, settings.admin_password)
        if not email_taken(session, settings.demo_email):
            register_user(session, settings.demo_name, settings.demo_email, settings.demo_password)
        seed_catalogue(session)


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    settings = get_settings()
    configure_logging()
    setup_db()
    if settings.seed_on_startup:
        seed_demo_data()
    logger.info("Storefront started", env=settings.env)
    yield


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Storefront API",
        description="Catalogue, cart and checkout with simulated payment",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_context_middleware(request: Request, call_next):
        """Bind request details to every log line emitted while serving it."""
        clear_context()
        add_context(method=request.method, path=request.url.path)
        try:
            return await call_next(request)
        finally:
            clear_context()

    # Added last so it wraps everything above: routes see request.session
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.env == "production",
    )

    register_exception_handlers(app)

    app.include_router(identity_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "env": settings.env})

    return app


app = create_app()
