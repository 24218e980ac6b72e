"""HTTP plumbing shared by every router: session identity and error mapping."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.auth import Actor, Role
from shared.exceptions import (
    Duplicate,
    EmptyCart,
    Forbidden,
    InvalidCredentials,
    InvalidInput,
    NotFound,
    StorefrontError,
    Unauthenticated,
)
from shared.utils.logging import add_context

logger = structlog.get_logger(__name__)

_STATUS_CODES = {
    InvalidInput: 400,
    EmptyCart: 400,
    Unauthenticated: 401,
    InvalidCredentials: 401,
    Forbidden: 403,
    NotFound: 404,
    Duplicate: 409,
}


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Session identity
# ---------------------------------------------------------------------------
def current_actor(request: Request) -> Actor | None:
    """Rebuild the acting user from the signed session cookie."""
    user_id = request.session.get("user_id")
    if user_id is None:
        return None
    add_context(user_id=user_id)
    return Actor(user_id=int(user_id), role=Role(request.session.get("role", Role.REGULAR.value)))


def log_in(request: Request, user) -> None:
    request.session.clear()
    request.session.update(
        {
            "user_id": user.id,
            "role": user.role,
            "name": user.name,
            "email": user.email,
        }
    )


def log_out(request: Request) -> None:
    request.session.clear()


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
def _status_for(exc: StorefrontError) -> int:
    for exc_type in type(exc).__mro__:
        if exc_type in _STATUS_CODES:
            return _STATUS_CODES[exc_type]
    return 400


async def _storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    status_code = _status_for(exc)
    if isinstance(exc, InvalidInput):
        content = {"error": exc.messages}
    else:
        content = {"error": exc.message}
    logger.info(
        "Request rejected",
        path=request.url.path,
        error=type(exc).__name__,
        status_code=status_code,
    )
    return JSONResponse(status_code=status_code, content=content)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while processing request", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, _storefront_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
