"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter, Depends, Request

from identity.api.schemas import LoginRequest, RegisterRequest, UserResponse
from identity.user.authentication import authenticate, get_user
from identity.user.registration import register_user
from shared.api import StatusResponse, current_actor, log_in, log_out
from shared.auth import Actor, require_user
from shared.utils.db import unit_of_work

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201, response_model=UserResponse)
def register(body: RegisterRequest, request: Request, actor: Actor | None = Depends(current_actor)) -> UserResponse:
    with unit_of_work() as session:
        user = register_user(
            session,
            name=body.name,
            email=body.email,
            password=body.password,
            role=body.role,
            actor=actor,
        )
        response = UserResponse.model_validate(user)

    # An administrator creating another administrator keeps their own session
    if actor is None or not actor.is_admin:
        log_in(request, user)
    return response


@router.post("/login", response_model=UserResponse)
def login(body: LoginRequest, request: Request) -> UserResponse:
    with unit_of_work() as session:
        user = authenticate(session, body.email, body.password)
        response = UserResponse.model_validate(user)

    log_in(request, user)
    return response


@router.post("/logout", response_model=StatusResponse)
def logout(request: Request) -> StatusResponse:
    log_out(request)
    return StatusResponse()


@router.get("/me", response_model=UserResponse)
def me(actor: Actor | None = Depends(current_actor)) -> UserResponse:
    actor = require_user(actor)
    with unit_of_work() as session:
        return UserResponse.model_validate(get_user(session, actor.user_id))
