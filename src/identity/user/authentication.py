"""Credential checks and user lookup."""

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from identity.shared.email import normalize_email
from identity.shared.password import burn_verification, verify_password
from identity.user.user import User
from shared.exceptions import InvalidCredentials, NotFound

logger = structlog.get_logger(__name__)


def authenticate(session: Session, email: str, password: str) -> User:
    """Return the user owning ``email`` if ``password`` matches its hash.

    Unknown emails and wrong passwords fail identically with
    ``InvalidCredentials``.
    """
    user = session.scalar(select(User).where(User.email == normalize_email(email)))

    if user is None:
        burn_verification()
        logger.info("Login failed", reason="unknown_email")
        raise InvalidCredentials()

    if not verify_password(password or "", user.password_hash):
        logger.info("Login failed", reason="bad_password", user_id=user.id)
        raise InvalidCredentials()

    logger.info("User logged in", user_id=user.id)
    return user


def get_user(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if user is None:
        raise NotFound(f"User {user_id} not found")
    return user
