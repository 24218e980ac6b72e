"""User registration."""

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from identity.shared.email import normalize_email
from identity.user.user import User
from shared.auth import Actor, Capability, Role, authorize
from shared.exceptions import Duplicate

logger = structlog.get_logger(__name__)


def email_taken(session: Session, email: str) -> bool:
    return session.scalar(select(User.id).where(User.email == normalize_email(email))) is not None


def register_user(
    session: Session,
    name: str,
    email: str,
    password: str,
    role: Role | str = Role.REGULAR,
    actor: Actor | None = None,
) -> User:
    """Create a new account.

    Anyone may register a regular account. Creating an administrator needs an
    acting administrator; the ``create-admin`` management command bootstraps
    the first one.
    """
    if role in (Role.ADMIN, Role.ADMIN.value):
        authorize(actor, Capability.MANAGE_USERS)

    return _add_user(session, User.register(name=name, email=email, password=password, role=role))


def bootstrap_admin(session: Session, name: str, email: str, password: str) -> User:
    """Create an administrator without an acting user (management commands only)."""
    return _add_user(session, User.register(name=name, email=email, password=password, role=Role.ADMIN))


def _add_user(session: Session, user: User) -> User:
    if email_taken(session, user.email):
        raise Duplicate(f"Email {user.email} is already registered")

    session.add(user)
    session.flush()

    logger.info("User registered", user_id=user.id, role=user.role)
    return user
