"""User aggregate: a registered account with a fixed role."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from identity.shared.email import is_valid_email, normalize_email
from identity.shared.password import MAX_PASSWORD_BYTES, MIN_PASSWORD_LENGTH, hash_password
from shared.auth import Actor, Role
from shared.exceptions import InvalidInput
from shared.utils.db import Base, utcnow

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100


class User(Base):
    """A person who can log in; either a regular shopper or an administrator.

    The role is chosen at registration and never changes afterwards. Only a
    bcrypt hash of the password is ever stored.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(254), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=Role.REGULAR.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self):
        return f"<User {self.email}>"

    @classmethod
    def register(cls, name, email, password, role=Role.REGULAR):
        """Validate registration data and build a new, unsaved user."""
        name = (name or "").strip()
        email = normalize_email(email)
        password = password or ""

        errors = {}
        if not name:
            errors["name"] = ["Name is required"]
        elif not MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH:
            errors["name"] = [f"Name must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters"]

        if not is_valid_email(email):
            errors["email"] = ["A valid email address is required"]

        if len(password) < MIN_PASSWORD_LENGTH:
            errors["password"] = [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]
        else:
            try:
                if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
                    errors["password"] = [f"Password must be at most {MAX_PASSWORD_BYTES} bytes"]
            except UnicodeEncodeError:
                errors["password"] = ["Password contains invalid characters"]

        try:
            role = Role(role)
        except ValueError:
            errors["role"] = [f"Role must be one of: {', '.join(r.value for r in Role)}"]

        if errors:
            raise InvalidInput(errors)

        return cls(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role.value,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def as_actor(self) -> Actor:
        return Actor(user_id=self.id, role=Role(self.role))
