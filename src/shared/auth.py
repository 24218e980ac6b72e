"""Acting identity and role-based authorization.

Every operation receives the acting user explicitly as an ``Actor`` (or
``None`` when the request carries no session). Privileged operations call
``authorize`` before doing anything else.
"""

from dataclasses import dataclass
from enum import Enum

from shared.exceptions import Forbidden, Unauthenticated


class Role(Enum):
    ADMIN = "admin"
    REGULAR = "regular"


class Capability(Enum):
    MANAGE_CATALOGUE = "manage_catalogue"
    MANAGE_ORDERS = "manage_orders"
    MANAGE_USERS = "manage_users"


_ROLE_CAPABILITIES = {
    Role.ADMIN: frozenset(Capability),
    Role.REGULAR: frozenset(),
}


@dataclass(frozen=True)
class Actor:
    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def can(self, capability: Capability) -> bool:
        return capability in _ROLE_CAPABILITIES[self.role]


def require_user(actor: Actor | None) -> Actor:
    """Return the actor, or raise ``Unauthenticated`` when there is none."""
    if actor is None:
        raise Unauthenticated()
    return actor


def authorize(actor: Actor | None, capability: Capability) -> Actor:
    """Ensure ``actor`` is logged in and holds ``capability``."""
    actor = require_user(actor)
    if not actor.can(capability):
        raise Forbidden(f"Access denied: {capability.value} requires an administrator")
    return actor
