"""Error taxonomy shared by all bounded contexts.

Domain code raises these; the HTTP layer maps them to status codes
(see ``shared.api.register_exception_handlers``).
"""


class StorefrontError(Exception):
    """Base class for all expected, user-facing failures."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(StorefrontError):
    default_message = "Not found"


class Duplicate(StorefrontError):
    default_message = "Already exists"


class InvalidInput(StorefrontError):
    """Field-level validation failure.

    ``messages`` maps a field name to the list of problems found with it,
    e.g. ``{"price": ["Price must be greater than 0"]}``.
    """

    default_message = "Invalid input"

    def __init__(self, messages: dict[str, list[str]]):
        self.messages = messages
        super().__init__("; ".join(f"{field}: {', '.join(errors)}" for field, errors in messages.items()))


class EmptyCart(StorefrontError):
    default_message = "Cannot create an order from an empty cart"


class Unauthenticated(StorefrontError):
    default_message = "Authentication required"


class Forbidden(StorefrontError):
    default_message = "Access denied"


class InvalidCredentials(StorefrontError):
    default_message = "Invalid email or password"
