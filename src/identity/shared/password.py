"""One-way password hashing backed by bcrypt."""

import bcrypt

from shared.config import MIN_BCRYPT_ROUNDS, get_settings

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72

_dummy_hash: bytes | None = None


def hash_password(plain: str, rounds: int | None = None) -> str:
    rounds = max(rounds or get_settings().bcrypt_rounds, MIN_BCRYPT_ROUNDS)
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison of ``plain`` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or oversized input
        return False


def burn_verification() -> None:
    """Spend the same time a real verification would, for unknown accounts."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("not-a-real-password").encode("utf-8")
    bcrypt.checkpw(b"not-the-password", _dummy_hash)
