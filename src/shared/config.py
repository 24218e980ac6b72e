"""Application configuration with per-environment overlays.

Settings are resolved once per process: the ``default`` table, then the
overlay selected by ``STOREFRONT_ENV`` (``development`` when unset), then
individual environment variable overrides.

    STOREFRONT_ENV   development | test | production
    DATABASE_URL     any SQLAlchemy URL
    SECRET_KEY       session cookie signing key (required in production)
    BCRYPT_ROUNDS    password hashing cost factor (never below 10)
    LOG_LEVEL        overrides the level derived from the environment
    LOG_DIR          directory for rotating log files
"""

import os
from dataclasses import dataclass, fields
from functools import lru_cache

MIN_BCRYPT_ROUNDS = 10
DEFAULT_SECRET_KEY = "change-me-storefront-secret"

_CONFIG = {
    "default": {
        "database_url": "sqlite:///./storefront.db",
        "secret_key": DEFAULT_SECRET_KEY,
        "session_max_age": 24 * 60 * 60,
        "bcrypt_rounds": 12,
        "seed_on_startup": False,
        "log_dir": "logs",
        "admin_name": "Administrator",
        "admin_email": "admin@storefront.local",
        "admin_password": "admin123",
        "demo_name": "Demo User",
        "demo_email": "user@storefront.local",
        "demo_password": "user123",
    },
    "development": {
        "seed_on_startup": True,
    },
    "test": {
        "database_url": "sqlite://",
        "log_dir": None,
        "secret_key": "test-secret",
        "bcrypt_rounds": MIN_BCRYPT_ROUNDS,
    },
    "production": {
        "seed_on_startup": False,
    },
}

_ENV_OVERRIDES = {
    "DATABASE_URL": ("database_url", str),
    "SECRET_KEY": ("secret_key", str),
    "BCRYPT_ROUNDS": ("bcrypt_rounds", int),
    "LOG_DIR": ("log_dir", str),
}


@dataclass(frozen=True)
class Settings:
    env: str
    database_url: str
    secret_key: str
    session_max_age: int
    bcrypt_rounds: int
    seed_on_startup: bool
    log_dir: str | None
    admin_name: str
    admin_email: str
    admin_password: str
    demo_name: str
    demo_email: str
    demo_password: str


def current_env() -> str:
    return (os.getenv("STOREFRONT_ENV") or "development").lower()


def load_settings(env: str | None = None) -> Settings:
    """Build settings for ``env`` without touching the process-wide cache."""
    env = (env or current_env()).lower()
    if env not in _CONFIG or env == "default":
        raise ValueError(f"Unknown environment: {env!r}")

    values = {**_CONFIG["default"], **_CONFIG[env]}
    for var, (key, cast) in _ENV_OVERRIDES.items():
        raw = os.getenv(var)
        if raw:
            values[key] = cast(raw)

    if env == "production" and values["secret_key"] == DEFAULT_SECRET_KEY:
        raise ValueError("SECRET_KEY must be set to a private value in production")

    values["bcrypt_rounds"] = max(int(values["bcrypt_rounds"]), MIN_BCRYPT_ROUNDS)

    known = {f.name for f in fields(Settings)}
    return Settings(env=env, **{k: v for k, v in values.items() if k in known})


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
