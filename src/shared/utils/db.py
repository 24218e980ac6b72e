"""Database engine, declarative base, schema management and unit of work."""

from contextlib import contextmanager
from datetime import UTC, datetime

import structlog
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from shared.config import get_settings
from shared.exceptions import Duplicate

logger = structlog.get_logger(__name__)

_engine: Engine | None = None
_session_factory: sessionmaker | None = None


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    return datetime.now(UTC)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):  # noqa: ARG001
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url``.

    In-memory SQLite databases share a single connection so that every
    session (and every thread serving a request) sees the same data.
    """
    kwargs = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:") or ":memory:" in database_url:
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def get_engine() -> Engine:
    global _engine, _session_factory
    if _engine is None:
        _engine = build_engine(get_settings().database_url)
        _session_factory = sessionmaker(bind=_engine, expire_on_commit=False)
    return _engine


def get_session_factory() -> sessionmaker:
    get_engine()
    return _session_factory


def _load_models():
    """Import every mapped module so its tables are registered on ``Base.metadata``."""
    import catalogue.product.product  # noqa: F401
    import identity.user.user  # noqa: F401
    import ordering.cart.cart  # noqa: F401
    import ordering.cart.catalogue_events  # noqa: F401
    import ordering.order.order  # noqa: F401


def setup_db(engine: Engine | None = None):
    """Setup database schema"""
    _load_models()
    Base.metadata.create_all(engine or get_engine())


def drop_db(engine: Engine | None = None):
    """Drop database schema"""
    _load_models()
    Base.metadata.drop_all(engine or get_engine())


def _is_unique_violation(exc: IntegrityError) -> bool:
    text = str(exc.orig).lower()
    return "unique" in text or "duplicate" in text


@contextmanager
def unit_of_work():
    """Yield a session whose work is committed on success and rolled back on error.

    Unique constraint violations surfacing from the database are reported as
    ``Duplicate`` so callers never see driver-specific errors for them.
    """
    session: Session = get_session_factory()()
    try:
        yield session
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        if _is_unique_violation(exc):
            logger.warning("Unique constraint violated", error=str(exc.orig))
            raise Duplicate() from exc
        raise
    except BaseException:
        session.rollback()
        raise
    finally:
        session.close()
