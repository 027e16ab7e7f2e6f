"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator, Iterator
from contextlib import contextmanager

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from classroom.config import Settings, get_settings
from classroom.domain.errors import PersistenceError


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


logger = logging.getLogger(__name__)


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured database URL."""

    url = settings.database_url
    if _is_sqlite(url):
        sqlite_engine = create_engine(url, connect_args={"check_same_thread": False})

        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record) -> None:  # pragma: no cover - driver hook
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine
    return create_engine(url, pool_pre_ping=True)


settings = get_settings()
engine = build_engine(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database(bind: Engine | None = None) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from classroom.infrastructure import models  # noqa: F401  # ensure models are imported

    target = bind or engine
    logger.info("Ensuring database tables exist on %s", target.url.render_as_string())
    Base.metadata.create_all(bind=target, checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def persistence_errors(session: Session, action: str) -> Iterator[None]:
    """Roll back and re-raise driver failures as :class:`PersistenceError`."""

    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Database failure while trying to %s: %s", action, exc)
        raise PersistenceError(f"Could not {action}") from exc
