"""Database configuration and session management for Puff Puff Pass."""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker

# ---------------------------------------------------------------------------
# Constants & Helpers
# ---------------------------------------------------------------------------
DB_FILENAME = os.getenv("PPP_DB_FILENAME", "puff_puff_pass.db")
DB_PATH = Path(DB_FILENAME).expanduser().absolute()

SQLALCHEMY_DATABASE_URL = f"sqlite:///{DB_PATH}"

_engine_kwargs = {
    "connect_args": {"check_same_thread": False},  # needed for SQLite + threads
}

engine = create_engine(SQLALCHEMY_DATABASE_URL, echo=False, **_engine_kwargs)

# Configure Session class
SessionLocal = scoped_session(sessionmaker(bind=engine, autocommit=False, autoflush=False))

SessionFactory = Callable[[], Session]


class Base(DeclarativeBase):
    """Base class for declarative models."""


@contextmanager
def session_scope(session_factory: SessionFactory | None = None) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""
    session = (session_factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(bind: Engine | None = None) -> None:
    """Create tables that do not exist yet."""
    # models must be imported so they register on Base.metadata
    from puff_tracker.dataproviders.repositories import _models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
