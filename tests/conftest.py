"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from puff_tracker.dataproviders.db import init_db


class DictStore:
    """In-memory key-value store."""

    def __init__(self) -> None:
        self.data: dict[str, bytes] = {}
        self.writes = 0

    def get(self, key: str) -> bytes | None:
        return self.data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self.writes += 1
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class FailingStore:
    """Store whose every operation fails, like a broken disk."""

    def get(self, key: str) -> bytes | None:
        raise OSError("store unavailable")

    def set(self, key: str, value: bytes) -> None:
        raise OSError("store unavailable")

    def delete(self, key: str) -> None:
        raise OSError("store unavailable")


@pytest.fixture
def store() -> DictStore:
    return DictStore()


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield sessionmaker(bind=engine, autoflush=False)
    engine.dispose()
