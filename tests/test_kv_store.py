"""Tests for the SQLAlchemy key-value store."""

import datetime as dt

from sqlalchemy import inspect

from puff_tracker.core.entities.cigarette_log import CigaretteLog
from puff_tracker.dataproviders.repositories.kv_store import SqlAlchemyKeyValueStore


class TestSqlAlchemyKeyValueStore:
    def test_schema(self, session_factory):
        with session_factory() as session:
            columns = [c["name"] for c in inspect(session.get_bind()).get_columns("key_value_store")]

        assert columns == ["namespace", "key", "value", "updated_at"]

    def test_missing_key(self, session_factory):
        store = SqlAlchemyKeyValueStore(session_factory=session_factory)
        assert store.get("nope") is None

    def test_set_and_overwrite(self, session_factory):
        store = SqlAlchemyKeyValueStore(session_factory=session_factory)

        store.set("k", b"one")
        store.set("k", b"two")

        assert store.get("k") == b"two"

    def test_delete(self, session_factory):
        store = SqlAlchemyKeyValueStore(session_factory=session_factory)
        store.set("k", b"one")

        store.delete("k")
        store.delete("k")

        assert store.get("k") is None

    def test_namespaces_are_isolated(self, session_factory):
        alice = SqlAlchemyKeyValueStore(namespace="1", session_factory=session_factory)
        bob = SqlAlchemyKeyValueStore(namespace="2", session_factory=session_factory)

        alice.set("cigaretteEntries", b"[]")

        assert bob.get("cigaretteEntries") is None
        assert alice.get("cigaretteEntries") == b"[]"

    def test_log_round_trip_through_database(self, session_factory):
        store = SqlAlchemyKeyValueStore(namespace="42", session_factory=session_factory)
        log = CigaretteLog(store)
        now = dt.datetime(2024, 5, 1, 9, 0, tzinfo=dt.timezone.utc)
        for minutes in (0, 5, 10):
            log.record(now + dt.timedelta(minutes=minutes))

        restored = CigaretteLog(SqlAlchemyKeyValueStore(namespace="42", session_factory=session_factory))
        restored.load()

        assert restored.entries == log.entries
