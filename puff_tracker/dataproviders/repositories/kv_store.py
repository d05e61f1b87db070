"""SQLAlchemy implementation of the key-value store."""

from __future__ import annotations

from sqlalchemy import delete, select

from puff_tracker.core.interfaces.repositories.kv_store import AbstractKeyValueStore
from puff_tracker.dataproviders.db import SessionFactory, session_scope
from puff_tracker.dataproviders.repositories._models import KeyValueModel

DEFAULT_NAMESPACE = "default"


class SqlAlchemyKeyValueStore(AbstractKeyValueStore):
    """Key-value store backed by one table, partitioned by namespace.

    Each Telegram user gets their own namespace so the fixed storage keys
    do not collide between users.
    """

    def __init__(
        self,
        namespace: str = DEFAULT_NAMESPACE,
        session_factory: SessionFactory | None = None,
    ) -> None:
        self.namespace = namespace
        self._session_factory = session_factory

    def get(self, key: str) -> bytes | None:
        with session_scope(self._session_factory) as session:
            return session.scalar(
                select(KeyValueModel.value).where(
                    KeyValueModel.namespace == self.namespace,
                    KeyValueModel.key == key,
                )
            )

    def set(self, key: str, value: bytes) -> None:
        with session_scope(self._session_factory) as session:
            model = session.get(KeyValueModel, (self.namespace, key))
            if model is None:
                session.add(KeyValueModel(namespace=self.namespace, key=key, value=value))
            else:
                model.value = value

    def delete(self, key: str) -> None:
        with session_scope(self._session_factory) as session:
            session.execute(
                delete(KeyValueModel).where(
                    KeyValueModel.namespace == self.namespace,
                    KeyValueModel.key == key,
                )
            )
