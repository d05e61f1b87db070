"""Aggregate root: the ordered log of smoked cigarettes and its statistics."""

from __future__ import annotations

import datetime as dt
import logging
from typing import List

from puff_tracker.core.entities.cigarette_entry import CigaretteEntry, local_date
from puff_tracker.core.entities.finance import parse_price
from puff_tracker.core.interfaces.repositories.kv_store import AbstractKeyValueStore
from puff_tracker.core.serialization import (
    EntryDecodeError,
    decode_entries,
    encode_entries,
)

logger = logging.getLogger(__name__)

ENTRIES_KEY = "cigaretteEntries"
PACK_SIZE = 20


class CigaretteLog:
    """Append-only log of entries persisted as one blob in a key-value store.

    Persistence is best effort: the in-memory list is authoritative for the
    lifetime of the process, and read or write failures degrade to an empty
    log or a skipped write instead of raising.
    """

    def __init__(self, store: AbstractKeyValueStore, key: str = ENTRIES_KEY) -> None:
        self._store = store
        self._key = key
        self._entries: List[CigaretteEntry] = []

    @property
    def entries(self) -> List[CigaretteEntry]:
        return list(self._entries)

    # ---------------------------------------------------------------------
    # Persistence
    # ---------------------------------------------------------------------

    def load(self) -> None:
        try:
            blob = self._store.get(self._key)
        except Exception:
            logger.warning("Failed to read %s from store, starting empty", self._key, exc_info=True)
            self._entries = []
            return

        if blob is None:
            self._entries = []
            return

        try:
            self._entries = decode_entries(blob)
        except EntryDecodeError as exc:
            logger.warning("Discarding unreadable %s: %s", self._key, exc)
            self._entries = []

    def record(self, now: dt.datetime) -> CigaretteEntry:
        entry = CigaretteEntry(timestamp=now)
        self._entries.append(entry)
        self.save()
        return entry

    def save(self) -> None:
        try:
            blob = encode_entries(self._entries)
            self._store.set(self._key, blob)
        except Exception:
            # in-memory state stays authoritative; next save rewrites everything
            logger.exception("Failed to persist %d entries under %s", len(self._entries), self._key)

    # ---------------------------------------------------------------------
    # Derived statistics
    # ---------------------------------------------------------------------

    def today_entries(self, now: dt.datetime | None = None) -> List[CigaretteEntry]:
        today = local_date(now or dt.datetime.now())
        return [e for e in self._entries if e.local_date() == today]

    def total_count(self) -> int:
        return len(self._entries)

    def total_packs(self) -> int:
        return self.total_count() // PACK_SIZE

    def total_spent(self, price_per_unit: str | float | None) -> float:
        return self.total_count() * parse_price(price_per_unit)

    def last_entry(self) -> CigaretteEntry | None:
        """Most recently appended entry, regardless of its day."""
        return self._entries[-1] if self._entries else None
