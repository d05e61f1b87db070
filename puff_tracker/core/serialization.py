"""JSON wire format for the persisted list of cigarette entries.

The blob is a compact UTF-8 JSON array; each element is an object with an
``id`` (canonical hyphenated UUID text) and a ``timestamp`` (ISO-8601).
"""

from __future__ import annotations

import datetime as dt
import uuid
from typing import Annotated, Iterable, List

from pydantic import BaseModel, StringConstraints, TypeAdapter, ValidationError

from puff_tracker.core.entities.cigarette_entry import CigaretteEntry, local_date

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"


class EntryDecodeError(ValueError):
    """Stored blob does not hold a well-formed list of entries."""


class _EntryRecord(BaseModel):
    """On-disk shape of one entry; extra keys are ignored."""

    id: Annotated[str, StringConstraints(pattern=UUID_PATTERN)]
    timestamp: dt.datetime

    # rust-regex: "$" only matches at the very end, never before a trailing newline
    model_config = {"strict": True, "frozen": True, "regex_engine": "rust-regex"}


_ENTRIES = TypeAdapter(List[_EntryRecord])


def encode_entries(entries: Iterable[CigaretteEntry]) -> bytes:
    records = [_EntryRecord(id=str(entry.id), timestamp=entry.timestamp) for entry in entries]
    return _ENTRIES.dump_json(records)


def decode_entries(blob: bytes) -> List[CigaretteEntry]:
    try:
        records = _ENTRIES.validate_json(blob)
    except ValidationError as exc:
        raise EntryDecodeError(
            f"Entries blob is malformed ({exc.error_count()} errors): {exc.errors()[0]['msg']}"
        ) from exc
    except (ValueError, RecursionError) as exc:
        raise EntryDecodeError(f"Entries blob is not valid JSON: {exc}") from exc

    entries: List[CigaretteEntry] = []
    seen: set[uuid.UUID] = set()
    for index, record in enumerate(records):
        entry = CigaretteEntry(id=uuid.UUID(record.id), timestamp=record.timestamp)
        if entry.id in seen:
            raise EntryDecodeError(f"Duplicate entry id at index {index}: {entry.id}")
        try:
            local_date(entry.timestamp)
        except OverflowError as exc:
            raise EntryDecodeError(
                f"Entry at index {index} has an out of range timestamp: {entry.timestamp!r}"
            ) from exc
        seen.add(entry.id)
        entries.append(entry)
    return entries
