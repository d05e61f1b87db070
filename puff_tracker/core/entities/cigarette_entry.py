"""Domain entity representing a single smoked cigarette."""

from __future__ import annotations

import datetime as dt
import uuid
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CigaretteEntry:
    timestamp: dt.datetime
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def local_date(self) -> dt.date:
        """Calendar day of the entry in local time."""
        return local_date(self.timestamp)


def local_date(moment: dt.datetime) -> dt.date:
    # naive datetimes are already local wall-clock time
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone().date()
