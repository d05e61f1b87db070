"""Use case collecting everything the hub needs to display."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from puff_tracker.core.entities.cigarette_log import CigaretteLog
from puff_tracker.core.entities.settings import AppSettings


@dataclass(frozen=True, slots=True)
class Dashboard:
    now: dt.datetime
    today_count: int
    total_count: int
    total_packs: int
    total_spent: float
    last_smoked_at: dt.datetime | None = None


def execute(log: CigaretteLog, settings: AppSettings, now: dt.datetime | None = None) -> Dashboard:
    if now is None:
        now = dt.datetime.now().astimezone()

    last = log.last_entry()
    return Dashboard(
        now=now,
        today_count=len(log.today_entries(now)),
        total_count=log.total_count(),
        total_packs=log.total_packs(),
        total_spent=log.total_spent(settings.price_per_cig),
        last_smoked_at=last.timestamp if last else None,
    )
