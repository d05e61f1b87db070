"""Register a smoked cigarette and remember when it happened."""

from __future__ import annotations

import datetime as dt

from puff_tracker.core.entities.cigarette_entry import CigaretteEntry
from puff_tracker.core.entities.cigarette_log import CigaretteLog
from puff_tracker.core.interfaces.repositories.settings_repo import AbstractSettingsRepository


def execute(
    log: CigaretteLog,
    settings_repo: AbstractSettingsRepository,
    now: dt.datetime | None = None,
) -> CigaretteEntry:
    if now is None:
        now = dt.datetime.now().astimezone()

    entry = log.record(now)

    settings = settings_repo.get()
    settings.last_smoked_time = entry.timestamp.timestamp()
    settings_repo.update(settings)

    return entry
