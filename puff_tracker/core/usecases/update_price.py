"""Use case for changing the price of a single cigarette."""

from __future__ import annotations

from puff_tracker.core.entities.settings import AppSettings
from puff_tracker.core.interfaces.repositories.settings_repo import AbstractSettingsRepository


def execute(settings_repo: AbstractSettingsRepository, raw_price: str) -> AppSettings:
    """Store the price exactly as typed; unparsable values read back as 0."""
    settings = settings_repo.get()
    settings.price_per_cig = raw_price.strip()
    settings_repo.update(settings)
    return settings
