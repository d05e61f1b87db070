"""Settings repository storing each field as a string in the key-value store."""

from __future__ import annotations

import logging

from puff_tracker.core.entities.settings import AppSettings
from puff_tracker.core.interfaces.repositories.kv_store import AbstractKeyValueStore
from puff_tracker.core.interfaces.repositories.settings_repo import AbstractSettingsRepository

logger = logging.getLogger(__name__)

PRICE_KEY = "pricePerCig"
USER_NAME_KEY = "userName"
USER_EMAIL_KEY = "userEmail"
JOIN_DATE_KEY = "joinDate"
LAST_SMOKED_KEY = "lastSmokedTime"
LOGGED_IN_KEY = "isLoggedIn"


class KeyValueSettingsRepository(AbstractSettingsRepository):
    """Maps AppSettings onto individual keys; bad values read as defaults."""

    def __init__(self, store: AbstractKeyValueStore) -> None:
        self._store = store

    def _read(self, key: str) -> str | None:
        blob = self._store.get(key)
        if blob is None:
            return None
        try:
            return blob.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Ignoring non UTF-8 value stored under %s", key)
            return None

    def _write(self, key: str, value: str) -> None:
        self._store.set(key, value.encode("utf-8"))

    # ---------------------------------------------------------------------
    # Public methods
    # ---------------------------------------------------------------------

    def get(self) -> AppSettings:
        settings = AppSettings()

        price = self._read(PRICE_KEY)
        if price is not None:
            settings.price_per_cig = price
        settings.user_name = self._read(USER_NAME_KEY) or ""
        settings.user_email = self._read(USER_EMAIL_KEY) or ""
        settings.join_date = self._read(JOIN_DATE_KEY) or ""

        last_smoked = self._read(LAST_SMOKED_KEY)
        if last_smoked is not None:
            try:
                settings.last_smoked_time = float(last_smoked)
            except ValueError:
                logger.warning("Ignoring unparsable %s: %r", LAST_SMOKED_KEY, last_smoked)

        settings.is_logged_in = self._read(LOGGED_IN_KEY) == "true"
        return settings

    def update(self, settings: AppSettings) -> None:
        self._write(PRICE_KEY, settings.price_per_cig)
        self._write(USER_NAME_KEY, settings.user_name)
        self._write(USER_EMAIL_KEY, settings.user_email)
        self._write(JOIN_DATE_KEY, settings.join_date)
        self._write(LAST_SMOKED_KEY, repr(settings.last_smoked_time))
        self._write(LOGGED_IN_KEY, "true" if settings.is_logged_in else "false")
