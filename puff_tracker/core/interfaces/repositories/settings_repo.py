"""Repository interface for AppSettings."""

from __future__ import annotations

import abc
from typing import Protocol

from puff_tracker.core.entities.settings import AppSettings


class AbstractSettingsRepository(Protocol):
    """Settings repository contract."""

    @abc.abstractmethod
    def get(self) -> AppSettings: ...

    @abc.abstractmethod
    def update(self, settings: AppSettings) -> None: ...
