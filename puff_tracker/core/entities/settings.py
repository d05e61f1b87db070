"""Persisted per-user application settings."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from puff_tracker.core.entities.finance import parse_price


@dataclass(slots=True)
class AppSettings:
    price_per_cig: str = "0"  # raw decimal string, as typed by the user
    user_name: str = ""
    user_email: str = ""
    join_date: str = ""
    last_smoked_time: float = field(default_factory=time.time)  # epoch seconds
    is_logged_in: bool = False

    @property
    def price(self) -> float:
        return parse_price(self.price_per_cig)
