"""Price parsing and money formatting helpers."""

from __future__ import annotations

import math

DEFAULT_CURRENCY = "₹"


def parse_price(value: str | float | int | None) -> float:
    """Parse a price-per-cigarette value, falling back to 0 when unusable."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        price = float(value)
    else:
        text = str(value).strip()
        # float() accepts digit separators, a plain decimal string does not
        if "_" in text:
            return 0.0
        try:
            price = float(text)
        except ValueError:
            return 0.0
    if not math.isfinite(price):
        return 0.0
    return price


def format_spent(amount: float, currency: str = DEFAULT_CURRENCY) -> str:
    if float(amount).is_integer():
        return f"{currency}{int(amount)}"
    return f"{currency}{amount:.2f}"
