"""Tests for hub message rendering."""

import datetime as dt

import pytest

from puff_tracker.core.entities.settings import AppSettings
from puff_tracker.core.usecases.get_dashboard import Dashboard
from puff_tracker.utils.hub import (
    build_hub_keyboard,
    build_hub_text,
    build_profile_text,
    format_time_since,
)

NOW = dt.datetime(2024, 5, 1, 12, 0)


@pytest.mark.parametrize(
    "delta,expected",
    [
        (dt.timedelta(seconds=0), "just now"),
        (dt.timedelta(seconds=59), "just now"),
        (dt.timedelta(seconds=60), "1m"),
        (dt.timedelta(minutes=59, seconds=59), "59m"),
        (dt.timedelta(hours=1), "1h 0m"),
        (dt.timedelta(hours=26, minutes=5), "26h 5m"),
    ],
)
def test_format_time_since(delta, expected):
    assert format_time_since(NOW - delta, NOW) == expected


@pytest.mark.parametrize("ahead", [dt.timedelta(seconds=30), dt.timedelta(hours=2)])
def test_format_time_since_future_entry(ahead):
    assert format_time_since(NOW + ahead, NOW) == "just now"


def test_format_time_since_mixed_awareness():
    now = dt.datetime.now().astimezone()
    then = (now - dt.timedelta(minutes=5)).replace(tzinfo=None)

    assert format_time_since(then, now) == "5m"


def test_hub_text_with_entries():
    dashboard = Dashboard(
        now=NOW,
        today_count=3,
        total_count=23,
        total_packs=1,
        total_spent=57.5,
        last_smoked_at=NOW - dt.timedelta(hours=1, minutes=5),
    )

    text = build_hub_text(dashboard)

    assert "<b>3</b> Today's Count" in text
    assert "Last smoked: 1h 5m ago" in text
    assert "Total: 23" in text
    assert "Packs: 1" in text
    assert "Spent: ₹57.50" in text


def test_hub_text_without_entries():
    dashboard = Dashboard(now=NOW, today_count=0, total_count=0, total_packs=0, total_spent=0.0)

    text = build_hub_text(dashboard)

    assert "You haven't smoked yet today!" in text
    assert "Spent: ₹0" in text


def test_hub_keyboard_callbacks():
    keyboard = build_hub_keyboard()

    callbacks = [button.callback_data for row in keyboard.inline_keyboard for button in row]
    assert callbacks == ["SMOKE_NOW", "REFRESH"]


def test_profile_text_escapes_user_values():
    settings = AppSettings(user_name="Tom & <Jerry>", user_email="a<b@example.com", join_date="2024-05-01")

    text = build_profile_text(settings)

    assert "Name: Tom &amp; &lt;Jerry&gt;" in text
    assert "Email: a&lt;b@example.com" in text
    assert "Joined: 2024-05-01" in text
    assert "<Jerry>" not in text


def test_profile_text_placeholders():
    text = build_profile_text(AppSettings())

    assert "Name: —" in text
    assert "Email: —" in text
    assert "Joined: —" in text
