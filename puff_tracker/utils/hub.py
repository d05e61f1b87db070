"""Utilities to generate and update the single hub message."""

from __future__ import annotations

import datetime as dt

from aiogram import html
from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from puff_tracker.core.entities.finance import format_spent
from puff_tracker.core.entities.settings import AppSettings
from puff_tracker.core.usecases.get_dashboard import Dashboard


def format_time_since(then: dt.datetime, now: dt.datetime) -> str:
    # mixing naive (local) and aware datetimes: treat naive as local time
    if (then.tzinfo is None) != (now.tzinfo is None):
        then, now = then.astimezone(), now.astimezone()

    # an entry slightly in the future reads as "just now"
    seconds = max(0, int((now - then).total_seconds()))
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60

    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m"
    return "just now"


def build_hub_text(dashboard: Dashboard) -> str:
    lines: list[str] = ["🚬 <b>Tracker</b>", ""]

    lines.append(f"<b>{dashboard.today_count}</b> Today's Count")

    if dashboard.last_smoked_at is not None:
        since = format_time_since(dashboard.last_smoked_at, dashboard.now)
        lines.append(f"⏱️ Last smoked: {since} ago")
    else:
        lines.append("🚭 You haven't smoked yet today!")

    lines.append("")
    lines.append(f"🔥 Total: {dashboard.total_count}")
    lines.append(f"📦 Packs: {dashboard.total_packs}")
    lines.append(f"💳 Spent: {format_spent(dashboard.total_spent)}")

    return "\n".join(lines)


def build_hub_keyboard() -> InlineKeyboardMarkup:
    add_btn = InlineKeyboardButton(text="🚬 Add Cigarette", callback_data="SMOKE_NOW")
    refresh_btn = InlineKeyboardButton(text="🔄 Refresh", callback_data="REFRESH")
    return InlineKeyboardMarkup(inline_keyboard=[[add_btn], [refresh_btn]])


def build_profile_text(settings: AppSettings) -> str:
    # profile values come from Telegram or the user, escape before HTML parse mode
    name = html.quote(settings.user_name) if settings.user_name else "—"
    email = html.quote(settings.user_email) if settings.user_email else "—"
    joined = html.quote(settings.join_date) if settings.join_date else "—"
    return (
        "👤 <b>Profile</b>\n"
        f"Name: {name}\n"
        f"Email: {email}\n"
        f"Joined: {joined}"
    )
