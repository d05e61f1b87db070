"""Entry point for the Puff Puff Pass Telegram bot.

Usage:
    export BOT_TOKEN="<your_token>"
    python -m puff_tracker.entrypoints.bot_main            # long polling
    BASE_URL=https://example.org python -m puff_tracker.entrypoints.bot_main --webhook
"""

from __future__ import annotations

import argparse
import asyncio
import datetime as dt
import logging
import os

from aiohttp import web
from aiogram import Bot, Dispatcher, F
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command, CommandObject, CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.fsm.state import State, StatesGroup
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import CallbackQuery, Message
from aiogram.webhook.aiohttp_server import SimpleRequestHandler, setup_application

from puff_tracker.core.entities.cigarette_log import CigaretteLog
from puff_tracker.core.entities.finance import format_spent
from puff_tracker.core.interfaces.repositories.settings_repo import AbstractSettingsRepository
from puff_tracker.core.usecases import (
    get_dashboard as get_dashboard_uc,
    register_cigarette as register_cigarette_uc,
    update_price as update_price_uc,
)
from puff_tracker.dataproviders.db import init_db
from puff_tracker.dataproviders.repositories.kv_store import SqlAlchemyKeyValueStore
from puff_tracker.dataproviders.repositories.settings_repository import (
    KeyValueSettingsRepository,
)
from puff_tracker.utils import hub

# ---------------------------------------------------------------------------
# Configure logging & DB
# ---------------------------------------------------------------------------
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
logger = logging.getLogger(__name__)

init_db()

# ---------------------------------------------------------------------------
# Per-user state (loaded lazily, kept for the process lifetime)
# ---------------------------------------------------------------------------

LOGS: dict[int, CigaretteLog] = {}
SETTINGS_REPOS: dict[int, AbstractSettingsRepository] = {}
HUB_MESSAGES: dict[int, int] = {}


def get_log(user_id: int) -> CigaretteLog:
    log = LOGS.get(user_id)
    if log is None:
        log = CigaretteLog(SqlAlchemyKeyValueStore(namespace=str(user_id)))
        log.load()
        LOGS[user_id] = log
        logger.info("Loaded %d entries for user %s", log.total_count(), user_id)
    return log


def get_settings_repo(user_id: int) -> AbstractSettingsRepository:
    repo = SETTINGS_REPOS.get(user_id)
    if repo is None:
        repo = KeyValueSettingsRepository(SqlAlchemyKeyValueStore(namespace=str(user_id)))
        SETTINGS_REPOS[user_id] = repo
    return repo


# ---------------------------------------------------------------------------
# Bot & Dispatcher
# ---------------------------------------------------------------------------
BOT_TOKEN = os.getenv("BOT_TOKEN")
if not BOT_TOKEN:
    raise RuntimeError("BOT_TOKEN env variable not set.")

bot = Bot(token=BOT_TOKEN, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
storage = MemoryStorage()
dp = Dispatcher(storage=storage)

# ---------------------------------------------------------------------------
# FSM States
# ---------------------------------------------------------------------------


class PriceState(StatesGroup):
    price_per_cig = State()


# ---------------------------------------------------------------------------
# Hub refresh function
# ---------------------------------------------------------------------------


async def refresh_hub(user_id: int) -> None:
    """Create or update the single hub message for the user."""
    settings = get_settings_repo(user_id).get()
    dashboard = get_dashboard_uc.execute(get_log(user_id), settings)

    text = hub.build_hub_text(dashboard)
    keyboard = hub.build_hub_keyboard()

    try:
        message_id = HUB_MESSAGES.get(user_id)
        if message_id:
            await bot.edit_message_text(
                chat_id=user_id,
                message_id=message_id,
                text=text,
                reply_markup=keyboard,
            )
            return
    except TelegramBadRequest as e:
        if "message is not modified" in str(e).lower():
            return  # nothing to update
        logger.info("Hub message for %s is gone, sending a new one: %s", user_id, e)

    sent = await bot.send_message(user_id, text=text, reply_markup=keyboard)
    HUB_MESSAGES[user_id] = sent.message_id


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


@dp.message(CommandStart())
async def cmd_start(message: Message) -> None:
    """Mark the user as logged in and show the hub."""
    user_id = message.from_user.id
    repo = get_settings_repo(user_id)
    settings = repo.get()

    if not settings.join_date:
        settings.join_date = dt.date.today().isoformat()
        settings.user_name = message.from_user.full_name
    settings.is_logged_in = True
    repo.update(settings)

    await refresh_hub(user_id)


@dp.callback_query(F.data == "SMOKE_NOW")
async def handle_smoke_now(callback: CallbackQuery) -> None:
    user_id = callback.from_user.id
    entry = register_cigarette_uc.execute(get_log(user_id), get_settings_repo(user_id))
    logger.info("User %s smoked at %s", user_id, entry.timestamp.isoformat())

    await callback.answer("Cigarette added")
    await refresh_hub(user_id)


@dp.callback_query(F.data == "REFRESH")
async def handle_refresh(callback: CallbackQuery) -> None:
    await refresh_hub(callback.from_user.id)
    await callback.answer("Updated")


# ---------------------------------------------------------------------------
# Price handlers
# ---------------------------------------------------------------------------


async def _save_price(message: Message, raw_price: str) -> None:
    settings = update_price_uc.execute(get_settings_repo(message.from_user.id), raw_price)
    if settings.price == 0:
        await message.reply("Price saved. It reads as 0, so spending will show ₹0.")
    else:
        await message.reply(f"Price per cigarette: {format_spent(settings.price)}")
    await refresh_hub(message.from_user.id)


@dp.message(Command("price"))
async def cmd_price(message: Message, command: CommandObject, state: FSMContext) -> None:
    if command.args:
        await _save_price(message, command.args)
        return

    await state.set_state(PriceState.price_per_cig)
    await message.answer("How much does one cigarette cost?")


@dp.message(PriceState.price_per_cig)
async def setup_price(message: Message, state: FSMContext) -> None:
    await state.clear()
    await _save_price(message, message.text or "")


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


@dp.message(Command("profile"))
async def cmd_profile(message: Message) -> None:
    settings = get_settings_repo(message.from_user.id).get()
    await message.answer(hub.build_profile_text(settings))


@dp.message(Command("logout"))
async def cmd_logout(message: Message) -> None:
    user_id = message.from_user.id
    repo = get_settings_repo(user_id)
    settings = repo.get()
    settings.is_logged_in = False
    repo.update(settings)

    HUB_MESSAGES.pop(user_id, None)
    await message.answer("Logged out. Send /start to come back.")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


WEBHOOK_PATH = "/webhook"


def build_webhook_app(base_url: str, secret: str) -> web.Application:
    """aiohttp app that feeds Telegram webhook updates into the dispatcher."""
    app = web.Application()

    async def on_startup(app: web.Application) -> None:
        await bot.set_webhook(f"{base_url}{WEBHOOK_PATH}", secret_token=secret)
        logger.info("Webhook set to %s%s", base_url, WEBHOOK_PATH)

    async def on_cleanup(app: web.Application) -> None:
        await bot.delete_webhook()

    SimpleRequestHandler(dispatcher=dp, bot=bot, secret_token=secret).register(app, path=WEBHOOK_PATH)
    setup_application(app, dp, bot=bot)

    app.on_startup.append(on_startup)
    app.on_cleanup.append(on_cleanup)
    return app


def run_webhook() -> None:
    base_url = os.getenv("BASE_URL")  # e.g. https://my-bot.onrender.com
    if not base_url:
        raise RuntimeError("BASE_URL env variable not set (required with --webhook)")
    secret = os.getenv("WEBHOOK_SECRET", "pppsecret")
    port = int(os.getenv("PORT", 8080))

    web.run_app(build_webhook_app(base_url.rstrip("/"), secret), host="0.0.0.0", port=port)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Puff Puff Pass Telegram bot")
    parser.add_argument(
        "--webhook",
        action="store_true",
        help="serve Telegram webhooks over HTTP (BASE_URL, PORT) instead of long polling",
    )
    args = parser.parse_args(argv)

    if args.webhook:
        logger.info("Starting Puff Puff Pass bot in webhook mode...")
        run_webhook()
    else:
        logger.info("Starting Puff Puff Pass bot...")
        asyncio.run(dp.start_polling(bot))


if __name__ == "__main__":
    main()
