"""
main.py
-------
Entry point for the HotelBot Telegram bot.

Responsibilities:
    - Initialize the database connection pool, schema and metrics.
    - Build the HotelService and hand it to the handlers via bot_data.
    - Configure and start the Telegram bot with all handlers.
"""

from telegram import BotCommand
from telegram.ext import Application, CommandHandler

from config import TELEGRAM_BOT_TOKEN
from db.connection import close_pool, init_pool
from db.init_db import create_tables
from handlers.hotel_handler import (
    add_hotel_command,
    delete_hotel_command,
    edit_hotel_command,
    hotel_command,
    hotels_command,
    redact_hotel_command,
)
from handlers.start_handler import error_handler, help_command, myid_command, start_command
from repositories.hotel_repo import PostgresHotelRepository
from services.hotel_service import HotelService
from utils.logger import get_logger
from utils.metrics import OpenTelemetryMetrics, setup_metrics

logger = get_logger(__name__)


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    commands = [
        BotCommand("start", "🚀 Start the bot"),
        BotCommand("help", "📖 Show help"),
        BotCommand("hotels", "🏨 List hotels"),
        BotCommand("hotel", "🔎 Show one hotel"),
        BotCommand("add_hotel", "➕ Add a hotel"),
        BotCommand("edit_hotel", "✏️ Rename a hotel"),
        BotCommand("delete_hotel", "🗑️ Delete a hotel"),
        BotCommand("redact_hotel", "🔒 Redact a hotel title"),
        BotCommand("myid", "🆔 Your Telegram ID"),
    ]
    await application.bot.set_my_commands(commands)
    logger.info("Bot commands menu registered successfully.")


def build_service() -> HotelService:
    """Wire the service to the PostgreSQL repository and OpenTelemetry counters."""
    return HotelService(repository=PostgresHotelRepository(), metrics=OpenTelemetryMetrics())


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Database + metrics setup ───────────────────────
    logger.info("Initializing database...")
    init_pool()
    create_tables()
    setup_metrics()

    # ── 2. Build the Telegram application ─────────────────
    logger.info("Starting Telegram bot...")
    app = Application.builder().token(TELEGRAM_BOT_TOKEN).post_init(set_bot_commands).build()
    app.bot_data["hotel_service"] = build_service()

    # ── 3. Register command handlers ──────────────────────
    app.add_handler(CommandHandler("start", start_command))
    app.add_handler(CommandHandler("help", help_command))
    app.add_handler(CommandHandler("myid", myid_command))
    app.add_handler(CommandHandler("hotels", hotels_command))
    app.add_handler(CommandHandler("hotel", hotel_command))
    app.add_handler(CommandHandler("add_hotel", add_hotel_command))
    app.add_handler(CommandHandler("edit_hotel", edit_hotel_command))
    app.add_handler(CommandHandler("delete_hotel", delete_hotel_command))
    app.add_handler(CommandHandler("redact_hotel", redact_hotel_command))
    app.add_error_handler(error_handler)

    # ── 4. Start polling ──────────────────────────────────
    logger.info("🚀 HotelBot is running! Press Ctrl+C to stop.")
    app.run_polling(drop_pending_updates=True, allowed_updates=["message"])

    # ── 5. Cleanup on shutdown ────────────────────────────
    close_pool()
    logger.info("HotelBot stopped.")


if __name__ == "__main__":
    main()
