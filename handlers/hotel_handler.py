"""
handlers/hotel_handler.py
--------------------------
Handles hotel commands. Delegates all logic to HotelService, which
main.py stores in `bot_data["hotel_service"]`.

Users see one-based page numbers; HotelService pages are zero-based.
"""

from typing import Optional

from telegram import Update
from telegram.constants import MessageLimit
from telegram.ext import ContextTypes

from models.hotel import Hotel
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from services.hotel_service import HotelService
from utils.exceptions import HotelNotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 10


def _service(context: ContextTypes.DEFAULT_TYPE) -> HotelService:
    return context.bot_data["hotel_service"]


def _parse_id(args: list[str]) -> Optional[int]:
    """First command argument as a hotel id, or None if missing or not a number."""
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def _telegram_length(text: str) -> int:
    # Telegram counts UTF-16 code units, so emoji outside the BMP count twice
    return len(text.encode("utf-16-le")) // 2


def split_message(lines: list[str], limit: int = MessageLimit.MAX_TEXT_LENGTH) -> list[str]:
    """
    Join lines with newlines into as few messages as possible,
    none longer than `limit`. Lines are never split.
    """
    chunks = []
    current = ""
    for line in lines:
        candidate = f"{current}\n{line}" if current else line
        if current and _telegram_length(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks


def format_hotel(hotel: Hotel) -> str:
    """Multi-line description of a single hotel."""
    lines = [f"🏨 {hotel}"]
    if hotel.description:
        lines.append(hotel.description)
    if hotel.created_at:
        lines.append(f"📅 Added {hotel.created_at:%Y-%m-%d}")
    return "\n".join(lines)


@authorized_only
@rate_limited
async def hotels_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /hotels [page] [size] - list hotels ordered by id.

    Usage:
        /hotels         → first page, 10 per page
        /hotels 2       → second page
        /hotels 1 25    → first page, 25 per page
    """
    try:
        page = int(context.args[0]) if context.args else 1
        size = int(context.args[1]) if len(context.args) > 1 else DEFAULT_PAGE_SIZE
        result = _service(context).get_all_hotels(page - 1, size)
    except ValueError:
        await update.message.reply_text(
            "⚠️ Usage: /hotels [page] [size]\nPage starts at 1, size must be at least 1."
        )
        return

    if not result.items:
        await update.message.reply_text("📭 No hotels on this page.")
        return

    lines = [
        f"🏨 Hotels, page {result.page + 1}/{result.total_pages} "
        f"({result.total_elements} total)\n"
    ]
    lines.extend(str(h) for h in result)
    if result.has_next:
        lines.append(f"\n➡️ Next: /hotels {result.page + 2} {result.size}")

    for chunk in split_message(lines):
        await update.message.reply_text(chunk)


@authorized_only
@rate_limited
async def hotel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /hotel <id> - show one hotel."""
    hotel_id = _parse_id(context.args)
    if hotel_id is None:
        await update.message.reply_text("⚠️ Usage: /hotel <id>\nExample: /hotel 5")
        return

    hotel = _service(context).get_hotel(hotel_id)
    if hotel is None:
        await update.message.reply_text(f"❌ Hotel #{hotel_id} not found.")
        return
    await update.message.reply_text(format_hotel(hotel))


@authorized_only
@rate_limited
async def add_hotel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /add_hotel <title> [| city] [| rating].

    Examples:
        /add_hotel Grand
        /add_hotel Grand Plaza | Lisbon | 4
    """
    parts = [p.strip() for p in " ".join(context.args).split("|")]
    if not parts[0]:
        await update.message.reply_text(
            "⚠️ Usage: /add_hotel <title> [| city] [| rating]\n"
            "Example: /add_hotel Grand Plaza | Lisbon | 4"
        )
        return

    city = parts[1] if len(parts) > 1 and parts[1] else None
    rating = None
    if len(parts) > 2 and parts[2]:
        rating = int(parts[2]) if parts[2].isdigit() else 0
        if not 1 <= rating <= 5:
            await update.message.reply_text("⚠️ Rating must be a whole number from 1 to 5.")
            return

    hotel = Hotel(
        title=parts[0],
        city=city,
        rating=rating,
    )
    saved = _service(context).create_hotel(hotel)
    logger.info(f"User {update.effective_user.id} added hotel #{saved.id}")
    await update.message.reply_text(f"✅ Added hotel #{saved.id}: {saved.title}")


@authorized_only
@rate_limited
async def edit_hotel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /edit_hotel <id> <new title> - rename a hotel."""
    hotel_id = _parse_id(context.args)
    title = " ".join(context.args[1:]).strip()
    if hotel_id is None or not title:
        await update.message.reply_text(
            "⚠️ Usage: /edit_hotel <id> <new title>\nExample: /edit_hotel 5 Grand Plaza"
        )
        return

    service = _service(context)
    try:
        hotel = service.require_hotel(hotel_id)
        hotel.title = title
        service.update_hotel(hotel)
    except HotelNotFoundError:
        await update.message.reply_text(f"❌ Hotel #{hotel_id} not found.")
        return

    await update.message.reply_text(f"✏️ Hotel #{hotel_id} renamed to: {title}")


@authorized_only
@rate_limited
async def delete_hotel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /delete_hotel <id>."""
    hotel_id = _parse_id(context.args)
    if hotel_id is None:
        await update.message.reply_text("⚠️ Usage: /delete_hotel <id>\nExample: /delete_hotel 5")
        return

    _service(context).delete_hotel(hotel_id)
    await update.message.reply_text(f"🗑️ Hotel #{hotel_id} deleted.")


@authorized_only
@rate_limited
async def redact_hotel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /redact_hotel <id> - mask e-mails and phone numbers in the title."""
    hotel_id = _parse_id(context.args)
    if hotel_id is None:
        await update.message.reply_text("⚠️ Usage: /redact_hotel <id>")
        return

    if _service(context).redact_hotel_title(hotel_id):
        await update.message.reply_text(f"🔒 Title of hotel #{hotel_id} redacted.")
    else:
        await update.message.reply_text(f"❌ Hotel #{hotel_id} not found.")
