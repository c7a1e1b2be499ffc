"""
handlers/start_handler.py
--------------------------
Handles /start, /help and /myid, plus the bot-wide error handler.
"""

from telegram import Update
from telegram.ext import ContextTypes

from security.auth import authorized_only
from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)

HELP_TEXT = """
🏨 *Welcome to HotelBot!*

*🔧 Available commands:*
/hotels \\[page] \\[size] - list hotels
/hotel <id> - show one hotel
/add\\_hotel <title> | <city> | <rating> - add a hotel
/edit\\_hotel <id> <title> - rename a hotel
/delete\\_hotel <id> - delete a hotel
/redact\\_hotel <id> - hide e-mails and phone numbers in a title
/myid - show your Telegram ID
/help - show this message
"""


@authorized_only
@rate_limited
async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - greet the user."""
    user = update.effective_user
    logger.info(f"User {user.id} ({user.first_name}) started the bot.")
    await update.message.reply_text(
        f"Hello {user.first_name}! 👋\n"
        f"I keep track of hotels.\n\n"
        f"Send /help to see all commands."
    )


@authorized_only
@rate_limited
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show all available commands."""
    await update.message.reply_text(HELP_TEXT, parse_mode="Markdown")


@authorized_only
async def myid_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /myid command - show user's Telegram ID for whitelisting."""
    user = update.effective_user
    await update.message.reply_text(
        f"🆔 Your Telegram ID: `{user.id}`\n"
        f"Add it to `ALLOWED_USER_IDS` in `.env` to lock the bot down.",
        parse_mode="Markdown",
    )


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors that escaped a handler and tell the user something went wrong."""
    logger.error(f"Unhandled error while processing an update: {context.error}", exc_info=context.error)
    if isinstance(update, Update) and update.effective_message:
        await update.effective_message.reply_text("⚠️ Something went wrong. Please try again later.")
