"""
security/rate_limiter.py
-------------------------
Per-user sliding-window rate limiting for bot commands.
"""

import time
from collections import defaultdict
from functools import wraps
from typing import Callable

from telegram import Update
from telegram.ext import ContextTypes

import config
from utils.logger import get_logger

logger = get_logger(__name__)

# {user_id: [timestamp1, timestamp2, ...]}
_user_timestamps: dict[int, list[float]] = defaultdict(list)


def _cleanup(user_id: int, now: float) -> None:
    cutoff = now - config.RATE_LIMIT_WINDOW_SECONDS
    _user_timestamps[user_id] = [t for t in _user_timestamps[user_id] if t > cutoff]


def reset_rate_limits() -> None:
    """Forget all tracked timestamps."""
    _user_timestamps.clear()


def rate_limited(func: Callable):
    """
    Decorator that allows at most RATE_LIMIT_MESSAGES commands per user
    within RATE_LIMIT_WINDOW_SECONDS. Blocked calls get a warning reply
    and never reach the handler.
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if not user:
            return

        now = time.time()
        _cleanup(user.id, now)

        if len(_user_timestamps[user.id]) >= config.RATE_LIMIT_MESSAGES:
            logger.warning(f"⚠️ Rate limit hit for user {user.id}")
            await update.message.reply_text(
                "⚠️ Too many requests. Please wait a moment and try again."
            )
            return

        _user_timestamps[user.id].append(now)
        return await func(update, context, *args, **kwargs)

    return wrapper
