from unittest.mock import AsyncMock, MagicMock

import pytest

import config
from security.rate_limiter import reset_rate_limits


@pytest.fixture(autouse=True)
def open_bot(monkeypatch):
    """No whitelist and a fresh rate limiter for every test."""
    monkeypatch.setattr(config, "ALLOWED_USER_IDS", [])
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def make_update():
    def _factory(user_id: int = 100):
        update = MagicMock()
        update.effective_user.id = user_id
        update.effective_user.first_name = "Sara"
        update.message.reply_text = AsyncMock()
        return update

    return _factory


@pytest.fixture
def make_context(hotel_service):
    def _factory(*args: str):
        context = MagicMock()
        context.args = list(args)
        context.bot_data = {"hotel_service": hotel_service}
        return context

    return _factory