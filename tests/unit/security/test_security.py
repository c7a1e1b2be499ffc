import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

import config
from security.auth import authorized_only
from security import rate_limiter
from security.rate_limiter import rate_limited, reset_rate_limits


def _update(user_id: int = 1):
    update = MagicMock()
    update.effective_user.id = user_id
    update.message.reply_text = AsyncMock()
    return update


@pytest.fixture(autouse=True)
def clean_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


class TestAuthorizedOnly:
    def test_empty_whitelist_allows_everyone(self, monkeypatch):
        monkeypatch.setattr(config, "ALLOWED_USER_IDS", [])
        handler = AsyncMock(return_value="ok")

        result = asyncio.run(authorized_only(handler)(_update(5), MagicMock()))

        assert result == "ok"

    def test_blocks_user_outside_whitelist(self, monkeypatch):
        monkeypatch.setattr(config, "ALLOWED_USER_IDS", [1, 2])
        handler = AsyncMock()
        update = _update(5)

        asyncio.run(authorized_only(handler)(update, MagicMock()))

        handler.assert_not_called()
        update.message.reply_text.assert_awaited_once()

    def test_allows_whitelisted_user(self, monkeypatch):
        monkeypatch.setattr(config, "ALLOWED_USER_IDS", [1, 2])
        handler = AsyncMock()

        asyncio.run(authorized_only(handler)(_update(2), MagicMock()))

        handler.assert_awaited_once()


class TestRateLimited:
    def test_blocks_after_limit(self, monkeypatch):
        monkeypatch.setattr(config, "RATE_LIMIT_MESSAGES", 2)
        handler = AsyncMock()
        wrapped = rate_limited(handler)
        update = _update()

        for _ in range(3):
            asyncio.run(wrapped(update, MagicMock()))

        assert handler.await_count == 2
        assert "Too many requests" in update.message.reply_text.call_args[0][0]

    def test_limits_are_per_user(self, monkeypatch):
        monkeypatch.setattr(config, "RATE_LIMIT_MESSAGES", 1)
        handler = AsyncMock()
        wrapped = rate_limited(handler)

        asyncio.run(wrapped(_update(1), MagicMock()))
        asyncio.run(wrapped(_update(2), MagicMock()))

        assert handler.await_count == 2

    def test_window_expiry_allows_again(self, monkeypatch):
        monkeypatch.setattr(config, "RATE_LIMIT_MESSAGES", 1)
        monkeypatch.setattr(config, "RATE_LIMIT_WINDOW_SECONDS", 60)
        monkeypatch.setattr(rate_limiter, "time", MagicMock(time=MagicMock(side_effect=[1000.0, 1100.0])))
        handler = AsyncMock()
        wrapped = rate_limited(handler)

        asyncio.run(wrapped(_update(), MagicMock()))
        asyncio.run(wrapped(_update(), MagicMock()))

        assert handler.await_count == 2
