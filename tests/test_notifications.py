"""Tests for Telegram notifications"""
import pytest

from app.services.notifications_service import TelegramNotificationService
from app.settings import settings


@pytest.mark.asyncio
async def test_send_activation_key(mock_bot):
    service = TelegramNotificationService(bot=mock_bot)

    assert await service.send_activation_key("123", "pro", "KEY123") is True

    chat_id, text = mock_bot.send_message.await_args.args
    assert chat_id == "123"
    assert "`KEY123`" in text
    assert "pro" in text


@pytest.mark.asyncio
async def test_disabled_without_bot():
    service = TelegramNotificationService(bot=None)
    assert service.enabled is False
    assert await service.send_activation_key("123", "pro", "KEY123") is False


@pytest.mark.asyncio
async def test_delivery_failure_is_swallowed(mock_bot):
    mock_bot.send_message.side_effect = RuntimeError("chat not found")
    service = TelegramNotificationService(bot=mock_bot)
    assert await service.send_activation_key("123", "pro", "KEY123") is False


@pytest.mark.asyncio
async def test_admin_notice(mock_bot):
    service = TelegramNotificationService(bot=mock_bot, admin_chat_id="42")

    assert await service.notify_admin_payment("123", "pro", "INV1") is True

    chat_id, text = mock_bot.send_message.await_args.args
    assert chat_id == "42"
    assert "INV1" in text


@pytest.mark.asyncio
async def test_admin_notice_skipped_without_admin_chat(mock_bot):
    service = TelegramNotificationService(bot=mock_bot)
    assert await service.notify_admin_payment("123", "pro", "INV1") is False
    mock_bot.send_message.assert_not_awaited()


def test_from_settings_without_token():
    service = TelegramNotificationService.from_settings()
    assert service.enabled is False


@pytest.mark.asyncio
async def test_close(mock_bot):
    await TelegramNotificationService(bot=mock_bot).close()
    mock_bot.session.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_admin_notice_without_invoice(mock_bot):
    service = TelegramNotificationService(bot=mock_bot, admin_chat_id="42")

    assert await service.notify_admin_payment("123", "pro", None) is True

    _, text = mock_bot.send_message.await_args.args
    assert "Invoice" not in text
    assert "None" not in text


def test_from_settings_with_malformed_token(monkeypatch):
    monkeypatch.setattr(settings, "telegram_bot_token", "not-a-token")
    service = TelegramNotificationService.from_settings()
    assert service.enabled is False
