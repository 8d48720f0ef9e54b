from typing import Optional

import sentry_sdk
import structlog
from aiogram import Bot
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.utils.token import TokenValidationError

from app.settings import settings

logger = structlog.getLogger(__name__)


class TelegramNotificationService:
    """Best-effort delivery of activation keys through the Telegram bot."""

    def __init__(self, bot: Optional[Bot] = None, admin_chat_id: Optional[str] = None):
        self.bot = bot
        self.admin_chat_id = admin_chat_id

    @classmethod
    def from_settings(cls) -> "TelegramNotificationService":
        if not settings.telegram_bot_token:
            return cls(bot=None, admin_chat_id=settings.telegram_admin_chat_id)
        try:
            bot = Bot(
                token=settings.telegram_bot_token,
                default=DefaultBotProperties(parse_mode=ParseMode.MARKDOWN),
            )
        except TokenValidationError as e:
            logger.error("Invalid TELEGRAM_BOT_TOKEN, Telegram messaging disabled", error=str(e))
            return cls(bot=None, admin_chat_id=settings.telegram_admin_chat_id)
        return cls(bot=bot, admin_chat_id=settings.telegram_admin_chat_id)

    @property
    def enabled(self) -> bool:
        return self.bot is not None

    @staticmethod
    def format_activation_message(package_id: Optional[str], activation_key: str) -> str:
        return "\n".join([
            "✅ *Your payment has been received*",
            "",
            f"Package: {package_id}",
            f"Activation key: `{activation_key}`",
            "",
            "Send this key to the bot to activate your subscription. The key can be used only once.",
        ])

    async def send_activation_key(self, chat_id: str, package_id: Optional[str], activation_key: str) -> bool:
        if not self.enabled:
            logger.warning("Telegram messaging disabled, activation key not delivered", chat_id=chat_id)
            return False
        try:
            await self.bot.send_message(chat_id, self.format_activation_message(package_id, activation_key))
            logger.info("Activation key delivered", chat_id=chat_id, package_id=package_id)
            return True
        except Exception as e:
            logger.error("Failed to send Telegram message", chat_id=chat_id, error=str(e))
            sentry_sdk.capture_exception(e)
            return False

    async def notify_admin_payment(self, chat_id: str, package_id: Optional[str], invoice_id: Optional[str]) -> bool:
        if not (self.enabled and self.admin_chat_id):
            return False
        lines = ["💰 Payment completed", f"Chat: `{chat_id}`", f"Package: {package_id}"]
        if invoice_id:
            lines.append(f"Invoice: `{invoice_id}`")
        try:
            await self.bot.send_message(self.admin_chat_id, "\n".join(lines))
            return True
        except Exception as e:
            logger.warning("Failed to notify admin chat", admin_chat_id=self.admin_chat_id, error=str(e))
            return False

    async def close(self):
        if self.bot is not None:
            await self.bot.session.close()
