"""🧰 Сервіси Telegram-шару."""

from .custom_context import CustomContext
from .reply_waiter import ReplyWaiter
from .telegram_session import TelegramSession

__all__ = ["CustomContext", "ReplyWaiter", "TelegramSession"]
