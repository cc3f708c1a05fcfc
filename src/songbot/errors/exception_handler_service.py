# 🛡️ songbot/errors/exception_handler_service.py
"""
🛡️ Центральний сервіс обробки помилок бота.

🔹 Конвертує винятки в `AppError` через стратегії.
🔹 `UserVisibleError` показується як є, решта — загальним текстом.
🔹 Сам ніколи не падає, окрім `CancelledError`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Update											# 🤖 Telegram DTO

# 🔠 Системні імпорти
import asyncio														# ⏱️ CancelledError
import logging														# 🧾 Логування кроків
from typing import Any, Iterable, Mapping, Optional				# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from songbot.bot.ui import static_messages as msg					# 💬 Стандартні повідомлення
from songbot.shared.errors import AppError, UserVisibleError		# ⚠️ Доменні винятки
from songbot.shared.utils.logger import LOG_NAME					# 🏷️ Спільний неймспейс логів
from .strategies import IErrorHandlingStrategy						# 🧠 Конвертери винятків

logger = logging.getLogger(f"{LOG_NAME}.errors")


class ExceptionHandlerService:
    """🧠 Глобальний диспетчер помилок для асинхронних Telegram-хендлерів."""

    def __init__(self, strategies: Iterable[IErrorHandlingStrategy]) -> None:
        self._strategies = list(strategies)							# 📦 Копія списку
        logger.info("🛡️ ExceptionHandlerService init", extra={"strategies": len(self._strategies)})

    # ================================
    # 🔑 ПУБЛІЧНИЙ API
    # ================================
    async def handle(self, error: BaseException, update: Optional[Update]) -> None:
        if isinstance(error, asyncio.CancelledError):
            logger.info("⏹️ CancelledError passthrough")
            raise error

        domain_error = self.convert(error)
        user_id = self._extract_user_id(update)

        if isinstance(domain_error, UserVisibleError):
            logger.warning(
                "⚠️ UserVisibleError for user=%s: %s",
                user_id,
                domain_error.message,
                extra=self._extract_extra(domain_error),
            )
            await self._safe_reply(update, domain_error.message)
            return

        logger.error("🔥 Unhandled exception for user=%s", user_id, exc_info=error)
        await self._safe_reply(update, msg.ERROR_CRITICAL)

    def convert(self, error: BaseException) -> Optional[AppError]:
        """🔄 Пропускає виняток через стратегії; перша, що впізнала, перемагає."""
        for strategy in self._strategies:
            try:
                converted = strategy.handle(error)					# type: ignore[arg-type]
            except Exception as exc:  # noqa: BLE001
                logger.exception("🔥 Strategy failed: %r", strategy, exc_info=exc)
                continue
            if converted:
                logger.debug("🔁 Strategy converted error via %r", strategy)
                return converted

        if isinstance(error, AppError):
            return error
        return None

    # ================================
    # 🛠️ ДОПОМІЖНІ МЕТОДИ
    # ================================
    @staticmethod
    def _extract_user_id(update: Optional[Update]) -> str:
        user = getattr(update, "effective_user", None) if update else None
        return str(user.id) if user else "N/A"

    @staticmethod
    def _extract_extra(error: AppError) -> Optional[Mapping[str, Any]]:
        try:
            return dict(error.to_log_extra())
        except Exception:  # noqa: BLE001
            logger.debug("⚠️ to_log_extra failed", exc_info=True)
            return None

    async def _safe_reply(self, update: Optional[Update], text: str) -> None:
        """💬 Тихо намагається відповісти користувачу."""
        message = getattr(update, "effective_message", None) if update else None
        if not message:
            logger.debug("ℹ️ _safe_reply: no message object")
            return
        try:
            await message.reply_text(text)
        except Exception as send_err:  # noqa: BLE001
            logger.warning("⚠️ Failed to send error message: %s", send_err)


__all__ = ["ExceptionHandlerService"]
