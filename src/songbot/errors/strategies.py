# 📜 songbot/errors/strategies.py
"""
📜 Стратегії конвертації сторонніх винятків у доменні `AppError`.

🔹 Кожна стратегія знає лише одну бібліотеку: httpx, Telegram або рендер (Playwright).
🔹 Повертає `UserVisibleError` з готовим текстом або None, якщо виняток не її.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 HTTP-клієнт (винятки)
from playwright.async_api import Error as PlaywrightError				# 🧭 Помилки браузера
from telegram.error import RetryAfter, TelegramError					# 🤖 Telegram винятки

# 🔠 Системні імпорти
import logging															# 🧾 Логування стратегій
from typing import Optional, Protocol									# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from songbot.bot.ui import static_messages as msg						# 💬 Повідомлення
from songbot.shared.errors import AppError, NetworkRequestError, RenderError, UserVisibleError
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.errors.strategies")


# ================================
# 🧠 КОНТРАКТ СТРАТЕГІЙ
# ================================
class IErrorHandlingStrategy(Protocol):
    """🧠 Єдиний метод `handle`: AppError або None."""

    def handle(self, error: Exception) -> Optional[AppError]:
        ...


def _request_url(error: Exception) -> str:
    try:
        return str(error.request.url)									# type: ignore[attr-defined]
    except (AttributeError, RuntimeError):								# 🔎 httpx кидає RuntimeError, якщо request не задано
        return "N/A"


# ================================
# 🌐 HTTPX-СТРАТЕГІЯ
# ================================
class HttpxErrorStrategy(IErrorHandlingStrategy):
    """🌐 Перетворює httpx-помилки на `NetworkRequestError`."""

    def handle(self, error: Exception) -> Optional[AppError]:
        if isinstance(error, httpx.TimeoutException):					# ⏱️ Таймаути запиту
            url = _request_url(error)
            logger.debug("⏱️ httpx timeout", extra={"url": url})
            return NetworkRequestError(msg.ERROR_HTTP_TIMEOUT, url=url, details=str(error))

        if isinstance(error, httpx.ConnectError):						# 🌐 Не вдалося підʼєднатися
            url = _request_url(error)
            logger.debug("🌐 httpx connect error", extra={"url": url})
            return NetworkRequestError(msg.ERROR_HTTP_CONNECTION, url=url, details=str(error))

        if isinstance(error, httpx.HTTPStatusError):					# 🔢 Неочікуваний статус
            status = error.response.status_code
            url = _request_url(error)
            logger.debug("🔢 httpx status error", extra={"url": url, "status": status})
            return NetworkRequestError(
                msg.ERROR_HTTP_STATUS.format(status_code=status),
                url=url,
                status_code=status,
                details=str(error),
            )

        return None


# ================================
# 🤖 TELEGRAM-СТРАТЕГІЯ
# ================================
class TelegramErrorStrategy(IErrorHandlingStrategy):
    """🤖 Конвертує Telegram-помилки в `NetworkRequestError`."""

    def handle(self, error: Exception) -> Optional[AppError]:
        if isinstance(error, RetryAfter):								# ⏳ Telegram просить повторити
            retry_after = error.retry_after
            secs = int(retry_after.total_seconds()) if hasattr(retry_after, "total_seconds") else int(retry_after)
            logger.debug("⏳ Telegram retry_after", extra={"seconds": secs})
            return NetworkRequestError(
                msg.ERROR_TELEGRAM_RETRY_AFTER.format(seconds=secs),
                details=str(error),
                retry_after_s=secs,
            )
        if isinstance(error, TelegramError):
            logger.debug("🤖 Telegram general error")
            return NetworkRequestError(msg.ERROR_TELEGRAM_GENERAL, details=str(error))
        return None


# ================================
# 🖼️ РЕНДЕР-СТРАТЕГІЯ
# ================================
class RenderErrorStrategy(IErrorHandlingStrategy):
    """🖼️ Збій headless-браузера → коротке повідомлення замість стектрейсу."""

    def handle(self, error: Exception) -> Optional[AppError]:
        if isinstance(error, (RenderError, PlaywrightError)):
            logger.debug("🖼️ render failure: %s", error)
            return UserVisibleError(msg.ERROR_RENDER, details=str(error))
        return None


__all__ = [
    "IErrorHandlingStrategy",
    "HttpxErrorStrategy",
    "TelegramErrorStrategy",
    "RenderErrorStrategy",
]
