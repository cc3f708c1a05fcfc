# 🛠️ songbot/errors/error_handler.py
"""
🛠️ Декоратор безпечного виконання async-хендлерів.

🔹 Не змінює сигнатуру, пропускає `asyncio.CancelledError`.
🔹 Шукає `Update` серед аргументів і делегує виняток `ExceptionHandlerService`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Update											# 🤖 Telegram DTO

# 🔠 Системні імпорти
import asyncio														# ⏱️ CancelledError
import functools													# 🧱 wraps
import logging														# 🧾 Логи
from typing import Any, Callable, Coroutine, Optional				# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from songbot.shared.utils.logger import LOG_NAME
from .exception_handler_service import ExceptionHandlerService		# 🛡️ Центральний сервіс

logger = logging.getLogger(f"{LOG_NAME}.errors.handler")

AsyncHandler = Callable[..., Coroutine[Any, Any, Any]]


def make_error_handler(service: ExceptionHandlerService) -> Callable[[AsyncHandler], AsyncHandler]:
    """Створює декоратор, замкнений на `service`."""

    def decorator(func: AsyncHandler) -> AsyncHandler:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except asyncio.CancelledError:
                logger.info("⏹️ handler cancelled", extra={"handler": func.__name__})
                raise											# ⚠️ Ніколи не глотаємо cancel
            except Exception as exc:  # noqa: BLE001
                update: Optional[Update] = kwargs.get("update")
                if update is None:
                    update = next((arg for arg in args if isinstance(arg, Update)), None)
                logger.error(
                    "🔥 handler exception",
                    extra={"handler": func.__name__, "has_update": update is not None},
                    exc_info=True,
                )
                await service.handle(exc, update)
                return None

        return wrapper

    return decorator


__all__ = ["make_error_handler"]
