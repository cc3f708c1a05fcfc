"""🚨 Обробка винятків Telegram-хендлерів."""

from .error_handler import make_error_handler
from .exception_handler_service import ExceptionHandlerService
from .strategies import (
    HttpxErrorStrategy,
    IErrorHandlingStrategy,
    RenderErrorStrategy,
    TelegramErrorStrategy,
)

__all__ = [
    "make_error_handler",
    "ExceptionHandlerService",
    "IErrorHandlingStrategy",
    "HttpxErrorStrategy",
    "TelegramErrorStrategy",
    "RenderErrorStrategy",
]
