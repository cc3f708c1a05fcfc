# 🏛️ songbot/bot/commands/base.py
"""🏛️ BaseFeature — контракт фічі: сама реєструє свої хендлери в Application."""

from __future__ import annotations

from abc import ABC, abstractmethod

from telegram.ext import Application


class BaseFeature(ABC):
    """Фіча бота: набір команд/хендлерів, що реєструються разом."""

    @abstractmethod
    def register_handlers(self, application: Application) -> None:
        """Додає хендлери фічі в `application`."""
