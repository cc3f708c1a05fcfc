# 🧠 songbot/bot/services/custom_context.py
"""🧠 CustomContext — PTB-контекст з доступом до DI-контейнера з `bot_data`."""

from __future__ import annotations

from typing import Any, Dict

from telegram.ext import CallbackContext, ExtBot


class CustomContext(CallbackContext[ExtBot, Dict[Any, Any], Dict[Any, Any], Dict[Any, Any]]):
    """Контекст хендлерів бота."""

    @property
    def container(self) -> Any:
        """📦 Контейнер, покладений у `bot_data` під час збірки Application."""
        return self.bot_data.get("container")
