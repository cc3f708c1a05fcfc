# 🎵 songbot/bot/commands/music_feature.py
"""
🎵 MusicFeature — команди пошуку пісні (`/music`, `/mdff`, `/song`) і текстовий аліас «点歌».

🔹 Усі хендлери з `block=False`: флоу чекає відповідь користувача, а PTB тим часом
   продовжує обробляти апдейти (зокрема саму відповідь у групі -1).
🔹 Кожен хендлер обгорнутий `make_error_handler`, тож збій рендеру чи Telegram
   перетворюється на коротке повідомлення.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Update												# 📡 Вхідний апдейт
from telegram.ext import Application, CommandHandler, MessageHandler, filters	# 🧰 Реєстрація

# 🔠 Системні імпорти
import logging															# 🧾 Логування
import re																# 🔎 Патерн аліасів
from typing import Optional, Sequence									# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from songbot.bot.commands.base import BaseFeature						# 🏛️ Контракт фічі
from songbot.bot.services.custom_context import CustomContext			# 🧠 Контекст
from songbot.bot.services.reply_waiter import ReplyWaiter				# ⏳ Очікування відповіді
from songbot.bot.services.telegram_session import TelegramSession		# 💬 IChatSession для Telegram
from songbot.config.music_config import MusicConfig						# 🎛️ Налаштування
from songbot.domain.music.selection_flow import FlowResult, SelectionFlow	# 🎛️ Флоу вибору
from songbot.errors.error_handler import make_error_handler				# 🛠️ Декоратор помилок
from songbot.errors.exception_handler_service import ExceptionHandlerService
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.music")


def build_alias_pattern(aliases: Sequence[str]) -> Optional[str]:
    """'点歌' → r'(?s)^\\s*(?:点歌)\\s*(.*)$'; None, якщо аліасів немає."""
    cleaned = [re.escape(alias.strip()) for alias in aliases if alias and alias.strip()]
    if not cleaned:
        return None
    return rf"(?s)^\s*(?:{'|'.join(cleaned)})\s*(.*)$"        # (?s): запит може займати кілька рядків


class MusicFeature(BaseFeature):
    """🎵 Точка входу користувача у флоу вибору пісні."""

    def __init__(
        self,
        flow: SelectionFlow,
        waiter: ReplyWaiter,
        config: MusicConfig,
        exception_handler: ExceptionHandlerService,
    ) -> None:
        self._flow = flow
        self._waiter = waiter
        self._config = config

        guard = make_error_handler(exception_handler)
        self.music_command = guard(self.music_command)					# type: ignore[method-assign]
        self.music_alias = guard(self.music_alias)						# type: ignore[method-assign]

    # ================================
    # 🔌 РЕЄСТРАЦІЯ
    # ================================
    def register_handlers(self, application: Application) -> None:
        commands = list(self._config.command_names)
        application.add_handler(CommandHandler(commands, self.music_command, block=False))

        pattern = build_alias_pattern(self._config.text_aliases)
        if pattern:
            application.add_handler(
                MessageHandler(filters.TEXT & ~filters.COMMAND & filters.Regex(pattern), self.music_alias, block=False)
            )
        logger.info("🧾 Music commands registered: %s (aliases=%s)", commands, list(self._config.text_aliases))

    # ================================
    # ▶️ ХЕНДЛЕРИ
    # ================================
    async def music_command(self, update: Update, context: CustomContext) -> Optional[FlowResult]:
        """`/music <назва пісні>`."""
        keyword = " ".join(context.args or [])
        return await self._run(update, context, keyword)

    async def music_alias(self, update: Update, context: CustomContext) -> Optional[FlowResult]:
        """`点歌<назва пісні>` (пробіл після аліаса необовʼязковий)."""
        matches = getattr(context, "matches", None) or []
        keyword = " ".join(matches[0].group(1).split()) if matches else ""
        return await self._run(update, context, keyword)

    async def _run(self, update: Update, context: CustomContext, keyword: str) -> Optional[FlowResult]:
        if update.effective_chat is None or update.effective_user is None:
            return None

        logger.info("➡️ music by user=%s keyword=%r", update.effective_user.id, keyword)
        session = TelegramSession.from_update(update, context, self._waiter)
        result = await self._flow.run(session, keyword)
        logger.info("🏁 music by user=%s → %s", update.effective_user.id, result.outcome.value)
        return result
