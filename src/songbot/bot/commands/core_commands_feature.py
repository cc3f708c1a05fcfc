# 📬 songbot/bot/commands/core_commands_feature.py
"""
📬 Базові команди `/start` та `/help`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Update												# 📡 Вхідний апдейт
from telegram.constants import ParseMode
from telegram.ext import Application, CommandHandler					# 🧰 Реєстрація команд

# 🔠 Системні імпорти
import html																# 🛡️ Екранування для ParseMode.HTML
import logging															# 🧾 Логування

# 🧩 Внутрішні модулі проєкту
from songbot.bot.commands.base import BaseFeature						# 🏛️ Контракт фічі
from songbot.bot.services.custom_context import CustomContext			# 🧠 Контекст
from songbot.bot.ui import static_messages as msg						# 📝 Тексти
from songbot.config.music_config import MusicConfig						# 🎛️ Команди й таймаут
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.commands")


class CoreCommandsFeature(BaseFeature):
    """✨ `/start` і `/help` з підставленими з конфігу командами та таймаутом."""

    def __init__(self, config: MusicConfig) -> None:
        self._config = config

    def register_handlers(self, application: Application) -> None:
        application.add_handler(CommandHandler("start", self.start_command))
        application.add_handler(CommandHandler("help", self.help_command))
        logger.info("🧾 Core commands registered (start/help)")

    # ================================
    # 📝 ТЕКСТИ
    # ================================
    def welcome_text(self) -> str:
        names = [f"/{name}" for name in self._config.command_names]
        names.extend(html.escape(alias) for alias in self._config.text_aliases)
        return msg.HELP_WELCOME.format(aliases=", ".join(names))

    def usage_text(self) -> str:
        return msg.HELP_USAGE.format(
            seconds=self._config.wait_seconds_label,
            exit_commands=", ".join(html.escape(cmd) for cmd in self._config.exit_commands),
        )

    # ================================
    # ▶️ ХЕНДЛЕРИ
    # ================================
    async def start_command(self, update: Update, context: CustomContext) -> None:
        user_id = getattr(update.effective_user, "id", "unknown")
        logger.info("➡️ /start by user=%s", user_id)
        if update.effective_message is None:
            return
        await update.effective_message.reply_text(self.welcome_text(), parse_mode=ParseMode.HTML)

    async def help_command(self, update: Update, context: CustomContext) -> None:
        user_id = getattr(update.effective_user, "id", "unknown")
        logger.info("ℹ️ /help by user=%s", user_id)
        if update.effective_message is None:
            return
        await update.effective_message.reply_text(self.usage_text(), parse_mode=ParseMode.HTML)
