# 💬 songbot/bot/services/telegram_session.py
"""
💬 TelegramSession — IChatSession для одного виклику команди в Telegram.

Усі повідомлення йдуть у чат команди з `parse_mode=HTML`; очікування відповіді
делегується `ReplyWaiter`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Bot, InputFile, Update								# 🤖 Telegram API
from telegram.constants import ParseMode								# 🧾 HTML-розмітка

# 🔠 Системні імпорти
import logging
from typing import Any, Optional

# 🧩 Внутрішні модулі проєкту
from songbot.domain.music.interfaces import AudioSource, MessageId, PromptResult
from songbot.shared.utils.logger import LOG_NAME
from .reply_waiter import ReplyWaiter

logger = logging.getLogger(f"{LOG_NAME}.session")

PLATFORM_NAME = "telegram"
DEFAULT_AUDIO_FILENAME = "audio.mp3"
SONG_LIST_FILENAME = "song_list.png"


class TelegramSession:
    """💬 Чат + користувач + бот, зібрані з апдейта команди."""

    platform = PLATFORM_NAME

    def __init__(self, bot: Bot, chat_id: int, user_id: int, waiter: ReplyWaiter) -> None:
        self._bot = bot
        self.chat_id = chat_id
        self.user_id = user_id
        self._waiter = waiter

    @classmethod
    def from_update(cls, update: Update, context: Any, waiter: ReplyWaiter) -> "TelegramSession":
        chat = update.effective_chat
        user = update.effective_user
        if chat is None or user is None:
            raise ValueError("update has no chat or user")
        return cls(context.bot, chat.id, user.id, waiter)

    # ================================
    # 📤 ВІДПРАВКА
    # ================================
    async def send_text(self, text: str) -> Optional[MessageId]:
        message = await self._bot.send_message(self.chat_id, text, parse_mode=ParseMode.HTML)
        return message.message_id

    async def send_image(self, image: bytes, caption: str) -> Optional[MessageId]:
        message = await self._bot.send_photo(
            self.chat_id,
            photo=InputFile(image, filename=SONG_LIST_FILENAME),
            caption=caption,
            parse_mode=ParseMode.HTML,
        )
        return message.message_id

    async def send_audio(
        self,
        audio: AudioSource,
        *,
        title: Optional[str] = None,
        performer: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> Optional[MessageId]:
        payload: Any = audio
        if isinstance(audio, (bytes, bytearray)):
            payload = InputFile(bytes(audio), filename=filename or DEFAULT_AUDIO_FILENAME)
        message = await self._bot.send_audio(
            self.chat_id,
            audio=payload,
            title=title,
            performer=performer,
        )
        return message.message_id

    async def delete_message(self, message_id: MessageId) -> None:
        await self._bot.delete_message(self.chat_id, int(message_id))

    # ================================
    # ⏳ ОЧІКУВАННЯ
    # ================================
    async def prompt(self, timeout_ms: int) -> PromptResult:
        return await self._waiter.wait(self.chat_id, self.user_id, timeout_ms / 1000)
