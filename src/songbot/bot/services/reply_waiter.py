# ⏳ songbot/bot/services/reply_waiter.py
"""
⏳ ReplyWaiter — одноразове очікування наступного повідомлення користувача.

🔹 Ключ — пара (chat_id, user_id): інші учасники групи не можуть «відповісти» за користувача.
🔹 `handle_update` реєструється у групі -1, тож бачить відповідь раніше за інші хендлери
   і зупиняє подальшу обробку через `ApplicationHandlerStop`.
🔹 Музична команда працює з `block=False`, інакше PTB не доставив би відповідь, поки команда чекає.
🔹 Повторний `wait` для того самого ключа завершує попередній як таймаут.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Update												# 📡 Вхідний апдейт
from telegram.ext import ApplicationHandlerStop							# ⛔ Зупинка решти хендлерів

# 🔠 Системні імпорти
import asyncio															# ⏱️ Future + wait_for
import logging															# 🧾 Логування
from typing import Any, Dict, Optional, Tuple							# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from songbot.domain.music.interfaces import PromptResult				# 📦 Результат очікування
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.reply_waiter")

WaitKey = Tuple[int, int]


class ReplyWaiter:
    """⏳ Реєстр відкритих очікувань відповіді."""

    def __init__(self) -> None:
        self._pending: Dict[WaitKey, "asyncio.Future[PromptResult]"] = {}

    # ================================
    # ⏳ ОЧІКУВАННЯ
    # ================================
    async def wait(self, chat_id: int, user_id: int, timeout_s: float) -> PromptResult:
        """Чекає наступний текст від `user_id` у `chat_id` не довше `timeout_s`."""
        key = (chat_id, user_id)
        previous = self._pending.get(key)
        if previous is not None and not previous.done():
            logger.debug("🔁 Нове очікування для %s витісняє попереднє", key)
            previous.set_result(PromptResult.timeout())

        future: "asyncio.Future[PromptResult]" = asyncio.get_running_loop().create_future()
        self._pending[key] = future
        try:
            return await asyncio.wait_for(future, timeout=max(0.0, timeout_s))
        except asyncio.TimeoutError:
            logger.info("⌛ Таймаут очікування відповіді %s (%.1f с)", key, timeout_s)
            return PromptResult.timeout()
        finally:
            if self._pending.get(key) is future:
                del self._pending[key]

    def resolve(self, chat_id: int, user_id: int, text: Optional[str]) -> bool:
        """Віддає `text` очікувачу; False, якщо ніхто не чекає."""
        future = self._pending.get((chat_id, user_id))
        if future is None or future.done():
            return False
        future.set_result(PromptResult(reply=text))
        return True

    def cancel_all(self) -> None:
        """Завершує всі очікування як таймаут (зупинка застосунку)."""
        for future in self._pending.values():
            if not future.done():
                future.set_result(PromptResult.timeout())
        self._pending.clear()

    # ================================
    # 📡 PTB-ХЕНДЛЕР
    # ================================
    async def handle_update(self, update: Update, context: Any) -> None:
        message = update.effective_message
        chat = update.effective_chat
        user = update.effective_user
        if message is None or chat is None or user is None:
            return

        if self.resolve(chat.id, user.id, message.text):
            logger.debug("📨 Відповідь від user=%s у chat=%s передано флоу", user.id, chat.id)
            raise ApplicationHandlerStop
