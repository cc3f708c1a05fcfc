# 🧾 songbot/config/setup/bot_registrar.py
"""
🧾 BotRegistrar — реєстрація всіх обробників у Application.

🔹 Спершу глобальний перехоплювач відповідей (група -1), потім фічі (група 0).
"""

# 🌐 Зовнішні бібліотеки
from telegram.ext import Application, MessageHandler, filters

# 🔠 Системні імпорти
import logging

# 🧩 Внутрішні модулі проєкту
from songbot.config.setup.container import Container				# 📦 DI-контейнер
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.registrar")

REPLY_WAITER_GROUP = -1


class BotRegistrar:
    """🔌 Реєструє всі хендлери в Telegram Application."""

    def __init__(self, application: Application, container: Container) -> None:
        self.app = application
        self.container = container

    def register_handlers(self) -> None:
        # ⏳ Відповіді на відкриті очікування мають пріоритет над усім іншим
        self.app.add_handler(
            MessageHandler(filters.TEXT, self.container.reply_waiter.handle_update),
            group=REPLY_WAITER_GROUP,
        )

        logger.info("--- Починаю реєстрацію фіч ---")
        for feature in self.container.features:
            feature.register_handlers(self.app)
            logger.info("✅ Фіча '%s' зареєстрована.", feature.__class__.__name__)
        logger.info("--- Усі фічі зареєстровано ---")
