# 🤖 songbot/bot/main.py
"""
🤖 Entry-point Telegram-бота songbot.

🔹 CLI-флаги → ENV, `.env`, логування з YAML.
🔹 Збирає DI-контейнер і PTB Application, реєструє хендлери й глобальний error-handler.
🔹 На зупинці закриває httpx-клієнт і браузер (`post_shutdown`).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from dotenv import load_dotenv											# 🌱 .env → os.environ
from telegram import Update												# 📡 Типи апдейтів для полінгу
from telegram.ext import Application, ApplicationBuilder, ContextTypes	# 🤖 PTB v21 Application API

# 🔠 Системні імпорти
import logging															# 🧾 Логування запуску
import os																# 🌍 ENV
import sys																# 🧵 CLI-аргументи
from typing import List, Optional										# 🧮 Типи

# 🧩 Внутрішні модулі проєкту
from songbot.bot.services import CustomContext							# 🧠 Кастомний PTB-контекст
from songbot.config.config_service import ConfigService					# ⚙️ Конфіг
from songbot.config.setup.bot_registrar import BotRegistrar				# 📋 Реєстрація хендлерів
from songbot.config.setup.container import Container, bootstrap_logging	# 📦 DI-контейнер
from songbot.shared.utils.logger import LOG_NAME						# 🏷️ Кореневий логер

logger = logging.getLogger(LOG_NAME)


# ================================
# 🧩 APPLICATION BUILDER
# ================================
def build_application(token: str, config: Optional[ConfigService] = None) -> Application:
    """Створює PTB Application із зареєстрованими обробниками."""
    config = config or ConfigService()
    container = Container(config)

    async def _post_shutdown(application: Application) -> None:
        await container.aclose()

    application = (
        ApplicationBuilder()
        .token(token)
        .context_types(ContextTypes(context=CustomContext))
        .post_shutdown(_post_shutdown)
        .build()
    )
    application.bot_data["container"] = container

    BotRegistrar(application, container).register_handlers()

    async def _on_error(update: object, context: CustomContext) -> None:
        """Глобальний error-handler PTB: віддає виняток централізованому сервісу."""
        err = getattr(context, "error", None)
        if err is None:
            logger.debug("ℹ️ _on_error викликано без context.error")
            return
        logger.error("🔥 Виняток у PTB: %s", err, exc_info=err)
        try:
            await container.exception_handler_service.handle(err, update if isinstance(update, Update) else None)
        except Exception as nested:  # noqa: BLE001
            logger.exception("💥 Global error handler failed: %s", nested)

    application.add_error_handler(_on_error)
    logger.info("✅ Application готовий до запуску")
    return application


# ================================
# ⚙️ CLI-ФЛАГИ → ENV
# ================================
def _apply_cli_flags_to_env(args: List[str]) -> None:
    """`--headful` / `--headless` перемикають Playwright через SONGBOT_HEADLESS."""
    for arg in args:
        if arg == "--headful":
            os.environ["SONGBOT_HEADLESS"] = "false"
        elif arg == "--headless":
            os.environ["SONGBOT_HEADLESS"] = "true"
        elif arg.startswith("--log-level="):
            os.environ["SONGBOT_LOG_LEVEL"] = arg.split("=", 1)[1]


# ================================
# 🚀 ENTRYPOINT
# ================================
def main(argv: Optional[List[str]] = None) -> None:
    _apply_cli_flags_to_env(list(sys.argv[1:] if argv is None else argv))
    load_dotenv()
    bootstrap_logging()

    config = ConfigService()
    token = config.get("telegram.bot_token") or os.getenv("BOT_TOKEN")
    if not token:
        logger.critical("🚨 Не знайдено токен Telegram")
        raise RuntimeError("Set TELEGRAM_TOKEN in the environment or telegram.bot_token in the config.")

    application = build_application(str(token), config)
    logger.info("🤖 Bot is starting…")
    application.run_polling(allowed_updates=Update.ALL_TYPES)
    logger.info("👋 Bot stopped")


if __name__ == "__main__":
    main()
