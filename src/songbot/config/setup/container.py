# 📦 songbot/config/setup/container.py
"""
📦 Контейнер залежностей songbot.

🔹 Створює сервіси в порядку DI: помилки → інфраструктура → домен → фічі.
🔹 Тут один раз вирішується, чи доступні ffmpeg і silk для кодек-доставки.
🔹 `aclose()` звільняє httpx-клієнт і браузер на зупинці застосунку.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                           # 🧾 Логування
from typing import TYPE_CHECKING, List, Optional                         # 🧮 Типи

# 🧩 Внутрішні модулі проєкту
from songbot.bot.commands.base import BaseFeature                        # 🏛️ Контракт фічі
from songbot.bot.commands.core_commands_feature import CoreCommandsFeature  # 📬 /start, /help
from songbot.bot.commands.music_feature import MusicFeature              # 🎵 /music
from songbot.bot.services.reply_waiter import ReplyWaiter                # ⏳ Очікування відповіді
from songbot.config.config_service import as_bool                        # 🔁 Прапорці з ENV
from songbot.config.music_config import MusicConfig                      # 🎛️ Налаштування музики
from songbot.domain.music.selection_flow import SelectionFlow            # 🎛️ Флоу вибору
from songbot.errors.exception_handler_service import ExceptionHandlerService  # 🛡️ Менеджер винятків
from songbot.errors.strategies import HttpxErrorStrategy, RenderErrorStrategy, TelegramErrorStrategy
from songbot.infrastructure.audio.audio_delivery import AudioDelivery    # 🔊 Доставка аудіо
from songbot.infrastructure.audio.audio_downloader import AudioDownloader  # ⬇️ Завантаження
from songbot.infrastructure.audio.ffmpeg_transcoder import FfmpegTranscoder  # 🎚️ ffmpeg
from songbot.infrastructure.audio.silk_encoder import SilkEncoder        # 🎙️ SILK
from songbot.infrastructure.catalog.catalog_client import CatalogClient  # 🔎 Каталоги
from songbot.infrastructure.rendering.song_list_renderer import SongListRenderer  # 🖼️ Рендер списку
from songbot.infrastructure.rendering.webdriver_service import WebDriverService  # 🧭 Playwright
from songbot.shared.utils.logger import LOG_NAME, init_logging_from_config  # 🧾 Логування

if TYPE_CHECKING:
    from songbot.config.config_service import ConfigService

logger = logging.getLogger(f"{LOG_NAME}.container")


def bootstrap_logging() -> logging.Logger:
    """Зчитує розділ `logging` конфігу і налаштовує кореневий логер."""
    from songbot.config.config_service import ConfigService              # 🧭 Локальний імпорт для уникнення циклів

    node = ConfigService().get("logging", {}) or {}
    return init_logging_from_config(node)


class Container:
    """
    Координує ініціалізацію інфраструктурних, доменних та бот-сервісів.
    """

    def __init__(self, config: "ConfigService") -> None:
        self.config = config
        logger.info("🚀 Стартуємо побудову контейнера залежностей")
        self.music_config = MusicConfig.from_config(config)
        self._setup_error_handlers()
        self._setup_infrastructure()
        self._setup_audio()
        self._setup_domain()
        self._setup_features()
        logger.info("✅ Контейнер ініціалізовано успішно")

    # ================================
    # 🛡️ ПОМИЛКИ
    # ================================
    def _setup_error_handlers(self) -> None:
        self.exception_handler_service = ExceptionHandlerService(
            [HttpxErrorStrategy(), TelegramErrorStrategy(), RenderErrorStrategy()]
        )

    # ================================
    # 🌐 ІНФРАСТРУКТУРА
    # ================================
    def _setup_infrastructure(self) -> None:
        self.catalog_client = CatalogClient.from_config(self.config)
        self.webdriver_service = WebDriverService.from_config(self.config)
        self.song_list_renderer = SongListRenderer(self.webdriver_service)
        self.reply_waiter = ReplyWaiter()

    def _setup_audio(self) -> None:
        """🔊 Кодек-колаборатори створюються лише тоді, коли їх справді можна використати."""
        voice = "music.voice"
        self.transcoder: Optional[FfmpegTranscoder] = None
        binary = str(self.config.get(f"{voice}.ffmpeg_binary", "ffmpeg") or "ffmpeg")
        if as_bool(self.config.get(f"{voice}.ffmpeg_enabled", True)):
            if FfmpegTranscoder.is_available(binary):
                self.transcoder = FfmpegTranscoder(
                    binary,
                    timeout_sec=self.config.get(f"{voice}.ffmpeg_timeout_sec", 60, cast=float) or 60,
                )
            else:
                logger.warning("⚠️ ffmpeg (%s) не знайдено в PATH: кодек-доставка недоступна", binary)

        self.encoder: Optional[SilkEncoder] = None
        if as_bool(self.config.get(f"{voice}.silk_enabled", True)):
            self.encoder = SilkEncoder(bit_rate=self.config.get(f"{voice}.silk_bit_rate", 24000, cast=int) or 24000)

        max_mb = self.config.get(f"{voice}.max_download_mb", 50, cast=float) or 50
        self.audio_downloader = AudioDownloader(
            timeout_s=self.config.get(f"{voice}.download_timeout_sec", 30, cast=float) or 30,
            max_bytes=int(max_mb * 1024 * 1024),
        )
        self.audio_delivery = AudioDelivery(
            self.audio_downloader,
            transcoder=self.transcoder,
            encoder=self.encoder,
            codec_platforms=self.music_config.codec_platforms,
        )

    # ================================
    # 🏭 ДОМЕН
    # ================================
    def _setup_domain(self) -> None:
        self.selection_flow = SelectionFlow(
            self.catalog_client,
            self.song_list_renderer,
            self.audio_delivery,
            self.music_config,
        )

    # ================================
    # 📚 ФІЧІ
    # ================================
    def _setup_features(self) -> None:
        self.features: List[BaseFeature] = [
            CoreCommandsFeature(self.music_config),
            MusicFeature(
                self.selection_flow,
                self.reply_waiter,
                self.music_config,
                self.exception_handler_service,
            ),
        ]
        logger.debug("📚 Фічі ініціалізовані (%d)", len(self.features))

    # ================================
    # 🔌 ЗАВЕРШЕННЯ
    # ================================
    async def aclose(self) -> None:
        """Звільняє мережеві й браузерні ресурси."""
        self.reply_waiter.cancel_all()
        await self.catalog_client.aclose()
        await self.webdriver_service.shutdown()
        logger.info("👋 Контейнер закрито")
