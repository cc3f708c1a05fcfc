# 🔊 songbot/infrastructure/audio/audio_delivery.py
"""
🔊 AudioDelivery — як трек потрапляє в чат.

🔹 Звичайні поверхні (Telegram): пряме посилання на аудіо + title/performer.
🔹 Кодек-поверхні (`music.voice.codec_platforms`): download → ffmpeg PCM → SILK → вкладення.
🔹 Наявність ffmpeg / silk визначається один раз у контейнері; `plan()` лише порівнює.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging															# 🧾 Логування
from typing import Iterable, List, Optional, Tuple						# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from songbot.domain.music.entities import Track
from songbot.domain.music.interfaces import (
    DeliveryPlan,
    IAudioDownloader,
    IChatSession,
    ITranscoder,
    IVoiceEncoder,
)
from songbot.shared.errors import CollaboratorUnavailableError, DownloadError
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.delivery")

VOICE_SAMPLE_RATE = 24000												# 🎚️ Частота PCM для SILK
VOICE_CHANNELS = 1
VOICE_SAMPLE_FORMAT = "s16le"
VOICE_FILENAME = "voice.silk"

TRANSCODER_NAME = "ffmpeg"
ENCODER_NAME = "silk"


class AudioDelivery:
    """🔊 Реалізація IAudioDelivery."""

    def __init__(
        self,
        downloader: IAudioDownloader,
        *,
        transcoder: Optional[ITranscoder] = None,
        encoder: Optional[IVoiceEncoder] = None,
        codec_platforms: Iterable[str] = ("qq",),
    ) -> None:
        self._downloader = downloader									# ⬇️ Джерело байтів
        self._transcoder = transcoder									# 🎚️ None → ffmpeg недоступний
        self._encoder = encoder											# 🎙️ None → silk вимкнено
        self._codec_platforms = frozenset(p.strip().lower() for p in codec_platforms if p)
        logger.info(
            "🔊 AudioDelivery: codec_platforms=%s ffmpeg=%s silk=%s",
            sorted(self._codec_platforms),
            transcoder is not None,
            encoder is not None,
        )

    # ================================
    # 🗺️ ПЛАН
    # ================================
    def plan(self, surface: str) -> DeliveryPlan:
        needs_codec = (surface or "").lower() in self._codec_platforms
        if not needs_codec:
            return DeliveryPlan(needs_codec=False)
        return DeliveryPlan(needs_codec=True, missing=self._missing())

    def _missing(self) -> Tuple[str, ...]:
        missing: List[str] = []
        if self._transcoder is None:
            missing.append(TRANSCODER_NAME)
        if self._encoder is None:
            missing.append(ENCODER_NAME)
        return tuple(missing)

    # ================================
    # 📤 ДОСТАВКА
    # ================================
    async def deliver(self, track: Track, session: IChatSession, plan: DeliveryPlan) -> None:
        """
        Надсилає трек у чат згідно з планом.

        Raises:
            CollaboratorUnavailableError: кодек потрібен, але ffmpeg / silk не завантажені.
            DownloadError, TranscodeError, EncodeError: збій ланцюжка кодека.
        """
        source = track.playable_source
        if not source:
            raise DownloadError("track has no playable source", details=track.title)

        if not plan.needs_codec:
            await session.send_audio(source, title=track.display_name, performer=track.artist)
            logger.info("🎧 «%s» надіслано посиланням", track.title)
            return

        if not plan.ready:
            raise CollaboratorUnavailableError(plan.missing)

        raw = await self._downloader.fetch(source)
        pcm = await self._transcoder.to_pcm(
            raw,
            sample_rate=VOICE_SAMPLE_RATE,
            channels=VOICE_CHANNELS,
            sample_format=VOICE_SAMPLE_FORMAT,
        )
        voice = await self._encoder.encode(pcm, VOICE_SAMPLE_RATE)
        await session.send_audio(voice, filename=VOICE_FILENAME)
        logger.info("🎙️ «%s» надіслано голосом (%d B)", track.title, len(voice))
