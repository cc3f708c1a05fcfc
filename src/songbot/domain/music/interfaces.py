# 🎵 songbot/domain/music/interfaces.py
"""
🎵 Контракти домену: каталог, рендер списку, чат-сесія, кодек-колаборатори.

🔹 Флоу вибору знає лише ці протоколи, а не httpx / Playwright / PTB.
🔹 `PromptResult` — результат одного очікування відповіді: текст або ознака таймауту.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass                                                # 🧱 DTO
from typing import Optional, Protocol, Tuple, Union, runtime_checkable          # 🧰 Protocol

# 🧩 Внутрішні модулі проєкту
from .entities import Platform, SearchParams, SearchResult, Track


# ================================
# 🏛️ DTO
# ================================
@dataclass(frozen=True, slots=True)
class PromptResult:
    """⏳ Одна спроба дочекатися відповіді користувача."""

    reply: Optional[str] = None
    timed_out: bool = False

    @classmethod
    def timeout(cls) -> "PromptResult":
        return cls(reply=None, timed_out=True)

    @property
    def text(self) -> str:
        return (self.reply or "").strip()


@dataclass(frozen=True, slots=True)
class DeliveryPlan:
    """🗺️ Як доставляти аудіо на цю поверхню; обчислюється один раз на старті флоу."""

    needs_codec: bool = False
    missing: Tuple[str, ...] = ()

    @property
    def ready(self) -> bool:
        return not (self.needs_codec and self.missing)


MessageId = Union[int, str]
AudioSource = Union[str, bytes]


# ================================
# 🧩 ІНТЕРФЕЙСИ (КОНТРАКТИ)
# ================================
@runtime_checkable
class ICatalogClient(Protocol):
    """🔎 Один GET до одного з двох каталогів агрегатора."""

    async def search(self, platform: Platform, params: SearchParams) -> SearchResult:
        """Повертає SearchResult або піднімає CatalogRequestError."""
        ...


@runtime_checkable
class ISongListRenderer(Protocol):
    """🖼️ HTML-фрагмент списку → PNG, обрізаний по контенту."""

    async def render(self, markup: str, *, dark_mode: bool) -> bytes:
        ...


@runtime_checkable
class IChatSession(Protocol):
    """
    💬 Поверхня хоста для однієї команди: відправка, очікування відповіді, видалення.
    """

    @property
    def platform(self) -> str:
        """Назва поверхні (`telegram`, `qq`, ...) — вирішує, чи потрібен кодек."""
        ...

    async def send_text(self, text: str) -> Optional[MessageId]:
        ...

    async def send_image(self, image: bytes, caption: str) -> Optional[MessageId]:
        ...

    async def send_audio(
        self,
        audio: AudioSource,
        *,
        title: Optional[str] = None,
        performer: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> Optional[MessageId]:
        ...

    async def prompt(self, timeout_ms: int) -> PromptResult:
        ...

    async def delete_message(self, message_id: MessageId) -> None:
        ...


@runtime_checkable
class ITranscoder(Protocol):
    """🎚️ Будь-яке аудіо → сирий PCM."""

    async def to_pcm(self, data: bytes, *, sample_rate: int, channels: int, sample_format: str) -> bytes:
        ...


@runtime_checkable
class IVoiceEncoder(Protocol):
    """🎙️ PCM → контейнер голосового кодека."""

    async def encode(self, pcm: bytes, sample_rate: int) -> bytes:
        ...


@runtime_checkable
class IAudioDownloader(Protocol):
    """⬇️ URL → байти аудіо."""

    async def fetch(self, url: str) -> bytes:
        ...


@runtime_checkable
class IAudioDelivery(Protocol):
    """🔊 Доставка знайденого треку в чат: прямим URL або через кодек."""

    def plan(self, surface: str) -> DeliveryPlan:
        ...

    async def deliver(self, track: Track, session: IChatSession, plan: DeliveryPlan) -> None:
        ...


__all__ = [
    "PromptResult",
    "DeliveryPlan",
    "IAudioDelivery",
    "MessageId",
    "AudioSource",
    "ICatalogClient",
    "ISongListRenderer",
    "IChatSession",
    "ITranscoder",
    "IVoiceEncoder",
    "IAudioDownloader",
]
