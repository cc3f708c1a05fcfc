# ⬇️ songbot/infrastructure/audio/audio_downloader.py
"""
⬇️ Завантаження аудіо за прямим URL у пам'ять.

🔹 Стримить відповідь через `httpx`, стежить за лімітом розміру.
🔹 Будь-який збій → `DownloadError` з причиною у `details`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging															# 🧾 Логування результатів
from typing import Optional											# 🧰 Типізація

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 HTTP-клієнт

# 🧩 Внутрішні модулі проєкту
from songbot.shared.errors import DownloadError						# 🚨 Помилка завантаження
from songbot.shared.utils.logger import LOG_NAME						# 🏷️ Ім'я базового логера

logger = logging.getLogger(f"{LOG_NAME}.downloader")

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; songbot/0.1)",
    "Accept": "audio/*,*/*;q=0.5",
}


class AudioDownloader:
    """⬇️ Реалізація IAudioDownloader: один GET зі стрімінгом і лімітом байтів."""

    def __init__(
        self,
        *,
        timeout_s: float = 30.0,
        max_bytes: int = 50 * 1024 * 1024,
        chunk_size: int = 64 * 1024,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout_s = float(timeout_s)								# ⏳ Таймаут запиту
        self.max_bytes = int(max_bytes)									# 📏 Максимальний розмір треку
        self.chunk_size = int(chunk_size)								# 📦 Розмір шматків
        self._transport = transport										# 🧪 MockTransport у тестах

    async def fetch(self, url: str) -> bytes:
        """📦 Повертає байти аудіо або піднімає DownloadError."""
        if not url:
            raise DownloadError("audio url is empty")

        logger.info("📥 Завантаження аудіо: %s", url)
        buffer = bytearray()
        try:
            async with httpx.AsyncClient(
                headers=DEFAULT_HEADERS,
                timeout=httpx.Timeout(self.timeout_s),
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()
                    async for chunk in response.aiter_bytes(self.chunk_size):
                        buffer.extend(chunk)
                        if len(buffer) > self.max_bytes:
                            raise DownloadError("audio is too large", details=f"limit={self.max_bytes}")
        except httpx.HTTPError as exc:
            raise DownloadError("audio download failed", details=str(exc)) from exc

        if not buffer:
            raise DownloadError("audio body is empty", details=url)

        logger.info("✅ Аудіо завантажено: %d B", len(buffer))
        return bytes(buffer)
