# 🚨 songbot/shared/errors.py
"""
🚨 Ієрархія доменних винятків songbot.

🔹 `AppError` — корінь; `UserVisibleError` — текст можна показати користувачу як є.
🔹 Каталоги, рендер і доставка аудіо мають власні гілки, щоб флоу ловив їх точково.
🔹 Кожен виняток віддає `to_log_extra()` для структурованих логів.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence


class AppError(Exception):
    """Базова помилка застосунку."""

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_log_extra(self) -> Dict[str, object]:
        extra: Dict[str, object] = {"error_type": type(self).__name__}
        if self.details:
            extra["details"] = self.details
        return extra


class UserVisibleError(AppError):
    """Помилка, чий `message` безпечно відправити в чат."""


class NetworkRequestError(UserVisibleError):
    """Мережевий збій, перекладений у зрозумілий користувачу текст."""

    def __init__(
        self,
        message: str,
        *,
        details: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        retry_after_s: Optional[int] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.url = url
        self.status_code = status_code
        self.retry_after_s = retry_after_s

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.url:
            extra["url"] = self.url
        if self.status_code is not None:
            extra["status_code"] = self.status_code
        if self.retry_after_s is not None:
            extra["retry_after_s"] = self.retry_after_s
        return extra


# ================================
# 🎵 КАТАЛОГИ
# ================================
class CatalogRequestError(AppError):
    """Запит до музичного каталогу не вдався (мережа, статус, невалідний JSON)."""

    def __init__(self, platform: str, message: str, *, url: Optional[str] = None, details: Optional[str] = None) -> None:
        super().__init__(message, details=details)
        self.platform = platform
        self.url = url

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["platform"] = self.platform
        if self.url:
            extra["url"] = self.url
        return extra


# ================================
# 🖼️ РЕНДЕР
# ================================
class RenderError(AppError):
    """Headless-браузер не зміг відрендерити список пісень."""


# ================================
# 🔊 ДОСТАВКА АУДІО
# ================================
class AudioDeliveryError(AppError):
    """Будь-який збій ланцюжка download → transcode → encode → send."""


class CollaboratorUnavailableError(AudioDeliveryError):
    """Для кодек-доставки бракує сервісів (ffmpeg / silk)."""

    def __init__(self, missing: Sequence[str]) -> None:
        names = ", ".join(missing)
        super().__init__(f"required services are not loaded: {names}")
        self.missing = tuple(missing)

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["missing"] = list(self.missing)
        return extra


class DownloadError(AudioDeliveryError):
    """Не вдалося завантажити джерело аудіо."""


class TranscodeError(AudioDeliveryError):
    """ffmpeg завершився з помилкою або не відповів вчасно."""


class EncodeError(AudioDeliveryError):
    """Кодек голосових повідомлень не зміг закодувати PCM."""


__all__ = [
    "AppError",
    "UserVisibleError",
    "NetworkRequestError",
    "CatalogRequestError",
    "RenderError",
    "AudioDeliveryError",
    "CollaboratorUnavailableError",
    "DownloadError",
    "TranscodeError",
    "EncodeError",
]
