# 🎵 songbot/domain/music/entities.py
"""
🎵 DTO домену музичного пошуку.

🔹 `Platform` — два каталоги агрегатора (QQ Music, NetEase Music) з їхніми маркерами домену.
🔹 `Track` — нормалізований запис пісні; `Track.from_payload` терпить відсутні ключі.
🔹 `SearchResult` — відповідь `{code, msg, data}`; одиночному треку віримо лише при `code == 0`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                                       # 🧾 Логер модуля
from dataclasses import dataclass, field                                             # 🧱 DTO
from enum import Enum                                                                # 🏷️ Перелік платформ
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple                               # 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from songbot.shared.utils.logger import LOG_NAME                                     # 🏷️ Базове імʼя логера

logger = logging.getLogger(f"{LOG_NAME}.domain.music")

SUCCESS_CODE: int = 0                                                                # ✅ Код успіху агрегатора


# ================================
# 🏷️ ПЛАТФОРМИ
# ================================
class Platform(Enum):
    """Каталог агрегатора. Значення — людська назва для списку."""

    QQ = "QQ Music"
    NETEASE = "NetEase Music"

    @property
    def label(self) -> str:
        return self.value

    @property
    def key(self) -> str:
        """Ключ у конфігурації (`music.catalog.endpoints.<key>`)."""
        return "qq" if self is Platform.QQ else "netease"

    @property
    def domain_marker(self) -> str:
        """Фрагмент домену сторінки пісні, за яким визначаємо платформу."""
        return "qq.com" if self is Platform.QQ else "163.com"

    @property
    def default_endpoint(self) -> str:
        if self is Platform.QQ:
            return "https://api.xingzhige.com/API/QQmusicVIP"
        return "https://api.xingzhige.com/API/NetEase_CloudMusic_new"


# ================================
# 🏛️ DTO
# ================================
@dataclass(frozen=True, slots=True)
class SearchParams:
    """Параметри GET-запиту; `None` не відправляються."""

    name: Optional[str] = None                                                       # 🔎 Ключове слово
    n: Optional[int] = None                                                          # 🔢 Кількість/селектор результатів
    songid: Optional[int] = None                                                     # 🆔 Пошук за ідентифікатором

    def to_query(self) -> Dict[str, Any]:
        query = {"name": self.name, "n": self.n, "songid": self.songid}
        return {key: value for key, value in query.items() if value is not None}


def _opt_str(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    text = str(value)
    return text or None


def _opt_int(payload: Mapping[str, Any], key: str) -> Optional[int]:
    value = payload.get(key)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug("ℹ️ Поле %s=%r не є цілим — пропускаємо", key, value)
        return None


@dataclass(frozen=True, slots=True)
class Track:
    """
    🎼 Одна пісня з каталогу.

    Лише одне з полів `track_id` (QQ, wire `songid`) / `song_id` (NetEase, wire `id`) має сенс —
    яке саме, залежить від каталогу, що повернув трек.
    """

    display_name: str                                                                # 🎼 songname
    artist: str = ""                                                                 # 🧑‍🎤 name
    album: str = ""
    pay_tier: str = ""                                                               # 💳 pay
    cover_url: str = ""                                                              # 🖼️ cover
    page_url: str = ""                                                               # 🔗 songurl
    playable_source: str = ""                                                        # 🔊 src
    subtitle: Optional[str] = None
    track_id: Optional[int] = None                                                   # 🆔 QQ songid
    song_id: Optional[int] = None                                                    # 🆔 NetEase id
    source_platform: Optional[Platform] = None                                       # 🏷️ Хто повернув трек
    extras: Mapping[str, Any] = field(default_factory=dict)                          # 🧺 mid, interval, kbps, ...

    _EXTRA_KEYS: ClassVar[Tuple[str, ...]] = ("mid", "interval", "quality", "kbps", "size", "time", "bpm", "song_type", "type")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], platform: Optional[Platform] = None) -> "Track":
        """Нормалізує обʼєкт `data` агрегатора у Track."""
        extras = {key: payload[key] for key in cls._EXTRA_KEYS if payload.get(key) not in (None, "")}
        return cls(
            display_name=str(payload.get("songname") or ""),
            artist=str(payload.get("name") or ""),
            album=str(payload.get("album") or ""),
            pay_tier=str(payload.get("pay") or ""),
            cover_url=str(payload.get("cover") or ""),
            page_url=str(payload.get("songurl") or ""),
            playable_source=str(payload.get("src") or ""),
            subtitle=_opt_str(payload, "subtitle"),
            track_id=_opt_int(payload, "songid"),
            song_id=_opt_int(payload, "id"),
            source_platform=platform,
            extras=extras,
        )

    @property
    def title(self) -> str:
        """«Назва -- Виконавець», як у списку."""
        return f"{self.display_name} -- {self.artist}"


@dataclass(frozen=True, slots=True)
class SearchResult:
    """📦 Відповідь каталогу: список (пошук за назвою) або одиночний трек (за id)."""

    code: int
    msg: str = ""
    tracks: Tuple[Track, ...] = ()
    track: Optional[Track] = None

    @property
    def is_success(self) -> bool:
        return self.code == SUCCESS_CODE

    @classmethod
    def from_payload(cls, payload: Any, platform: Optional[Platform] = None) -> "SearchResult":
        """
        Розбирає JSON `{code, msg, data}`.

        `data` як список → `tracks`; як обʼєкт → `track`; інше (рядок помилки, null) → порожньо.
        """
        if not isinstance(payload, Mapping):
            logger.warning("⚠️ Каталог %s повернув не-обʼєкт: %s", platform, type(payload).__name__)
            return cls(code=-1, msg="malformed response")

        raw_code = payload.get("code", -1)
        try:
            code = int(raw_code)
        except (TypeError, ValueError):
            code = -1
        msg = str(payload.get("msg") or "")
        data = payload.get("data")

        if isinstance(data, list):
            tracks = tuple(Track.from_payload(item, platform) for item in data if isinstance(item, Mapping))
            return cls(code=code, msg=msg, tracks=tracks)
        if isinstance(data, Mapping):
            return cls(code=code, msg=msg, track=Track.from_payload(data, platform))
        return cls(code=code, msg=msg)


__all__ = ["SUCCESS_CODE", "Platform", "SearchParams", "Track", "SearchResult"]
