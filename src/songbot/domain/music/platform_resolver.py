# 🧭 songbot/domain/music/platform_resolver.py
"""
🧭 Визначення платформи вибраного треку за URL його сторінки.

Платформа виводиться з `page_url` (`163.com` → NetEase, `qq.com` → QQ), а не з того,
який каталог повернув трек. Уся ця евристика живе тут, щоб флоу її не знав.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from songbot.shared.utils.logger import LOG_NAME

from .entities import Platform, Track

logger = logging.getLogger(f"{LOG_NAME}.domain.music.resolver")


@dataclass(frozen=True, slots=True)
class ResolvedTrack:
    """Платформа + ідентифікатор для запиту за id."""

    platform: Platform
    track_id: Optional[int]


def resolve_platform(track: Track) -> Optional[ResolvedTrack]:
    """
    Повертає платформу та id для lookup, або None, якщо URL не містить жодного маркера.

    Якщо URL містить обидва маркери, перемагає QQ (перевіряється останнім).
    """
    url = track.page_url or ""
    resolved: Optional[ResolvedTrack] = None
    if Platform.NETEASE.domain_marker in url:
        resolved = ResolvedTrack(Platform.NETEASE, track.song_id)
    if Platform.QQ.domain_marker in url:
        resolved = ResolvedTrack(Platform.QQ, track.track_id)

    if resolved is None:
        logger.info("🧭 Платформу не визначено | url=%r source=%s", url, track.source_platform)
    elif track.source_platform and track.source_platform is not resolved.platform:
        logger.warning(
            "⚠️ URL вказує на %s, але трек прийшов із %s | url=%r",
            resolved.platform.label,
            track.source_platform.label,
            url,
        )
    return resolved
