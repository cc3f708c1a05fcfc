# 📝 songbot/domain/music/list_formatter.py
"""
📝 Форматування списку пісень.

🔹 Нумерація наскрізна: QQ 1..k, NetEase k+1..k+m.
🔹 Один формат на обидва режими: `<br />` для картинки, `\\n` для тексту (HTML parse mode Telegram).
"""

from __future__ import annotations

from html import escape
from typing import Sequence

from .entities import Platform, Track

HTML_BREAK = "<br />"
TEXT_BREAK = "\n"
UNAVAILABLE_TEXT = "could not retrieve the song list"


def format_song_list(
    tracks: Sequence[Track],
    platform_label: str,
    start_index: int,
    *,
    line_break: str = HTML_BREAK,
) -> str:
    """
    Нумерований блок однієї платформи.

    Args:
        tracks: Треки платформи (порядок каталогу).
        platform_label: Заголовок блоку (`QQ Music`).
        start_index: Скільки пунктів уже показано вище; перший пункт = start_index + 1.
        line_break: Роздільник рядків.
    """
    header = f"<b>{escape(platform_label)}</b>:"
    if not tracks:
        return f"{header} {UNAVAILABLE_TEXT}"

    lines = [
        f"{start_index + offset + 1}. {escape(track.display_name)} -- {escape(track.artist)}"
        for offset, track in enumerate(tracks)
    ]
    return header + line_break + line_break.join(lines)


def build_song_list(
    qq_tracks: Sequence[Track],
    netease_tracks: Sequence[Track],
    *,
    line_break: str = HTML_BREAK,
) -> str:
    """Обидва блоки з порожнім рядком між ними та спільною нумерацією."""
    qq_block = format_song_list(qq_tracks, Platform.QQ.label, 0, line_break=line_break)
    netease_block = format_song_list(netease_tracks, Platform.NETEASE.label, len(qq_tracks), line_break=line_break)
    return f"{qq_block}{line_break}{line_break}{netease_block}"
