# 🖼️ songbot/infrastructure/rendering/song_list_renderer.py
"""
🖼️ SongListRenderer — список пісень картинкою.

Тема: темна — білий текст на чорному, світла — навпаки. Розмір PNG визначає контент,
а не полотно: знімаємо лише `#song-list`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.render")

SONG_LIST_SELECTOR = "#song-list"

_PAGE_TEMPLATE = """<html>
  <head>
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <style>
      body {{
        margin: 0;
        font-family: "PingFang SC", "Hiragino Sans GB", "Microsoft YaHei", "Noto Sans CJK SC", SimSun, sans-serif;
        font-size: 16px;
        background: {background};
        color: {foreground};
        min-height: 100vh;
      }}
      #song-list {{
        padding: 20px;
        display: inline-block;
        max-width: 100%;
        white-space: nowrap;
      }}
    </style>
  </head>
  <body>
    <div id="song-list">
      {markup}
    </div>
  </body>
</html>
"""


class _ElementRenderer(Protocol):
    async def render_element_png(self, html: str, selector: str) -> bytes: ...


@dataclass(frozen=True, slots=True)
class Theme:
    foreground: str
    background: str

    @classmethod
    def for_mode(cls, dark_mode: bool) -> "Theme":
        text = 255 if dark_mode else 0
        back = 0 if dark_mode else 255
        return cls(foreground=f"rgb({text},{text},{text})", background=f"rgb({back},{back},{back})")


def build_page(markup: str, theme: Theme) -> str:
    """Обгортає HTML-фрагмент у сторінку зі стилями теми."""
    return _PAGE_TEMPLATE.format(markup=markup, foreground=theme.foreground, background=theme.background)


class SongListRenderer:
    """Реалізація ISongListRenderer поверх WebDriverService."""

    def __init__(self, driver: _ElementRenderer) -> None:
        self._driver = driver

    async def render(self, markup: str, *, dark_mode: bool) -> bytes:
        theme = Theme.for_mode(dark_mode)
        image = await self._driver.render_element_png(build_page(markup, theme), SONG_LIST_SELECTOR)
        logger.info("🖼️ Список пісень відрендерено (%d B, dark=%s)", len(image), dark_mode)
        return image
