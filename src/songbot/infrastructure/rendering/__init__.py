"""🖼️ Рендер списку пісень через headless Chromium."""

from .song_list_renderer import SongListRenderer, Theme, build_page
from .webdriver_service import WebDriverService

__all__ = ["SongListRenderer", "Theme", "build_page", "WebDriverService"]
