"""
🧪 test_song_list_renderer.py — HTML-сторінка списку та життєвий цикл вкладки Playwright
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError

from songbot.infrastructure.rendering.song_list_renderer import (
    SONG_LIST_SELECTOR,
    SongListRenderer,
    Theme,
    build_page,
)
from songbot.infrastructure.rendering.webdriver_service import WebDriverService
from songbot.shared.errors import RenderError


def test_dark_theme_is_white_on_black():
    theme = Theme.for_mode(True)
    assert theme.foreground == "rgb(255,255,255)"
    assert theme.background == "rgb(0,0,0)"
    assert Theme.for_mode(False).foreground == "rgb(0,0,0)"


def test_page_wraps_markup_in_song_list_container():
    html = build_page("<b>QQ Music</b>:<br />1. a -- b", Theme.for_mode(True))
    assert '<div id="song-list">' in html
    assert "<b>QQ Music</b>:<br />1. a -- b" in html
    assert "white-space: nowrap;" in html
    assert "color: rgb(255,255,255);" in html


@pytest.mark.asyncio
async def test_renderer_screenshots_song_list_element():
    driver = MagicMock()
    driver.render_element_png = AsyncMock(return_value=b"png")

    image = await SongListRenderer(driver).render("markup", dark_mode=True)

    assert image == b"png"
    html, selector = driver.render_element_png.await_args.args
    assert selector == SONG_LIST_SELECTOR
    assert "markup" in html


# ================================
# 🧭 WebDriverService.render_element_png
# ================================
def make_service_with_page(page):
    service = WebDriverService()
    service.startup = AsyncMock()
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    service._context = context
    return service


def make_page(clip=None, screenshot=b"png"):
    page = MagicMock()
    page.set_content = AsyncMock()
    page.evaluate = AsyncMock(return_value=clip if clip is not None else {"x": 0, "y": 0, "width": 320, "height": 180})
    page.screenshot = AsyncMock(return_value=screenshot)
    page.is_closed = MagicMock(return_value=False)
    page.close = AsyncMock()
    return page


@pytest.mark.asyncio
async def test_render_clips_to_element_and_closes_page():
    page = make_page()
    service = make_service_with_page(page)

    image = await service.render_element_png("<html></html>", "#song-list")

    assert image == b"png"
    page.screenshot.assert_awaited_once_with(
        clip={"x": 0, "y": 0, "width": 320, "height": 180}, full_page=True, type="png"
    )
    page.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_missing_element_raises_and_still_closes_page():
    page = make_page(clip={})
    service = make_service_with_page(page)

    with pytest.raises(RenderError):
        await service.render_element_png("<html></html>", "#song-list")

    page.screenshot.assert_not_awaited()
    page.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_playwright_error_is_wrapped_and_page_closed():
    page = make_page()
    page.screenshot = AsyncMock(side_effect=PlaywrightError("Target closed"))
    service = make_service_with_page(page)

    with pytest.raises(RenderError):
        await service.render_element_png("<html></html>", "#song-list")

    page.close.assert_awaited_once()


def test_from_config_reads_playwright_section():
    from songbot.config.config_service import ConfigService

    config = ConfigService.from_dict(
        {"playwright": {"headless": "false", "viewport": {"width": 1024, "height": 700}, "device_scale_factor": 2}}
    )
    service = WebDriverService.from_config(config)

    assert service._is_headless is False
    assert service._viewport == {"width": 1024, "height": 700}
    assert service._device_scale_factor == 2.0
