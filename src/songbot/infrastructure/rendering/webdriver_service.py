# 🧭 songbot/infrastructure/rendering/webdriver_service.py
"""
🧭 WebDriverService — адаптер Playwright для рендеру HTML у PNG.

🔹 Керує життєвим циклом Chromium: лінивий старт, `shutdown()` на зупинці бота.
🔹 Кожен рендер — нова сторінка, яка закривається у `finally` навіть при помилці.
🔹 Скриншот обрізається рівно по bounding box вибраного елемента.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from playwright.async_api import (									# 🧠 Асинхронний API Playwright
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    async_playwright,
)

# 🔠 Системні імпорти
import asyncio														# 🔐 Лок запуску браузера
import logging														# 🧾 Логування подій
from typing import Any, Dict, Optional								# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from songbot.config.config_service import as_bool					# 🔁 "false" з ENV → False
from songbot.shared.errors import RenderError						# 🚨 Типова помилка рендеру
from songbot.shared.utils.logger import LOG_NAME					# 🏷️ Базове ім'я логера

logger = logging.getLogger(f"{LOG_NAME}.web")

_BOUNDING_BOX_JS = """
(selector) => {
    const node = document.querySelector(selector);
    if (!node) { return null; }
    const rect = node.getBoundingClientRect();
    return { x: rect.left, y: rect.top, width: rect.width, height: rect.height };
}
"""


class WebDriverService:
    """
    🧭 Chromium для офскрін-рендеру фрагментів HTML.
    """

    # ================================
    # 🧱 ІНІЦІАЛІЗАЦІЯ
    # ================================
    def __init__(
        self,
        *,
        headless: bool = True,
        launch_channel: Optional[str] = None,
        viewport: Optional[Dict[str, int]] = None,
        device_scale_factor: float = 1,
    ) -> None:
        self._playwright: Optional[Playwright] = None				# 🧠 Лінива ініціалізація
        self._browser: Optional[Browser] = None						# 🌐 Chromium
        self._context: Optional[BrowserContext] = None				# 🪟 Базовий контекст
        self._start_lock = asyncio.Lock()							# 🔐 Один старт на кілька одночасних рендерів

        self._is_headless = headless
        self._launch_channel = launch_channel
        self._viewport = viewport or {"width": 800, "height": 600}
        self._device_scale_factor = device_scale_factor
        logger.info(
            "✅ WebDriverService: headless=%s channel=%s viewport=%s scale=%s",
            self._is_headless,
            self._launch_channel or "chromium",
            self._viewport,
            self._device_scale_factor,
        )

    @classmethod
    def from_config(cls, config: Any) -> "WebDriverService":
        """Читає розділ `playwright` конфігурації."""
        viewport = config.get("playwright.viewport") or {}
        return cls(
            headless=as_bool(config.get("playwright.headless", True)),
            launch_channel=config.get("playwright.launch_channel"),
            viewport={
                "width": int(viewport.get("width", 800)),
                "height": int(viewport.get("height", 600)),
            },
            device_scale_factor=config.get("playwright.device_scale_factor", 1, cast=float) or 1,
        )

    async def __aenter__(self) -> "WebDriverService":
        await self.startup()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()

    # ================================
    # 🚪 ЖИТТЄВИЙ ЦИКЛ
    # ================================
    async def startup(self) -> None:
        """
        🔌 Запускає Playwright і Chromium, якщо вони ще не активні.
        """
        async with self._start_lock:
            if self._browser and self._browser.is_connected():
                return

            if self._playwright is None:
                self._playwright = await async_playwright().start()

            launch_kwargs: Dict[str, Any] = {"headless": self._is_headless}
            if self._launch_channel:
                launch_kwargs["channel"] = self._launch_channel	# 📺 Напр., системний chrome

            logger.info("🚀 Запуск Chromium (headless=%s)…", self._is_headless)
            self._browser = await self._playwright.chromium.launch(**launch_kwargs)
            self._context = await self._browser.new_context(
                viewport=self._viewport,
                device_scale_factor=self._device_scale_factor,
            )
            logger.info("✅ Chromium готовий до рендеру")

    async def shutdown(self) -> None:
        """
        📴 Завершує сесію браузера та Playwright.
        """
        if self._browser:
            await self._browser.close()
            self._browser = None
            self._context = None
            logger.info("🔒 Chromium закрито")

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
            logger.info("🔌 Playwright зупинено")

    # ================================
    # 🖼️ РЕНДЕР
    # ================================
    async def render_element_png(self, html: str, selector: str) -> bytes:
        """
        🖼️ Завантажує HTML у нову сторінку й знімає PNG рівно по елементу `selector`.

        Raises:
            RenderError: елемент не знайдено або Playwright впав.
        """
        await self.startup()
        if not self._context:
            raise RenderError("browser context is not initialized")

        page: Optional[Page] = None
        try:
            page = await self._context.new_page()
            await page.set_content(html, wait_until="load")
            clip = await page.evaluate(_BOUNDING_BOX_JS, selector)
            if not clip or not clip.get("width") or not clip.get("height"):
                raise RenderError(f"element {selector!r} has no rendered box")

            image = await page.screenshot(clip=clip, full_page=True, type="png")
            logger.debug("🖼️ Відрендерено %s: %sx%s → %d B", selector, clip["width"], clip["height"], len(image))
            return image
        except PlaywrightError as exc:
            raise RenderError("page rendering failed", details=str(exc)) from exc
        finally:
            if page:
                try:
                    if not page.is_closed():
                        await page.close()							# 🔒 Сторінка не переживає рендер
                except Exception as close_err:						# noqa: BLE001
                    logger.debug("ℹ️ Не вдалося закрити вкладку: %s", close_err)
