# 🔎 songbot/infrastructure/catalog/catalog_client.py
"""
🔎 CatalogClient — httpx-клієнт агрегатора музичних каталогів.

🔹 Два фіксованих endpoint-и (QQ Music / NetEase Music), параметри передаються як є.
🔹 Кожен виклик — один GET: без ретраїв і кешу.
🔹 Будь-яка мережна/статусна/JSON-помилка → `CatalogRequestError` (ловить викликач, окремо на платформу).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx                                                        # 🌐 Асинхронний HTTP

# 🔠 Системні імпорти
import asyncio                                                      # 🔐 Лок лінивої ініціалізації
import logging                                                      # 🧾 Логи сервісу
from typing import Any, Dict, Mapping, Optional                     # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from songbot.domain.music.entities import Platform, SearchParams, SearchResult
from songbot.shared.errors import CatalogRequestError
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.catalog")

DEFAULT_TIMEOUT_SEC: float = 10.0


class CatalogClient:
    """
    🎵 Реалізація ICatalogClient поверх спільного `httpx.AsyncClient`.
    """

    def __init__(
        self,
        *,
        endpoints: Optional[Mapping[Platform, str]] = None,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._endpoints: Dict[Platform, str] = {p: p.default_endpoint for p in Platform}  # 🌐 Базові URL
        self._endpoints.update(endpoints or {})
        self._timeout = timeout_sec                                 # ⏱️ Таймаут одного запиту
        self._transport = transport                                 # 🧪 MockTransport у тестах
        self._client: Optional[httpx.AsyncClient] = None
        self._init_lock = asyncio.Lock()
        logger.debug("⚙️ CatalogClient: endpoints=%s timeout=%s", {p.key: u for p, u in self._endpoints.items()}, timeout_sec)

    @classmethod
    def from_config(cls, config: Any) -> "CatalogClient":
        """Будує клієнт з розділу `music.catalog` ConfigService."""
        endpoints: Dict[Platform, str] = {}
        for platform in Platform:
            url = config.get(f"music.catalog.endpoints.{platform.key}")
            if url:
                endpoints[platform] = str(url)
        timeout = config.get("music.catalog.timeout_sec", DEFAULT_TIMEOUT_SEC, cast=float)
        return cls(endpoints=endpoints, timeout_sec=timeout or DEFAULT_TIMEOUT_SEC)

    # ================================
    # 🔓 ПУБЛІЧНИЙ ІНТЕРФЕЙС
    # ================================
    def endpoint_for(self, platform: Platform) -> str:
        return self._endpoints[platform]

    async def search(self, platform: Platform, params: SearchParams) -> SearchResult:
        """
        GET `<endpoint>?name=…&n=…&songid=…` і розбір `{code, msg, data}`.

        Raises:
            CatalogRequestError: транспорт, HTTP-статус або невалідний JSON.
        """
        url = self.endpoint_for(platform)
        query = params.to_query()
        client = await self._ensure_client()
        try:
            response = await client.get(url, params=query)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise CatalogRequestError(platform.label, f"{platform.label} request failed", url=url, details=str(exc)) from exc
        except ValueError as exc:                                   # 🧾 JSONDecodeError є підкласом ValueError
            raise CatalogRequestError(platform.label, f"{platform.label} returned invalid JSON", url=url, details=str(exc)) from exc

        result = SearchResult.from_payload(payload, platform)
        logger.debug(
            "📥 %s %s → code=%s tracks=%d single=%s",
            platform.label,
            query,
            result.code,
            len(result.tracks),
            result.track is not None,
        )
        return result

    async def aclose(self) -> None:
        """Закриває HTTP-клієнт (викликається на shutdown застосунку)."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("🔌 CatalogClient закрито")

    # ================================
    # ⚙️ ВНУТРІШНЄ
    # ================================
    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        async with self._init_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(self._timeout),
                    follow_redirects=True,
                    transport=self._transport,
                )
        return self._client
