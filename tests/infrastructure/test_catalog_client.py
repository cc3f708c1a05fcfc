"""
🧪 test_catalog_client.py — CatalogClient поверх httpx.MockTransport
"""

import httpx
import pytest

from songbot.config.config_service import ConfigService
from songbot.domain.music.entities import Platform, SearchParams
from songbot.infrastructure.catalog.catalog_client import CatalogClient
from songbot.shared.errors import CatalogRequestError


def client_for(handler, **kwargs):
    return CatalogClient(transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_name_search_hits_platform_endpoint():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"code": 0, "msg": "", "data": [{"songname": "Respire", "name": "A"}]})

    client = client_for(handler)
    result = await client.search(Platform.NETEASE, SearchParams(name="respire"))
    await client.aclose()

    assert result.is_success
    assert result.tracks[0].display_name == "Respire"
    assert result.tracks[0].source_platform is Platform.NETEASE
    assert str(seen[0].url).startswith(Platform.NETEASE.default_endpoint)
    assert dict(seen[0].url.params) == {"name": "respire"}


@pytest.mark.asyncio
async def test_id_lookup_sends_songid_only():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"code": 0, "data": {"songname": "Respire", "src": "https://cdn/1.mp3"}})

    client = client_for(handler)
    result = await client.search(Platform.QQ, SearchParams(songid=42))

    assert result.track.playable_source == "https://cdn/1.mp3"
    assert dict(seen[0].url.params) == {"songid": "42"}


@pytest.mark.asyncio
async def test_http_status_error_is_wrapped():
    client = client_for(lambda request: httpx.Response(502, text="bad gateway"))

    with pytest.raises(CatalogRequestError) as exc_info:
        await client.search(Platform.QQ, SearchParams(name="x"))

    assert exc_info.value.platform == "QQ Music"
    assert exc_info.value.url == Platform.QQ.default_endpoint


@pytest.mark.asyncio
async def test_invalid_json_is_wrapped():
    client = client_for(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

    with pytest.raises(CatalogRequestError):
        await client.search(Platform.QQ, SearchParams(name="x"))


@pytest.mark.asyncio
async def test_transport_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = client_for(handler)
    with pytest.raises(CatalogRequestError):
        await client.search(Platform.NETEASE, SearchParams(name="x"))


def test_from_config_overrides_endpoints_and_timeout():
    config = ConfigService.from_dict(
        {"music": {"catalog": {"timeout_sec": 3, "endpoints": {"qq": "https://mirror.example/qq"}}}}
    )
    client = CatalogClient.from_config(config)

    assert client.endpoint_for(Platform.QQ) == "https://mirror.example/qq"
    assert client.endpoint_for(Platform.NETEASE) == Platform.NETEASE.default_endpoint
    assert client._timeout == 3.0
