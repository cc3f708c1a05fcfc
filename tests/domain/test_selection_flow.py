"""
🧪 test_selection_flow.py — повний флоу вибору пісні на фейкових колабораторах

Перевіряє:
- Пошук у двох каталогах і список (картинкою / текстом)
- Таймаут, вихід, невалідний номер
- Визначення платформи, lookup за id, доставку та видалення підказки
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import FakeSession, make_track
from songbot.bot.ui import static_messages as msg
from songbot.config.music_config import MusicConfig
from songbot.domain.music.entities import Platform, SearchResult
from songbot.domain.music.interfaces import DeliveryPlan, PromptResult
from songbot.domain.music.list_formatter import UNAVAILABLE_TEXT
from songbot.domain.music.selection_flow import FlowOutcome, SelectionFlow
from songbot.shared.errors import CatalogRequestError


QQ_URL = "https://y.qq.com/n/ryqq/songDetail/{}"
NETEASE_URL = "https://music.163.com/song?id={}"


def make_catalog(qq=(), netease=(), *, fail=(), lookup=None):
    """Фейковий каталог: пошук за назвою повертає списки, за id — `lookup`."""
    lookups = []

    async def search(platform, params):
        if params.name is None:
            lookups.append((platform, params.songid))
            if isinstance(lookup, Exception):
                raise lookup
            return lookup if lookup is not None else SearchResult(code=404, msg="not found")
        if platform in fail:
            raise CatalogRequestError(platform.label, "boom")
        tracks = qq if platform is Platform.QQ else netease
        return SearchResult(code=0, tracks=tuple(tracks))

    catalog = MagicMock()
    catalog.search = AsyncMock(side_effect=search)
    catalog.lookups = lookups
    return catalog


def make_delivery(plan=None, error=None):
    delivery = MagicMock()
    delivery.plan = MagicMock(return_value=plan or DeliveryPlan())
    delivery.deliver = AsyncMock(side_effect=error)
    return delivery


def make_renderer():
    renderer = MagicMock()
    renderer.render = AsyncMock(return_value=b"\x89PNG")
    return renderer


def make_flow(catalog, *, delivery=None, renderer=None, **config):
    config.setdefault("image_mode", False)
    return SelectionFlow(catalog, renderer or make_renderer(), delivery or make_delivery(), MusicConfig(**config))


def respire_qq():
    return [
        make_track("Respire", "Artist A", page_url=QQ_URL.format(1), track_id=1, platform=Platform.QQ),
        make_track("Respire (Live)", "Artist B", page_url=QQ_URL.format(2), track_id=2, platform=Platform.QQ),
    ]


# ================================
# 🔎 ПОШУК І СПИСОК
# ================================
@pytest.mark.asyncio
async def test_empty_keyword_asks_for_song_info():
    catalog = make_catalog()
    session = FakeSession()

    result = await make_flow(catalog).run(session, "   ")

    assert result.outcome is FlowOutcome.EMPTY_KEYWORD
    assert session.texts == [msg.MUSIC_EMPTY_KEYWORD]
    catalog.search.assert_not_awaited()


@pytest.mark.asyncio
async def test_both_catalogs_failing_gives_no_results_without_prompt():
    catalog = make_catalog(fail=(Platform.QQ, Platform.NETEASE))
    renderer = make_renderer()
    session = FakeSession(replies=["1"])

    result = await make_flow(catalog, renderer=renderer, image_mode=True).run(session, "respire")

    assert result.outcome is FlowOutcome.NO_RESULTS
    assert session.texts == [msg.MUSIC_NO_RESULTS]
    assert session.prompts == []
    renderer.render.assert_not_awaited()


@pytest.mark.asyncio
async def test_one_catalog_failing_still_shows_the_other():
    catalog = make_catalog(qq=respire_qq(), fail=(Platform.NETEASE,))
    session = FakeSession()

    await make_flow(catalog).run(session, "respire")

    assert "1. Respire -- Artist A" in session.texts[0]
    assert f"<b>NetEase Music</b>: {UNAVAILABLE_TEXT}" in session.texts[0]


@pytest.mark.asyncio
async def test_text_mode_sends_list_with_prompt_not_image():
    catalog = make_catalog(qq=respire_qq())
    renderer = make_renderer()
    session = FakeSession()

    await make_flow(catalog, renderer=renderer, image_mode=False).run(session, "respire")

    renderer.render.assert_not_awaited()
    assert session.images == []
    assert "2. Respire (Live) -- Artist B" in session.texts[0]
    assert msg.MUSIC_SELECT_PROMPT.format(seconds="45") in session.texts[0]


@pytest.mark.asyncio
async def test_image_mode_renders_markup_and_captions_prompt():
    catalog = make_catalog(qq=respire_qq())
    renderer = make_renderer()
    session = FakeSession()

    await make_flow(catalog, renderer=renderer, image_mode=True, dark_mode=False).run(session, "respire")

    markup = renderer.render.await_args.args[0]
    assert "<b>QQ Music</b>:<br />1. Respire -- Artist A" in markup
    assert renderer.render.await_args.kwargs == {"dark_mode": False}
    image, caption = session.images[0]
    assert image == b"\x89PNG"
    assert caption == msg.MUSIC_SELECT_PROMPT.format(seconds="45")


@pytest.mark.asyncio
async def test_exit_hint_added_when_enabled():
    catalog = make_catalog(qq=respire_qq())
    session = FakeSession()

    await make_flow(catalog, menu_exit_command_tip=True, exit_command="0，退出").run(session, "respire")

    assert msg.MUSIC_EXIT_HINT.format(commands="0,退出") in session.texts[0]


@pytest.mark.asyncio
async def test_exit_hint_escapes_html_in_commands():
    catalog = make_catalog(qq=respire_qq())
    session = FakeSession()

    await make_flow(catalog, menu_exit_command_tip=True, exit_command="0, <stop>, R&B").run(session, "respire")

    assert msg.MUSIC_EXIT_HINT.format(commands="0,&lt;stop&gt;,R&amp;B") in session.texts[0]
    assert "<stop>" not in session.texts[0]


# ================================
# ⏳ ВІДПОВІДЬ КОРИСТУВАЧА
# ================================
@pytest.mark.asyncio
async def test_timeout_cancels_without_lookup():
    catalog = make_catalog(qq=respire_qq())
    session = FakeSession(replies=[PromptResult.timeout()])

    result = await make_flow(catalog, wait_timeout_ms=1500).run(session, "respire")

    assert result.outcome is FlowOutcome.TIMED_OUT
    assert session.prompts == [1500]
    assert session.texts[-1] == msg.MUSIC_TIMEOUT
    assert catalog.lookups == []


@pytest.mark.asyncio
async def test_blank_reply_is_treated_as_timeout():
    catalog = make_catalog(qq=respire_qq())
    session = FakeSession(replies=["   "])

    result = await make_flow(catalog).run(session, "respire")

    assert result.outcome is FlowOutcome.TIMED_OUT


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["0", " not listening "])
async def test_exit_tokens_end_flow(reply):
    catalog = make_catalog(qq=respire_qq())
    delivery = make_delivery()
    session = FakeSession(replies=[reply])

    result = await make_flow(catalog, delivery=delivery).run(session, "respire")

    assert result.outcome is FlowOutcome.EXITED
    assert session.texts[-1] == msg.MUSIC_EXITED
    assert catalog.lookups == []
    delivery.deliver.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["3", "-1", "1.5", "abc", "99"])
async def test_invalid_selection(reply):
    catalog = make_catalog(qq=respire_qq())
    session = FakeSession(replies=[reply])

    result = await make_flow(catalog).run(session, "respire")

    assert result.outcome is FlowOutcome.INVALID_SELECTION
    assert session.texts[-1] == msg.MUSIC_INVALID_INDEX
    assert catalog.lookups == []


def test_parse_selection_bounds():
    assert SelectionFlow.parse_selection("1", 2) == 1
    assert SelectionFlow.parse_selection(" 2 ", 2) == 2
    assert SelectionFlow.parse_selection("0", 2) is None
    assert SelectionFlow.parse_selection("3", 2) is None
    assert SelectionFlow.parse_selection("two", 2) is None


# ================================
# 🎧 LOOKUP І ДОСТАВКА
# ================================
@pytest.mark.asyncio
async def test_respire_selection_is_delivered_and_tip_recalled():
    full = make_track("Respire (Live)", "Artist B", page_url=QQ_URL.format(2), track_id=2)
    catalog = make_catalog(qq=respire_qq(), lookup=SearchResult(code=0, track=full))
    plan = DeliveryPlan(needs_codec=False)
    delivery = make_delivery(plan=plan)
    session = FakeSession(replies=["2"])

    result = await make_flow(catalog, delivery=delivery).run(session, "respire")

    assert result.outcome is FlowOutcome.DELIVERED
    assert result.track is full
    assert catalog.lookups == [(Platform.QQ, 2)]
    delivery.plan.assert_called_once_with("telegram")
    delivery.deliver.assert_awaited_once_with(full, session, plan)
    tip_index = session.texts.index("Generating voice…")
    assert tip_index == len(session.texts) - 1
    assert len(session.deleted) == 1


@pytest.mark.asyncio
async def test_netease_url_in_qq_list_is_looked_up_on_netease():
    tracks = [make_track("Mixed", page_url=NETEASE_URL.format(77), track_id=5, song_id=77, platform=Platform.QQ)]
    full = make_track("Mixed", song_id=77)
    catalog = make_catalog(qq=tracks, lookup=SearchResult(code=0, track=full))
    session = FakeSession(replies=["1"])

    result = await make_flow(catalog).run(session, "mixed")

    assert result.outcome is FlowOutcome.DELIVERED
    assert catalog.lookups == [(Platform.NETEASE, 77)]


@pytest.mark.asyncio
async def test_unknown_url_fails_without_tip():
    catalog = make_catalog(qq=[make_track("x", page_url="https://example.org/1", track_id=1)])
    session = FakeSession(replies=["1"])

    result = await make_flow(catalog).run(session, "x")

    assert result.outcome is FlowOutcome.RESOLUTION_FAILED
    assert session.texts[-1] == msg.MUSIC_FETCH_FAILED
    assert "Generating voice…" not in session.texts
    assert catalog.lookups == []


@pytest.mark.asyncio
async def test_lookup_error_code_reports_failure_and_recalls_tip():
    catalog = make_catalog(qq=respire_qq(), lookup=SearchResult(code=500, msg="vip only"))
    delivery = make_delivery()
    session = FakeSession(replies=["1"])

    result = await make_flow(catalog, delivery=delivery).run(session, "respire")

    assert result.outcome is FlowOutcome.LOOKUP_FAILED
    assert session.texts[-1] == msg.MUSIC_FETCH_FAILED
    assert len(session.deleted) == 1
    delivery.deliver.assert_not_awaited()


@pytest.mark.asyncio
async def test_lookup_transport_error_reports_failure():
    catalog = make_catalog(qq=respire_qq(), lookup=CatalogRequestError("QQ Music", "timeout"))
    session = FakeSession(replies=["1"])

    result = await make_flow(catalog).run(session, "respire")

    assert result.outcome is FlowOutcome.LOOKUP_FAILED
    assert session.texts[-1] == msg.MUSIC_FETCH_FAILED


@pytest.mark.asyncio
async def test_delivery_error_is_swallowed():
    full = make_track("Respire", track_id=1)
    catalog = make_catalog(qq=respire_qq(), lookup=SearchResult(code=0, track=full))
    delivery = make_delivery(error=RuntimeError("ffmpeg crashed"))
    session = FakeSession(replies=["1"])

    result = await make_flow(catalog, delivery=delivery).run(session, "respire")

    assert result.outcome is FlowOutcome.DELIVERY_FAILED
    assert result.message is None
    assert session.texts[-1] == "Generating voice…"
    assert len(session.deleted) == 1


@pytest.mark.asyncio
async def test_recall_disabled_keeps_tip():
    full = make_track("Respire", track_id=1)
    catalog = make_catalog(qq=respire_qq(), lookup=SearchResult(code=0, track=full))
    session = FakeSession(replies=["1"])

    await make_flow(catalog, recall=False).run(session, "respire")

    assert session.deleted == []


@pytest.mark.asyncio
async def test_recall_failure_does_not_break_flow():
    full = make_track("Respire", track_id=1)
    catalog = make_catalog(qq=respire_qq(), lookup=SearchResult(code=0, track=full))
    session = FakeSession(replies=["1"])
    session.delete_message = AsyncMock(side_effect=RuntimeError("message to delete not found"))

    result = await make_flow(catalog).run(session, "respire")

    assert result.outcome is FlowOutcome.DELIVERED
    session.delete_message.assert_awaited_once()
