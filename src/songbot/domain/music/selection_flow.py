# 🎛️ songbot/domain/music/selection_flow.py
"""
🎛️ SelectionFlow — інтерактивний вибір пісні за одну команду.

🔹 Пошук у двох каталогах (паралельно, збій одного не зупиняє інший).
🔹 Список картинкою або текстом → одне очікування відповіді з таймаутом.
🔹 Валідація номера → визначення платформи за URL → lookup за id → доставка аудіо.
🔹 Помилки доставки лише логуються; підказка «генерую…» видаляється, якщо увімкнено `recall`.

Стан живе лише в межах одного `run()`; екземпляр можна ділити між користувачами.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio                                                            # 🔁 Паралельний пошук
import html                                                               # 🛡️ Екранування команд виходу
import logging                                                            # 🧾 Логування кроків
from dataclasses import dataclass                                         # 🧱 Результат флоу
from enum import Enum                                                     # 🏷️ Стани та підсумки
from typing import List, Optional, Sequence, Tuple                        # 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from songbot.bot.ui import static_messages as msg                         # 💬 Тексти для користувача
from songbot.config.music_config import MusicConfig                       # 🎛️ Налаштування команди
from songbot.shared.utils.logger import LOG_NAME                          # 🏷️ Базове імʼя логера

from .entities import Platform, SearchParams, Track
from .interfaces import IAudioDelivery, IChatSession, ICatalogClient, ISongListRenderer, MessageId
from .list_formatter import HTML_BREAK, TEXT_BREAK, build_song_list
from .platform_resolver import resolve_platform

logger = logging.getLogger(f"{LOG_NAME}.music.flow")

SEARCH_ORDER: Tuple[Platform, ...] = (Platform.QQ, Platform.NETEASE)     # 🔢 QQ першим, NetEase після


# ================================
# 🏷️ СТАНИ ТА ПІДСУМКИ
# ================================
class FlowState(Enum):
    IDLE = "idle"
    AWAITING_QUERY = "awaiting_query"
    LIST_PRESENTED = "list_presented"
    AWAITING_SELECTION = "awaiting_selection"
    RESOLVING = "resolving"
    EXITED_BY_COMMAND = "exited_by_command"
    TIMED_OUT = "timed_out"
    INVALID_SELECTION = "invalid_selection"
    DELIVERING = "delivering"
    DONE = "done"


class FlowOutcome(Enum):
    EMPTY_KEYWORD = "empty_keyword"
    NO_RESULTS = "no_results"
    TIMED_OUT = "timed_out"
    EXITED = "exited"
    INVALID_SELECTION = "invalid_selection"
    RESOLUTION_FAILED = "resolution_failed"
    LOOKUP_FAILED = "lookup_failed"
    DELIVERED = "delivered"
    DELIVERY_FAILED = "delivery_failed"


@dataclass(frozen=True, slots=True)
class FlowResult:
    """📦 Чим закінчився флоу і що побачив користувач."""

    outcome: FlowOutcome
    message: Optional[str] = None
    track: Optional[Track] = None


# ================================
# 🏛️ ОРКЕСТРАТОР
# ================================
class SelectionFlow:
    """🎵 send-list → await-input → validate → resolve → lookup → deliver."""

    def __init__(
        self,
        catalog: ICatalogClient,
        renderer: Optional[ISongListRenderer],
        delivery: IAudioDelivery,
        config: MusicConfig,
    ) -> None:
        self._catalog = catalog                                           # 🔎 Клієнт агрегатора
        self._renderer = renderer                                         # 🖼️ None → лише текстовий режим
        self._delivery = delivery                                         # 🔊 Доставка аудіо
        self._config = config                                             # 🎛️ Налаштування

    # ================================
    # 📣 ПУБЛІЧНИЙ API
    # ================================
    async def run(self, session: IChatSession, keyword: Optional[str]) -> FlowResult:
        """Проводить один повний цикл вибору. Ніколи не лишає підказку «генерую…» у чаті при recall=True."""
        state = FlowState.IDLE
        keyword = (keyword or "").strip()
        if not keyword:
            return await self._finish(session, state, FlowOutcome.EMPTY_KEYWORD, msg.MUSIC_EMPTY_KEYWORD)

        plan = self._delivery.plan(session.platform)                      # 🗺️ Один раз на старті
        if not plan.ready:
            logger.warning("⚠️ Кодек-доставка для %s неможлива: бракує %s", session.platform, plan.missing)

        state = self._transition(state, FlowState.AWAITING_QUERY)
        qq_tracks, netease_tracks = await self._search_all(keyword)
        songs: List[Track] = [*qq_tracks, *netease_tracks]
        if not songs:
            return await self._finish(session, state, FlowOutcome.NO_RESULTS, msg.MUSIC_NO_RESULTS)

        await self._present_list(session, qq_tracks, netease_tracks)
        state = self._transition(state, FlowState.LIST_PRESENTED)

        state = self._transition(state, FlowState.AWAITING_SELECTION)
        answer = await session.prompt(self._config.wait_timeout_ms)
        reply = answer.text
        if answer.timed_out or not reply:
            state = self._transition(state, FlowState.TIMED_OUT)
            return await self._finish(session, state, FlowOutcome.TIMED_OUT, msg.MUSIC_TIMEOUT)

        if reply in self._config.exit_commands:
            state = self._transition(state, FlowState.EXITED_BY_COMMAND)
            return await self._finish(session, state, FlowOutcome.EXITED, msg.MUSIC_EXITED)

        index = self.parse_selection(reply, len(songs))
        if index is None:
            logger.info("🔢 Невалідний номер %r (total=%d)", reply, len(songs))
            state = self._transition(state, FlowState.INVALID_SELECTION)
            return await self._finish(session, state, FlowOutcome.INVALID_SELECTION, msg.MUSIC_INVALID_INDEX)

        state = self._transition(state, FlowState.RESOLVING)
        selected = songs[index - 1]
        resolved = resolve_platform(selected)
        if resolved is None:
            return await self._finish(session, state, FlowOutcome.RESOLUTION_FAILED, msg.MUSIC_FETCH_FAILED, selected)

        state = self._transition(state, FlowState.DELIVERING)
        tip_id = await session.send_text(self._config.generation_tip)
        try:
            lookup = await self._lookup(resolved.platform, resolved.track_id)
            if lookup is None:
                return await self._finish(session, state, FlowOutcome.LOOKUP_FAILED, msg.MUSIC_FETCH_FAILED, selected)

            try:
                await self._delivery.deliver(lookup, session, plan)
            except Exception as exc:  # noqa: BLE001
                logger.error("💥 Доставка «%s» не вдалася: %s", lookup.title, exc, exc_info=True)
                return await self._finish(session, state, FlowOutcome.DELIVERY_FAILED, None, lookup)

            logger.info("🎧 Доставлено «%s» (%s) → %s", lookup.title, resolved.platform.label, session.platform)
            return await self._finish(session, state, FlowOutcome.DELIVERED, None, lookup)
        finally:
            await self._recall(session, tip_id)

    # ================================
    # 🔢 ВАЛІДАЦІЯ
    # ================================
    @staticmethod
    def parse_selection(reply: str, total: int) -> Optional[int]:
        """'3' → 3, якщо 1 ≤ 3 ≤ total; інакше None."""
        try:
            number = int(reply.strip())
        except (TypeError, ValueError):
            return None
        if number < 1 or number > total:
            return None
        return number

    # ================================
    # ⚙️ ВНУТРІШНЄ
    # ================================
    async def _search_all(self, keyword: str) -> Tuple[Sequence[Track], Sequence[Track]]:
        qq_tracks, netease_tracks = await asyncio.gather(
            *(self._search_safely(platform, keyword) for platform in SEARCH_ORDER)
        )
        logger.info("🔎 «%s»: QQ=%d NetEase=%d", keyword, len(qq_tracks), len(netease_tracks))
        return qq_tracks, netease_tracks

    async def _search_safely(self, platform: Platform, keyword: str) -> Sequence[Track]:
        """Пошук в одному каталозі; будь-який збій → порожній список."""
        try:
            result = await self._catalog.search(platform, SearchParams(name=keyword))
        except Exception as exc:  # noqa: BLE001
            logger.warning("⚠️ Помилка отримання даних з %s: %s", platform.label, exc)
            return ()
        if not result.is_success and not result.tracks:
            logger.info("ℹ️ %s відповів code=%s msg=%r", platform.label, result.code, result.msg)
        return result.tracks

    async def _present_list(
        self,
        session: IChatSession,
        qq_tracks: Sequence[Track],
        netease_tracks: Sequence[Track],
    ) -> None:
        use_image = self._config.image_mode and self._renderer is not None
        if use_image:
            markup = build_song_list(qq_tracks, netease_tracks, line_break=HTML_BREAK)
            image = await self._renderer.render(markup, dark_mode=self._config.dark_mode)
            await session.send_image(image, self._prompt_text())
            return

        text = build_song_list(qq_tracks, netease_tracks, line_break=TEXT_BREAK)
        await session.send_text(f"{text}{TEXT_BREAK}{TEXT_BREAK}{self._prompt_text()}")

    def _prompt_text(self) -> str:
        """Підказка під списком: (вихід) + «введіть номер за N секунд»."""
        prompt = msg.MUSIC_SELECT_PROMPT.format(seconds=self._config.wait_seconds_label)
        if self._config.menu_exit_command_tip:
            commands = ",".join(html.escape(cmd) for cmd in self._config.exit_commands)
            hint = msg.MUSIC_EXIT_HINT.format(commands=commands)
            return f"{hint}{TEXT_BREAK}{TEXT_BREAK}{prompt}"
        return prompt

    async def _lookup(self, platform: Platform, track_id: Optional[int]) -> Optional[Track]:
        """Запит за id; None при мережевій помилці чи `code != 0`."""
        try:
            result = await self._catalog.search(platform, SearchParams(songid=track_id))
        except Exception as exc:  # noqa: BLE001
            logger.warning("⚠️ Lookup %s id=%s не вдався: %s", platform.label, track_id, exc)
            return None
        if not result.is_success or result.track is None:
            logger.info("ℹ️ Lookup %s id=%s → code=%s msg=%r", platform.label, track_id, result.code, result.msg)
            return None
        return result.track

    async def _recall(self, session: IChatSession, tip_id: Optional[MessageId]) -> None:
        if not self._config.recall or tip_id is None:
            return
        try:
            await session.delete_message(tip_id)
        except Exception as exc:  # noqa: BLE001
            logger.debug("ℹ️ Не вдалося видалити підказку %s: %s", tip_id, exc)

    async def _finish(
        self,
        session: IChatSession,
        state: FlowState,
        outcome: FlowOutcome,
        text: Optional[str],
        track: Optional[Track] = None,
    ) -> FlowResult:
        if text:
            await session.send_text(text)
        self._transition(state, FlowState.DONE)
        logger.debug("🏁 Флоу завершено: %s", outcome.value)
        return FlowResult(outcome=outcome, message=text, track=track)

    @staticmethod
    def _transition(current: FlowState, target: FlowState) -> FlowState:
        logger.debug("🔀 %s → %s", current.value, target.value)
        return target


__all__ = ["SelectionFlow", "FlowState", "FlowOutcome", "FlowResult", "SEARCH_ORDER"]
