# 🎛️ songbot/config/music_config.py
"""
🎛️ Типізовані налаштування музичної команди.

🔹 Читає розділ `music` з ConfigService і валідує значення (таймаут — натуральне число мс).
🔹 Розбирає `exit_command` на токени за «,» та «，».
🔹 `retry_exit_command_tip` зберігається для сумісності конфігів, флоу його не читає.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Tuple

from songbot.config.config_service import as_bool
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.config.music")

DEFAULT_GENERATION_TIP = "Generating voice…"
DEFAULT_WAIT_TIMEOUT_MS = 45000
DEFAULT_EXIT_COMMAND = "0, not listening"

_EXIT_SPLIT_RE = re.compile(r"[,，]")                                   # ✂️ ASCII та повноширинна кома


class _ConfigSource(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...


def split_exit_commands(raw: str) -> Tuple[str, ...]:
    """'0, not listening，стоп' → ('0', 'not listening', 'стоп'); порожні токени відкидаються."""
    tokens = (token.strip() for token in _EXIT_SPLIT_RE.split(raw or ""))
    return tuple(token for token in tokens if token)


def _natural_ms(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        logger.warning("⚠️ music.wait_timeout_ms=%r не є числом → %s", value, default)
        return default
    if number < 0:
        logger.warning("⚠️ music.wait_timeout_ms=%r відʼємний → %s", value, default)
        return default
    return number


@dataclass(frozen=True, slots=True)
class MusicConfig:
    """⚙️ Налаштування флоу вибору пісні."""

    generation_tip: str = DEFAULT_GENERATION_TIP                      # 🎙️ Тимчасова підказка «генерую…»
    wait_timeout_ms: int = DEFAULT_WAIT_TIMEOUT_MS                    # ⏳ Скільки чекаємо номер пісні
    exit_command: str = DEFAULT_EXIT_COMMAND                          # 🚪 Токени виходу через кому
    menu_exit_command_tip: bool = False                               # 💡 Підказка виходу під списком
    retry_exit_command_tip: bool = True                               # 🧷 Сумісність; не використовується
    recall: bool = True                                               # 🗑️ Видаляти підказку після доставки
    image_mode: bool = True                                           # 🖼️ Список картинкою, інакше текстом
    dark_mode: bool = True                                            # 🌙 Тема картинки
    command_names: Tuple[str, ...] = ("music", "mdff", "song")
    text_aliases: Tuple[str, ...] = ("点歌",)
    codec_platforms: Tuple[str, ...] = ("qq",)
    exit_commands: Tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "exit_commands", split_exit_commands(self.exit_command))

    @property
    def wait_seconds(self) -> float:
        return self.wait_timeout_ms / 1000

    @property
    def wait_seconds_label(self) -> str:
        """45000 → "45", 1500 → "1.5"."""
        return f"{self.wait_seconds:g}"

    @classmethod
    def from_config(cls, config: Optional[_ConfigSource]) -> "MusicConfig":
        """Будує MusicConfig із ConfigService (відсутні ключі → дефолти)."""
        if config is None:
            return cls()

        def _get(key: str, default: Any) -> Any:
            value = config.get(f"music.{key}", default)
            return default if value is None else value

        def _tuple(key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
            value = _get(key, default)
            if isinstance(value, str):
                value = [value]
            return tuple(str(item).strip() for item in value if str(item).strip())

        music = cls(
            generation_tip=str(_get("generation_tip", DEFAULT_GENERATION_TIP)),
            wait_timeout_ms=_natural_ms(_get("wait_timeout_ms", DEFAULT_WAIT_TIMEOUT_MS), DEFAULT_WAIT_TIMEOUT_MS),
            exit_command=str(_get("exit_command", DEFAULT_EXIT_COMMAND)),
            menu_exit_command_tip=as_bool(_get("menu_exit_command_tip", False)),
            retry_exit_command_tip=as_bool(_get("retry_exit_command_tip", True)),
            recall=as_bool(_get("recall", True)),
            image_mode=as_bool(_get("image_mode", True)),
            dark_mode=as_bool(_get("dark_mode", True)),
            command_names=_tuple("command.names", ("music", "mdff", "song")),
            text_aliases=_tuple("command.text_aliases", ("点歌",)),
            codec_platforms=tuple(p.lower() for p in _tuple("voice.codec_platforms", ("qq",))),
        )
        logger.debug(
            "🎛️ MusicConfig: image=%s dark=%s timeout=%sms exit=%s recall=%s",
            music.image_mode,
            music.dark_mode,
            music.wait_timeout_ms,
            music.exit_commands,
            music.recall,
        )
        return music
