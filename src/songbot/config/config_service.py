# ⚙️ songbot/config/config_service.py
"""
⚙️ ConfigService — єдина точка доступу до статичної конфігурації.

🔹 Джерела (за зростанням пріоритету): вбудований `config.yaml` → `SONGBOT_CONFIG` (YAML) → `.env`/ENV.
🔹 `.get("music.wait_timeout_ms", 45000, cast=int)` — доступ за крапковим ключем з приведенням типу.
🔹 Працює як Singleton; `reset()` скидає екземпляр (для тестів і перезавантаження).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Змінні з .env

# 🔠 Системні імпорти
import logging                              # 🧾 Логування
import os                                   # 📁 Змінні середовища
from pathlib import Path                    # 📁 Шляхи до YAML
from typing import Any, Callable, Dict, Mapping, Optional

from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"           # 📘 Дефолти, що їдуть з пакетом
ENV_CONFIG_PATH = "SONGBOT_CONFIG"                                   # 🧭 Шлях до користувацького YAML

# 🔐 ENV-змінна → крапковий ключ
ENV_KEYS: Mapping[str, str] = {
    "TELEGRAM_TOKEN": "telegram.bot_token",
    "SONGBOT_LOG_LEVEL": "logging.level",
    "SONGBOT_HEADLESS": "playwright.headless",
}

_MISSING = object()
_FALSY = {"0", "false", "no", "off", ""}


def as_bool(value: Any) -> bool:
    """Приводить YAML/ENV-значення до bool: рядок "false" з ENV — це False."""
    if isinstance(value, str):
        return value.strip().lower() not in _FALSY
    return bool(value)


class ConfigService:
    """
    ⚙️ Обʼєднана конфігурація бота. Зчитується один раз на процес.
    """

    _instance: Optional["ConfigService"] = None
    _config: Dict[str, Any]

    def __new__(cls, overrides: Optional[Mapping[str, Any]] = None) -> "ConfigService":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._config = {}
            instance._load_all_configs()                               # 🔄 Перше звернення: читаємо все
            cls._instance = instance
            logger.debug("🔄 ConfigService singleton створено")
        if overrides:
            cls._instance._deep_update(cls._instance._config, dict(overrides))  # 🧩 Точкові перевизначення
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Скидає singleton; наступний `ConfigService()` перечитає джерела."""
        cls._instance = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConfigService":
        """Будує незалежний екземпляр із готового словника (поза singleton)."""
        instance = super().__new__(cls)
        instance._config = {}
        instance._deep_update(instance._config, dict(data))
        return instance

    # ================================
    # 📥 ЗАВАНТАЖЕННЯ
    # ================================
    def _load_all_configs(self) -> None:
        self._deep_update(self._config, self._read_yaml(DEFAULT_CONFIG_PATH))

        user_path = os.getenv(ENV_CONFIG_PATH)
        if user_path:
            self._deep_update(self._config, self._read_yaml(Path(user_path)))

        load_dotenv()                                                  # 🔐 .env → os.environ
        env_values = {key: os.getenv(env) for env, key in ENV_KEYS.items() if os.getenv(env) is not None}
        self._deep_update(self._config, self._unflatten_dict(env_values))
        logger.info("✅ Конфігурацію завантажено (user_yaml=%s)", user_path or "—")

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("⚠️ YAML-конфіг не знайдено: %s", path)
            return {}
        except yaml.YAMLError as e:
            logger.warning("⚠️ Не вдалося розібрати %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("⚠️ Корінь %s має бути мапою, отримано %s", path, type(data).__name__)
            return {}
        return data

    # ================================
    # 🔑 ДОСТУП
    # ================================
    def get(self, key: str, default: Any = None, *, cast: Optional[Callable[[Any], Any]] = None) -> Any:
        """
        🔑 Повертає значення за крапковим ключем (наприклад, `music.recall`).

        Args:
            key: Шлях через крапку.
            default: Значення, якщо ключа немає (або cast не вдався).
            cast: Необовʼязкове приведення типу (`int`, `str`, ...).
        """
        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default
        if value is None:
            return default
        if cast is None:
            return value
        try:
            return cast(value)
        except (TypeError, ValueError):
            logger.warning("⚠️ Ключ %s: не вдалося привести %r через %s", key, value, getattr(cast, "__name__", cast))
            return default

    def section(self, key: str) -> Dict[str, Any]:
        """Повертає вкладений розділ як словник (порожній, якщо його немає)."""
        node = self.get(key, _MISSING)
        return dict(node) if isinstance(node, dict) else {}

    # ================================
    # 🔧 ЗЛИТТЯ
    # ================================
    @staticmethod
    def _unflatten_dict(d: Mapping[str, Any]) -> Dict[str, Any]:
        """'telegram.bot_token' → {'telegram': {'bot_token': ...}}"""
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split(".")
            ref = result
            for part in parts[:-1]:
                ref = ref.setdefault(part, {})
            ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Mapping[str, Any]) -> None:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                self._deep_update(source[key], value)                  # 🔁 Глибоке злиття
            else:
                source[key] = value
