# 📜 songbot/shared/utils/logger.py
"""
📜 Єдина схема логування songbot.

🔹 Піднімає кореневий логер `songbot` з консоллю та файлом із ротацією.
🔹 Вміє писати файл у JSON, глушити шумні сторонні бібліотеки (httpx, telegram, playwright).
🔹 Дочірні логери отримуються через `get_logger("music.flow")` → `songbot.music.flow`.
"""
from __future__ import annotations

# 🔠 Системні імпорти
import json									# 📦 Серіалізація записів у JSON
import logging									# 🪵 Стандартні логери
import sys									# 🧵 stdout для консолі
import threading								# 🔒 Захист від паралельної ініціалізації
from dataclasses import dataclass, field					# 🧱 DTO налаштувань
from logging.handlers import TimedRotatingFileHandler			# 📁 Ротація файлу за часом
from pathlib import Path								# 📂 Шляхи
from typing import Any, Dict, Mapping, Optional, Union			# 🧰 Типи

# ================================
# 🧾 КОНСТАНТИ МОДУЛЯ
# ================================
LOG_NAME: str = "songbot"							# 🏷️ Префікс усіх логерів застосунку
PLAIN_FORMAT: str = "%(asctime)s [%(levelname)s] - (%(name)s).%(funcName)s(%(lineno)d) - %(message)s"
CONSOLE_FORMAT: str = "[%(levelname).1s] %(name)s: %(message)s"

DEFAULT_SUPPRESS: Mapping[str, str] = {
    "httpx": "WARNING",							# 🌐 Кожен GET каталогу занадто голосний
    "httpcore": "WARNING",
    "telegram": "INFO",
    "telegram.ext": "INFO",
    "playwright": "WARNING",
}

_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}							# 🚫 Службові поля LogRecord не дублюємо

_lock = threading.Lock()


# ================================
# 🧾 DTO КОНФІГУРАЦІЇ
# ================================
@dataclass
class LoggingConfig:
    """Налаштування логування з дефолтами для локального запуску."""
    level: str = "INFO"
    console: bool = True
    json: bool = False
    file: Optional[str] = "logs/bot.log"					# 📁 None → без файлового хендлера
    when: str = "midnight"
    interval: int = 1
    backup_count: int = 7
    encoding: str = "utf-8"
    suppress: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SUPPRESS))
    console_level: str = "INFO"
    file_level: str = "DEBUG"


# ================================
# 🧰 ФОРМАТТЕРИ
# ================================
class JsonFormatter(logging.Formatter):
    """Пише кожен запис одним JSON-рядком разом з `extra`-полями."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "func": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():			# 🔎 Додаємо лише користувацькі extra
            if key in _RECORD_ATTRS or key.startswith("_") or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except (TypeError, ValueError):
                payload[key] = repr(value)				# 🔄 Несеріалізовне пишемо як repr
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)		# 🌐 Кирилиця/ієрогліфи як є


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _to_level(value: Union[str, int, None], default: int) -> int:
    if value is None:
        return default
    if isinstance(value, int):
        return value
    return getattr(logging, str(value).upper(), default)


def _make_file_handler(cfg: LoggingConfig, fmt: logging.Formatter) -> logging.Handler:
    """Готує файловий хендлер із ротацією; створює теку логів за потреби."""
    log_path = Path(str(cfg.file))
    log_path.parent.mkdir(parents=True, exist_ok=True)		# 🧱 logs/ може ще не існувати
    handler = TimedRotatingFileHandler(
        filename=str(log_path),
        when=cfg.when,
        interval=cfg.interval,
        backupCount=cfg.backup_count,
        encoding=cfg.encoding,
    )
    handler.setFormatter(fmt)
    return handler


def _suppress_third_party(suppress: Mapping[str, str]) -> None:
    for name, level in (suppress or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.WARNING))	# 🙊 Приглушуємо бібліотеку


# ================================
# 🚀 ПУБЛІЧНИЙ API
# ================================
def init_logging(cfg: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Ініціалізує кореневий логер `songbot` за єдиною схемою.

    Повторний виклик прибирає хендлери попередньої ініціалізації, тож дублікатів не буде.
    """
    cfg = cfg or LoggingConfig()
    with _lock:
        root_logger = logging.getLogger(LOG_NAME)
        console_level = _to_level(cfg.console_level, logging.INFO)
        file_level = _to_level(cfg.file_level, logging.DEBUG)
        root_logger.setLevel(min(_to_level(cfg.level, logging.INFO), console_level, file_level))

        for handler in list(root_logger.handlers):			# 🧹 Прибираємо свої старі хендлери
            root_logger.removeHandler(handler)
            handler.close()

        if cfg.console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
            console_handler.setLevel(console_level)
            root_logger.addHandler(console_handler)

        if cfg.file:
            file_fmt = JsonFormatter() if cfg.json else logging.Formatter(PLAIN_FORMAT)
            file_handler = _make_file_handler(cfg, file_fmt)
            file_handler.setLevel(file_level)
            root_logger.addHandler(file_handler)

        _suppress_third_party(cfg.suppress)

        root_logger.info(
            "✅ Logging initialized | level=%s console=%s json=%s file=%s",
            str(cfg.level).upper(),
            "ON" if cfg.console else "OFF",
            "ON" if cfg.json else "OFF",
            cfg.file or "OFF",
        )
        return root_logger


def init_logging_from_config(node: Optional[Mapping[str, Any]]) -> logging.Logger:
    """
    Ініціалізує логування з розділу `logging` конфігурації.

    Args:
        node: Словник із ConfigService (`level`, `console`, `json`, `file`, `suppress`, ...).

    Returns:
        logging.Logger: Кореневий логер застосунку.
    """
    node = node or {}
    defaults = LoggingConfig()
    suppress = dict(DEFAULT_SUPPRESS)
    suppress.update(node.get("suppress") or {})				# 🧩 Конфіг доповнює дефолти
    cfg = LoggingConfig(
        level=node.get("level") or defaults.level,
        console=defaults.console if node.get("console") is None else bool(node.get("console")),
        json=bool(node.get("json", defaults.json)),
        file=node.get("file", defaults.file),
        backup_count=int(node.get("backup_count", defaults.backup_count)),
        suppress=suppress,
        console_level=node.get("console_level") or node.get("level") or defaults.console_level,
        file_level=node.get("file_level") or defaults.file_level,
    )
    return init_logging(cfg)


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    """Повертає `songbot` або `songbot.<suffix>`."""
    return logging.getLogger(LOG_NAME if not suffix else f"{LOG_NAME}.{suffix}")
