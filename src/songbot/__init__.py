# 🎵 songbot/__init__.py
"""🎵 songbot — Telegram-бот: пошук пісень у QQ Music / NetEase Music і відправка голосом."""

__version__ = "0.1.0"
