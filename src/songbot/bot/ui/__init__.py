"""💬 UI-тексти бота."""
