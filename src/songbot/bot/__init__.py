"""🤖 Telegram-шар songbot: команди, сесії, тексти."""
