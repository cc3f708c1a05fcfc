# 💬 songbot/bot/ui/static_messages.py
"""
💬 Статичні тексти, які бачить користувач.

Плейсхолдери форматуються через `.format(...)` у місці використання.
"""

# ================================
# 🎵 ВИБІР ПІСНІ
# ================================
MUSIC_EMPTY_KEYWORD = "Please enter song information."
MUSIC_NO_RESULTS = "Could not retrieve the song list, please try again later."
MUSIC_EXIT_HINT = "To exit, send any of [{commands}]"
MUSIC_SELECT_PROMPT = "Please enter the song number within {seconds} seconds"
MUSIC_TIMEOUT = "Input timed out, song selection cancelled."
MUSIC_EXITED = "Exited song selection."
MUSIC_INVALID_INDEX = "Invalid number, song selection cancelled."
MUSIC_FETCH_FAILED = "Failed to fetch the song."

# ================================
# 📖 ДОВІДКА
# ================================
HELP_WELCOME = (
    "🎵 Hi! Send <code>/music &lt;song name&gt;</code> and pick a track by its number.\n"
    "Aliases: {aliases}."
)
HELP_USAGE = (
    "🎵 <b>How to use</b>\n"
    "1. <code>/music respire</code> — search QQ Music and NetEase Music.\n"
    "2. Reply with the number of the song within {seconds} seconds.\n"
    "3. Send one of [{exit_commands}] to leave the list.\n\n"
    "Voice generation speed depends on the network and device performance."
)

# ================================
# 🚨 ПОМИЛКИ
# ================================
ERROR_CRITICAL = "❌ Something went wrong. Please try again later."
ERROR_HTTP_TIMEOUT = "⏳ The music service did not respond in time."
ERROR_HTTP_CONNECTION = "🌐 Could not connect to the music service."
ERROR_HTTP_STATUS = "⚠️ The music service answered with HTTP {status_code}."
ERROR_TELEGRAM_RETRY_AFTER = "⏳ Too many requests, retry in {seconds} s."
ERROR_TELEGRAM_GENERAL = "⚠️ Telegram rejected the message, please retry."
ERROR_RENDER = "🖼️ Could not draw the song list, please try again."
