"""⚙️ Конфігурація songbot."""

from .config_service import ConfigService, as_bool
from .music_config import MusicConfig, split_exit_commands

__all__ = ["ConfigService", "as_bool", "MusicConfig", "split_exit_commands"]
