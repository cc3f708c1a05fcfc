"""📬 Фічі бота (команди)."""

from .base import BaseFeature
from .core_commands_feature import CoreCommandsFeature
from .music_feature import MusicFeature, build_alias_pattern

__all__ = ["BaseFeature", "CoreCommandsFeature", "MusicFeature", "build_alias_pattern"]
