# 🎵 songbot/domain/music/__init__.py
"""🎵 Домен музичного пошуку: DTO, контракти, форматування списку, флоу вибору."""

from .entities import Platform, SearchParams, SearchResult, Track
from .interfaces import DeliveryPlan, IChatSession, PromptResult
from .list_formatter import build_song_list, format_song_list
from .platform_resolver import ResolvedTrack, resolve_platform
from .selection_flow import FlowOutcome, FlowResult, FlowState, SelectionFlow

__all__ = [
    "Platform",
    "SearchParams",
    "SearchResult",
    "Track",
    "DeliveryPlan",
    "IChatSession",
    "PromptResult",
    "build_song_list",
    "format_song_list",
    "ResolvedTrack",
    "resolve_platform",
    "FlowOutcome",
    "FlowResult",
    "FlowState",
    "SelectionFlow",
]
