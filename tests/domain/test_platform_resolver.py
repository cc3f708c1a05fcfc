"""
🧪 test_platform_resolver.py — платформа треку за URL сторінки
"""

import logging

from conftest import make_track
from songbot.domain.music.entities import Platform
from songbot.domain.music.platform_resolver import resolve_platform


def test_qq_url_uses_track_id():
    track = make_track("x", page_url="https://y.qq.com/n/ryqq/songDetail/001", track_id=11, song_id=22)
    resolved = resolve_platform(track)
    assert resolved.platform is Platform.QQ
    assert resolved.track_id == 11


def test_netease_url_uses_song_id():
    track = make_track("x", page_url="https://music.163.com/song?id=22", track_id=11, song_id=22)
    resolved = resolve_platform(track)
    assert resolved.platform is Platform.NETEASE
    assert resolved.track_id == 22


def test_no_marker_returns_none():
    assert resolve_platform(make_track("x", page_url="https://example.org/song/1")) is None
    assert resolve_platform(make_track("x", page_url="")) is None


def test_both_markers_prefer_qq():
    track = make_track("x", page_url="https://163.com/redirect?to=qq.com", track_id=1, song_id=2)
    assert resolve_platform(track).platform is Platform.QQ


def test_url_wins_over_source_platform_and_warns(caplog):
    track = make_track("x", page_url="https://music.163.com/song?id=5", song_id=5, platform=Platform.QQ)
    with caplog.at_level(logging.WARNING, logger="songbot"):
        resolved = resolve_platform(track)
    assert resolved.platform is Platform.NETEASE
    assert any("NetEase Music" in r.getMessage() for r in caplog.records)
