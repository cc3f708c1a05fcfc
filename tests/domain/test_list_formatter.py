"""
🧪 test_list_formatter.py — нумерація і форматування списку пісень
"""

from conftest import make_track
from songbot.domain.music.list_formatter import (
    HTML_BREAK,
    TEXT_BREAK,
    UNAVAILABLE_TEXT,
    build_song_list,
    format_song_list,
)


def test_numbering_is_contiguous_across_catalogs():
    qq = [make_track(f"qq{i}") for i in range(3)]
    netease = [make_track(f"ne{i}") for i in range(2)]

    text = build_song_list(qq, netease, line_break=TEXT_BREAK)

    assert "1. qq0 -- Artist" in text
    assert "3. qq2 -- Artist" in text
    netease_block = text.split("<b>NetEase Music</b>:")[1]
    assert "4. ne0 -- Artist" in netease_block
    assert "5. ne1 -- Artist" in netease_block


def test_empty_catalog_shows_placeholder():
    block = format_song_list([], "QQ Music", 0)
    assert block == f"<b>QQ Music</b>: {UNAVAILABLE_TEXT}"


def test_html_break_and_blank_line_between_blocks():
    markup = build_song_list([make_track("a")], [make_track("b")])
    assert f"{HTML_BREAK}{HTML_BREAK}<b>NetEase Music</b>:" in markup
    assert "<b>QQ Music</b>:<br />1. a -- Artist" in markup


def test_names_are_html_escaped():
    block = format_song_list([make_track("<Tom & Jerry>", "A<B")], "QQ Music", 0)
    assert "&lt;Tom &amp; Jerry&gt; -- A&lt;B" in block


def test_respire_scenario_list():
    qq = [make_track("Respire", "Artist A"), make_track("Respire (Live)", "Artist B")]

    text = build_song_list(qq, [], line_break=TEXT_BREAK)

    assert "1. Respire -- Artist A" in text
    assert "2. Respire (Live) -- Artist B" in text
    assert f"<b>NetEase Music</b>: {UNAVAILABLE_TEXT}" in text
    assert "3." not in text
