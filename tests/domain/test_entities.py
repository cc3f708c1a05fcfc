"""
🧪 test_entities.py — розбір відповідей агрегатора у Track / SearchResult
"""

from songbot.domain.music.entities import Platform, SearchParams, SearchResult, Track


QQ_ITEM = {
    "songname": "Respire",
    "name": "Singer",
    "album": "Album",
    "pay": "免费",
    "cover": "https://img/1.jpg",
    "songurl": "https://y.qq.com/n/ryqq/songDetail/abc",
    "src": "https://cdn/1.mp3",
    "songid": "12345",
    "mid": "abc",
    "interval": "03:21",
}


def test_track_from_payload_maps_wire_names():
    track = Track.from_payload(QQ_ITEM, Platform.QQ)
    assert track.display_name == "Respire"
    assert track.artist == "Singer"
    assert track.page_url.endswith("abc")
    assert track.playable_source == "https://cdn/1.mp3"
    assert track.track_id == 12345
    assert track.song_id is None
    assert track.source_platform is Platform.QQ
    assert track.extras == {"mid": "abc", "interval": "03:21"}
    assert track.title == "Respire -- Singer"


def test_non_numeric_ids_are_dropped():
    track = Track.from_payload({"songname": "a", "songid": "n/a", "id": ""})
    assert track.track_id is None
    assert track.song_id is None


def test_search_result_list_data():
    result = SearchResult.from_payload({"code": 0, "msg": "ok", "data": [QQ_ITEM, "junk", QQ_ITEM]}, Platform.QQ)
    assert result.is_success
    assert len(result.tracks) == 2
    assert result.track is None


def test_search_result_single_data():
    result = SearchResult.from_payload({"code": "0", "data": QQ_ITEM})
    assert result.is_success
    assert result.track.display_name == "Respire"
    assert result.tracks == ()


def test_search_result_error_payloads():
    failed = SearchResult.from_payload({"code": 201, "msg": "not found", "data": "no song"})
    assert not failed.is_success
    assert failed.tracks == () and failed.track is None

    malformed = SearchResult.from_payload(["not", "a", "mapping"])
    assert malformed.code == -1
    assert not malformed.is_success


def test_search_params_drop_none():
    assert SearchParams(name="respire").to_query() == {"name": "respire"}
    assert SearchParams(songid=7, n=1).to_query() == {"n": 1, "songid": 7}
