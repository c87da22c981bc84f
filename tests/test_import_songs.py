from __future__ import annotations

import json

import mongomock
import pytest

import import_songs
from tests.conftest import SONGS


def test_load_songs_skips_invalid_rows(tmp_path) -> None:
    path = tmp_path / "songs.json"
    path.write_text(
        json.dumps([SONGS[0], {"artist": "No Title"}, {"title": "Minimal", "artist": "Someone"}]),
        encoding="utf-8",
    )

    songs = import_songs.load_songs(path)

    assert [s["title"] for s in songs] == ["Bohemian Rhapsody", "Minimal"]
    assert songs[1]["popularity"] == 0
    assert songs[1]["genre"] is None


def test_load_songs_requires_array(tmp_path) -> None:
    path = tmp_path / "songs.json"
    path.write_text(json.dumps({"title": "x"}), encoding="utf-8")

    with pytest.raises(ValueError):
        import_songs.load_songs(path)


def test_import_replaces_collection_and_reports_stats() -> None:
    collection = mongomock.MongoClient().db.songs
    collection.insert_one({"title": "Old", "artist": "Gone"})

    stats = import_songs.import_songs(collection, [dict(s) for s in SONGS], with_indexes=False)

    assert stats == {"total": 5, "genres": 5, "artists": 5}
    assert collection.count_documents({"title": "Old"}) == 0


def test_import_empty_list() -> None:
    collection = mongomock.MongoClient().db.songs

    stats = import_songs.import_songs(collection, [], with_indexes=False)

    assert stats["total"] == 0


def test_main_reports_failure_for_missing_file(tmp_path) -> None:
    assert import_songs.main([str(tmp_path / "missing.json")]) == 1
