from __future__ import annotations

import os
from typing import Any, Optional

import mongomock
import pytest

os.environ.pop("MONGODB_URI", None)
os.environ.pop("DATABASE_URL", None)
os.environ.setdefault("SESSION_SECRET", "test-session-secret")

from fastapi.testclient import TestClient  # noqa: E402

import main  # noqa: E402
import vocab  # noqa: E402
from catalog import SongCatalog  # noqa: E402
from spotify import SpotifyError, TokenInfo  # noqa: E402

SONGS = [
    {"title": "Bohemian Rhapsody", "artist": "Queen", "genre": "Rock", "year": 1975, "popularity": 95, "artistGender": "male"},
    {"title": "Back in Black", "artist": "AC/DC", "genre": "Hard Rock", "year": 1980, "popularity": 90, "artistGender": "male"},
    {"title": "Zombie", "artist": "The Cranberries", "genre": "Alternative Rock", "year": 1994, "popularity": 85, "artistGender": "female"},
    {"title": "Billie Jean", "artist": "Michael Jackson", "genre": "Pop", "year": 1982, "popularity": 93, "artistGender": "male"},
    {"title": "Hyperballad", "artist": "Björk", "genre": "Electronic", "year": 1995, "popularity": 60, "artistGender": "female"},
]


def make_track(name: str, artist: str, track_id: Optional[str] = None) -> dict:
    track_id = track_id or name.lower().replace(" ", "-")
    return {
        "id": track_id,
        "uri": f"spotify:track:{track_id}",
        "name": name,
        "artists": [{"name": artist}],
        "album": {"name": f"{name} (Album)"},
        "preview_url": None,
        "duration_ms": 200000,
    }


TRACKS = [make_track(s["title"], s["artist"]) for s in SONGS]


class FakeSpotify:
    """In-memory stand-in for SpotifyClient."""

    def __init__(self, tracks: Optional[list[dict]] = None):
        self.tracks = list(TRACKS if tracks is None else tracks)
        self.user = {"id": "user-1"}
        self.playlists: dict[str, list[dict]] = {}
        self.playlist_meta: dict[str, dict] = {}
        self.search_calls: list[str] = []
        self.tokens: list[str] = []
        self.fail_add = False
        self.fail_playlist_read = False
        self.invalid_token = False
        self.playback: Optional[dict] = None
        self.player_calls: list[tuple] = []

    def current_user(self) -> dict:
        if self.invalid_token:
            raise SpotifyError(401, "Spotify API error: 401", {"error": {"message": "The access token expired"}})
        return self.user

    def search_tracks(self, query: str, limit: int = 5) -> list[dict]:
        self.search_calls.append(query)
        q = query.lower()
        return [t for t in self.tracks if t["name"].lower() in q][:limit]

    def get_track(self, track_id: str) -> dict:
        for track in self.tracks:
            if track["id"] == track_id:
                return track
        raise SpotifyError(404, "Spotify API error: 404", {"error": {"message": "Not found"}})

    def create_playlist(self, user_id: str, name: str, description: str, public: bool = False) -> dict:
        playlist_id = f"pl{len(self.playlists) + 1}"
        self.playlists[playlist_id] = []
        meta = {"id": playlist_id, "name": name, "description": description, "uri": f"spotify:playlist:{playlist_id}", "public": public}
        self.playlist_meta[playlist_id] = meta
        return meta

    def add_tracks(self, playlist_id: str, uris: list[str]) -> dict:
        if self.fail_add and uris != ["spotify:track:4iV5W9uYEdYUVa79Axb7Rh"]:
            raise SpotifyError(403, "Spotify API error: 403", {"error": {"message": "Forbidden"}})
        items = self.playlists.setdefault(playlist_id, [])
        for uri in uris:
            items.append(next((t for t in self.tracks if t["uri"] == uri), {"uri": uri, "name": uri, "artists": []}))
        return {"snapshot_id": "snap"}

    def remove_tracks(self, playlist_id: str, uris: list[str]) -> dict:
        self.playlists[playlist_id] = [t for t in self.playlists.get(playlist_id, []) if t["uri"] not in uris]
        return {"snapshot_id": "snap"}

    def playlist_tracks(self, playlist_id: str, limit: int = 50) -> list[dict]:
        if self.fail_playlist_read:
            raise SpotifyError(500, "Spotify API error: 500")
        if playlist_id not in self.playlists:
            raise SpotifyError(404, "Spotify API error: 404")
        return self.playlists[playlist_id][:limit]

    def current_playback(self) -> Optional[dict]:
        return self.playback

    def play(self, device_id: Optional[str], uris: list[str]) -> None:
        self.player_calls.append(("play", device_id, uris))

    def pause(self, device_id: Optional[str]) -> None:
        self.player_calls.append(("pause", device_id))

    def resume(self, device_id: Optional[str]) -> None:
        self.player_calls.append(("resume", device_id))

    def seek(self, device_id: Optional[str], position_ms: int) -> None:
        self.player_calls.append(("seek", device_id, position_ms))


class FakeAuth:
    def __init__(self):
        self.codes: list[str] = []
        self.refreshed: list[str] = []
        self.refresh_fails = False

    def authorize_url(self, state: str) -> str:
        return f"https://accounts.spotify.com/authorize?client_id=test-client&state={state}"

    def exchange_code(self, code: str) -> TokenInfo:
        self.codes.append(code)
        return TokenInfo.from_spotify_token_response(
            {"access_token": "user-access", "refresh_token": "user-refresh", "expires_in": 3600}
        )

    def refresh(self, refresh_token: str) -> TokenInfo:
        self.refreshed.append(refresh_token)
        if self.refresh_fails:
            raise SpotifyError(400, "Failed to obtain token", {"error": "invalid_grant"})
        return TokenInfo.from_spotify_token_response({"access_token": "refreshed-access", "expires_in": 3600})

    def client_credentials_token(self) -> str:
        return "app-token"


@pytest.fixture
def mongo_db():
    return mongomock.MongoClient().db


@pytest.fixture
def songs_collection(mongo_db):
    collection = mongo_db.songs
    collection.insert_many([dict(s) for s in SONGS])
    return collection


@pytest.fixture
def catalog(songs_collection) -> SongCatalog:
    return SongCatalog(songs_collection)


@pytest.fixture
def word_repo(mongo_db) -> vocab.WordRepository:
    return vocab.WordRepository(mongo_db.word, mongo_db.counters)


@pytest.fixture
def fake_spotify() -> FakeSpotify:
    return FakeSpotify()


@pytest.fixture
def fake_auth() -> FakeAuth:
    return FakeAuth()


@pytest.fixture
def client(catalog, word_repo, fake_spotify, fake_auth):
    def factory(token: str) -> Any:
        fake_spotify.tokens.append(token)
        return fake_spotify

    main.app.dependency_overrides[main.get_catalog] = lambda: catalog
    main.app.dependency_overrides[main.get_word_repository] = lambda: word_repo
    main.app.dependency_overrides[main.get_client_factory] = lambda: factory
    main.app.dependency_overrides[main.get_spotify_auth] = lambda: fake_auth
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": "Bearer user-token"}
