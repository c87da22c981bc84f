from __future__ import annotations

import pytest


@pytest.mark.parametrize("query", ["", "   "])
def test_search_requires_query(client, query: str) -> None:
    response = client.get("/api/music/search", params={"q": query})

    assert response.status_code == 400
    assert response.json() == {"error": "Search query is required"}


def test_search_without_query_param(client) -> None:
    assert client.get("/api/search").status_code == 400


def test_search_by_title_with_filters(client) -> None:
    response = client.get("/api/music/search", params={"q": "b", "genre": "rock", "limit": 2})

    assert response.status_code == 200
    assert [s["title"] for s in response.json()] == ["Bohemian Rhapsody", "Back in Black"]


def test_search_by_title_and_artist(client) -> None:
    response = client.get("/api/search", params={"q": "zombie", "artist": "cranberries"})

    assert [s["artist"] for s in response.json()] == ["The Cranberries"]


def test_suggestions_need_two_characters(client) -> None:
    assert client.get("/api/music/suggestions", params={"q": "b"}).json() == {"suggestions": []}


def test_suggestions_merge_playlist_and_catalog_titles(client) -> None:
    params = {"q": "bi", "titles": ["Zombie", "Bitter Sweet Symphony", "Numb"]}

    suggestions = client.get("/api/music/suggestions", params=params).json()["suggestions"]

    assert suggestions == ["Billie Jean", "Bitter Sweet Symphony", "Zombie"]


def test_suggestions_put_exact_match_first(client) -> None:
    params = {"q": "ZOMBIE", "titles": ["Zombie Nation"]}

    suggestions = client.get("/api/music/suggestions", params=params).json()["suggestions"]

    assert suggestions == ["Zombie", "Zombie Nation"]


def test_genres_and_artists(client) -> None:
    assert "Pop" in client.get("/api/music/genres").json()["genres"]
    assert client.get("/api/music/artists").json()["artists"][0] == "AC/DC"


def test_random_database_song(client) -> None:
    response = client.get("/api/random-database-song", params={"genre": "POP"})

    assert response.status_code == 200
    assert response.json()["song"]["title"] == "Billie Jean"


def test_random_database_song_not_found(client) -> None:
    response = client.get("/api/random-database-song", params={"genre": "rock", "yearFrom": "2000", "yearTo": ""})

    assert response.status_code == 404
    assert response.json()["error"] == "No songs found with the specified filters"


def test_music_test_reports_catalog(client) -> None:
    body = client.get("/api/music-test").json()

    assert body["mongodbConnected"] is True
    assert body["genresCount"] == 5
    assert body["artistsCount"] == 5


def test_database_status_without_connection(client) -> None:
    body = client.get("/test").json()

    assert body["backend"] == "✅ Running"
    assert body["connection_status"] == "Not Connected"


def test_env_check(client) -> None:
    body = client.get("/api/env-check").json()

    assert body["environment"]["MONGODB_URI"] == "NOT SET"
    assert body["allRequiredSet"] is False


def test_catalog_unavailable_without_database() -> None:
    from fastapi.testclient import TestClient

    import main

    with TestClient(main.app) as test_client:
        response = test_client.get("/api/music/genres")

    assert response.status_code == 500
    assert response.json()["error"] == "Database not configured"


def test_guess_check(client) -> None:
    response = client.post("/api/game/guess", json={"guess": "  bohemian RHAPSODY ", "title": "Bohemian Rhapsody"})

    assert response.json() == {"correct": True, "actualTitle": "Bohemian Rhapsody"}
    assert client.post("/api/game/guess", json={"guess": "Zombie", "title": "Billie Jean"}).json()["correct"] is False
    assert client.post("/api/game/guess", json={"guess": "Zombie"}).status_code == 400
