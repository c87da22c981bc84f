"""
Playlist flows combining the song catalog with a user's Spotify account.

Catalog songs are resolved to Spotify tracks by trying several search
queries; additions to a playlist skip tracks it already holds.
"""

import re
from typing import Optional

import requests
from loguru import logger

from catalog import SongCatalog
from spotify import SpotifyClient, SpotifyError, artist_names, normalize_track

MAX_ATTEMPTS = 10
DUPLICATE_SCAN_LIMIT = 100
SEARCH_LIMIT = 5

# "Imagine" by John Lennon
FALLBACK_TRACK_URI = "spotify:track:4iV5W9uYEdYUVa79Axb7Rh"

DEFAULT_PLAYLIST_NAME = "Dynamic Music Game Playlist"
DEFAULT_PLAYLIST_DESCRIPTION = "Auto-generated playlist for music guessing game"

_PARENS = re.compile(r"\([^)]*\)")
_ENSEMBLE_WORDS = re.compile(r"Collective|Duo|Trio|Orchestra", re.IGNORECASE)


class TrackNotFound(Exception):
    pass


def clean_title(title: str) -> str:
    return _PARENS.sub("", title).strip()


def clean_artist(artist: str) -> str:
    return " ".join(_ENSEMBLE_WORDS.sub("", artist).split())


def search_queries(song: dict) -> list[str]:
    """Queries from most to least specific."""
    title, artist = song.get("title", ""), song.get("artist", "")
    queries = [
        f"{title} {artist}",
        title,
        f"{artist} {title}",
        f"{clean_title(title)} {artist}",
        f"{clean_artist(artist)} {title}",
        clean_title(title),
    ]
    return [q.strip() for q in queries if q.strip()]


def _contains_either(a: str, b: str) -> bool:
    if not a or not b:
        return False
    return a in b or b in a


def is_match(track: dict, song: dict) -> bool:
    """Titles and artists each contain one another, ignoring case and decorations."""
    track_title = (track.get("name") or "").lower()
    track_artist = " ".join(a.get("name", "").lower() for a in track.get("artists") or [])
    song_title = (song.get("title") or "").lower()
    song_artist = (song.get("artist") or "").lower()

    title_match = _contains_either(track_title, clean_title(song_title)) or _contains_either(track_title, song_title)
    artist_match = _contains_either(track_artist, clean_artist(song_artist)) or _contains_either(
        track_artist, song_artist
    )
    return title_match and artist_match


def find_spotify_track(song: dict, client: SpotifyClient) -> dict:
    queries = search_queries(song)
    first_results: list[dict] = []

    for index, query in enumerate(queries):
        logger.debug(f'Trying search: "{query}"')
        items = client.search_tracks(query, limit=SEARCH_LIMIT)
        if index == 0:
            first_results = items
        for track in items:
            if is_match(track, song):
                logger.info(f'Found good match: "{track.get("name")}" by "{artist_names(track)}"')
                return track
        if items:
            logger.debug(f'No suitable match for "{song.get("title")}" among {len(items)} results')

    if first_results:
        logger.info(f'Falling back to first result for "{song.get("title")}"')
        return first_results[0]

    raise TrackNotFound(f'No Spotify track found for: {song.get("title")} by {song.get("artist")}')


def playlist_contains(client: SpotifyClient, playlist_id: str, uri: str) -> bool:
    """Whether the first 100 tracks of the playlist include `uri`; errors count as no."""
    try:
        tracks = client.playlist_tracks(playlist_id, limit=DUPLICATE_SCAN_LIMIT)
    except (SpotifyError, requests.RequestException) as e:
        logger.warning(f"Error checking for duplicates in {playlist_id}: {e}")
        return False
    return any(track.get("uri") == uri for track in tracks)


def _resolve_unique(song: dict, client: SpotifyClient, playlist_id: str) -> Optional[dict]:
    try:
        track = find_spotify_track(song, client)
    except (TrackNotFound, SpotifyError, requests.RequestException) as e:
        logger.info(f"Failed to find Spotify track for {song.get('title')}: {e}")
        return None
    if playlist_contains(client, playlist_id, track.get("uri")):
        logger.info("Song already exists in playlist, trying another...")
        return None
    return track


def find_unique_random_song(
    catalog: SongCatalog,
    client: SpotifyClient,
    playlist_id: str,
    filters: Optional[dict] = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> Optional[tuple[dict, dict]]:
    """
    Pick random catalog songs until one resolves to a Spotify track that the
    playlist does not already hold.

    Returns (song, track) or None after `max_attempts` tries. When the filters
    match nothing, a single unfiltered song is tried before giving up.
    """
    filters = filters or {}
    for attempt in range(1, max_attempts + 1):
        logger.debug(f"Attempt {attempt} to find unique song with filters {filters}")
        song = catalog.get_random_song(filters)

        if song is None:
            if any(filters.values()):
                logger.info("No songs found with current filters, trying without filters...")
                song = catalog.get_random_song({})
                if song is not None:
                    track = _resolve_unique(song, client, playlist_id)
                    if track is not None:
                        return song, track
            logger.info("No songs found in database")
            break

        track = _resolve_unique(song, client, playlist_id)
        if track is not None:
            logger.info(f"Found unique song: {track.get('name')} by {artist_names(track)}")
            return song, track

    logger.info(f"No unique song found after {max_attempts} attempts")
    return None


def _playlist_summary(playlist: dict) -> dict:
    return {
        "id": playlist.get("id"),
        "name": playlist.get("name"),
        "description": playlist.get("description"),
        "uri": playlist.get("uri"),
    }


def _add_fallback(client: SpotifyClient, playlist_id: str) -> bool:
    try:
        client.add_tracks(playlist_id, [FALLBACK_TRACK_URI])
    except (SpotifyError, requests.RequestException) as e:
        logger.error(f"Fallback song also failed: {e}")
        return False
    logger.info("Added fallback song to playlist")
    return True


def create_dynamic_playlist(
    catalog: SongCatalog,
    client: SpotifyClient,
    name: str = DEFAULT_PLAYLIST_NAME,
    description: str = DEFAULT_PLAYLIST_DESCRIPTION,
    filters: Optional[dict] = None,
) -> dict:
    """
    Create a private playlist seeded with one random catalog song.

    Spotify errors while creating the playlist propagate; once it exists the
    result is always a success, seeded with the fallback track if the
    catalog song could not be added.
    """
    user = client.current_user()
    playlist = client.create_playlist(user["id"], name, description, public=False)
    playlist_id = playlist["id"]
    result = {"success": True, "playlist": _playlist_summary(playlist)}

    try:
        found = find_unique_random_song(catalog, client, playlist_id, filters)
        if found is not None:
            song, track = found
            client.add_tracks(playlist_id, [track["uri"]])
            logger.info(f"Successfully added random song to new playlist: {track.get('name')}")
            result.update(
                addedSong=normalize_track(track),
                originalSong=song,
                message="Playlist created successfully with random song from database",
            )
            return result
        logger.info("No suitable song found for filters, trying fallback song")
    except Exception as e:
        # the playlist already exists; report it whatever went wrong
        logger.opt(exception=e).error(f"Error adding song to new playlist: {e}")

    if _add_fallback(client, playlist_id):
        result["message"] = "Playlist created successfully with fallback song"
    else:
        result["message"] = "Playlist created successfully (failed to add songs)"
    return result


def create_playlist_with_song(
    song: dict,
    client: SpotifyClient,
    playlist_name: str = DEFAULT_PLAYLIST_NAME,
) -> dict:
    """Create a playlist holding `song`; raises TrackNotFound if Spotify lacks it."""
    track = find_spotify_track(song, client)
    user = client.current_user()
    playlist = client.create_playlist(
        user["id"],
        playlist_name,
        f"Auto-generated playlist for music guessing game - {song.get('title')} by {song.get('artist')}",
        public=False,
    )
    client.add_tracks(playlist["id"], [track["uri"]])
    return {
        "success": True,
        "playlist": _playlist_summary(playlist),
        "track": normalize_track(track),
        "originalSong": song,
        "message": "Playlist created successfully with song from database",
    }


class DuplicateTrack(Exception):
    def __init__(self, track: dict):
        super().__init__("This song is already in the playlist")
        self.track = track


def add_specific_song(song: dict, client: SpotifyClient, playlist_id: str) -> dict:
    track = find_spotify_track(song, client)
    if playlist_contains(client, playlist_id, track.get("uri")):
        raise DuplicateTrack(track)
    client.add_tracks(playlist_id, [track["uri"]])
    return {
        "success": True,
        "track": normalize_track(track),
        "originalSong": song,
        "message": "Song added successfully to playlist",
    }


def search_and_add(title: str, artist: str, client: SpotifyClient, playlist_id: str) -> dict:
    """Add the top Spotify hit for "title artist" without duplicate checks."""
    items = client.search_tracks(f"{title} {artist}", limit=1)
    if not items:
        raise TrackNotFound(f"{title} {artist}")
    track = items[0]
    client.add_tracks(playlist_id, [track["uri"]])
    return {"success": True, "track": normalize_track(track), "message": "Track added to playlist successfully"}
