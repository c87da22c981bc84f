import os
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional
from urllib.parse import urlencode

import requests
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from jose import JWTError, jwt
from loguru import logger
from pydantic import BaseModel, field_validator
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

import database
import playlists
import vocab
from catalog import SongCatalog
from config import get_settings
from game import SUGGESTION_MIN_CHARS, is_correct_guess, rank_suggestions
from logging_config import setup_logging
from playback import PlaybackEstimator
from spotify import SpotifyAuth, SpotifyClient, SpotifyError, app_account_token, normalize_track

settings = get_settings()
setup_logging(settings.log_level)

# FastAPI app
app = FastAPI(title="Song Guess API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)

# OAuth state settings
STATE_ALGORITHM = "HS256"
STATE_EXPIRE_MINUTES = 10

WORD_COLLECTION = "word"
COUNTER_COLLECTION = "counters"

spotify_auth = SpotifyAuth(settings.spotify_client_id, settings.spotify_client_secret, settings.redirect_uri)


# Request models

class SongFilters(BaseModel):
    genre: Optional[str] = None
    yearFrom: Optional[int] = None
    yearTo: Optional[int] = None

    @field_validator("genre", "yearFrom", "yearTo", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def as_filters(self) -> dict:
        return {"genre": self.genre, "yearFrom": self.yearFrom, "yearTo": self.yearTo}


class RefreshRequest(BaseModel):
    refresh_token: Optional[str] = None


class CreateDynamicPlaylistRequest(SongFilters):
    name: str = playlists.DEFAULT_PLAYLIST_NAME
    description: str = playlists.DEFAULT_PLAYLIST_DESCRIPTION
    playlistName: Optional[str] = None


class CreatePlaylistWithSongRequest(SongFilters):
    playlistName: str = playlists.DEFAULT_PLAYLIST_NAME


class AddRandomSongRequest(SongFilters):
    playlistId: Optional[str] = None


class AddSpecificSongRequest(BaseModel):
    playlistId: Optional[str] = None
    song: Optional[dict] = None


class SearchAndAddRequest(BaseModel):
    title: Optional[str] = None
    artist: Optional[str] = None
    playlistId: Optional[str] = None


class RemoveTrackRequest(BaseModel):
    uri: Optional[str] = None


class PlayerRequest(BaseModel):
    device_id: Optional[str] = None
    uris: Optional[list[str]] = None
    position_ms: Optional[int] = None


class GuessRequest(BaseModel):
    guess: Optional[str] = None
    title: Optional[str] = None


class WordRequest(BaseModel):
    term: str
    translation: str
    example: Optional[str] = None


class AnswerRequest(BaseModel):
    correct: bool


class CsvImportRequest(BaseModel):
    csv: str


# Error rendering

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    body = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(jsonable_encoder(body), status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        {"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        status_code=400,
    )


@app.exception_handler(SpotifyError)
async def spotify_error_handler(request: Request, exc: SpotifyError):
    logger.error(f"{request.method} {request.url.path}: {exc.message} {exc.details or ''}")
    return JSONResponse({"error": exc.message, "details": jsonable_encoder(exc.details)}, status_code=exc.status_code)


@app.exception_handler(requests.RequestException)
async def provider_error_handler(request: Request, exc: requests.RequestException):
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse({"error": f"Provider error: {str(exc)[:120]}"}, status_code=502)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"{request.method} {request.url.path} failed")
    return JSONResponse({"error": "Internal server error", "message": str(exc)}, status_code=500)


# Dependencies

def get_catalog() -> SongCatalog:
    try:
        return SongCatalog(database.get_collection(settings.collection_name))
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail={"error": "Database not configured", "message": str(e)})


def get_word_repository() -> vocab.WordRepository:
    try:
        return vocab.WordRepository(
            database.get_collection(WORD_COLLECTION),
            database.get_collection(COUNTER_COLLECTION),
        )
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail={"error": "Database not configured", "message": str(e)})


def get_spotify_auth() -> SpotifyAuth:
    return spotify_auth


def get_client_factory() -> Callable[[str], SpotifyClient]:
    return SpotifyClient


def get_optional_token(request: Request) -> Optional[str]:
    """Bearer token from the Authorization header, else the session's token."""
    auth_header = request.headers.get("authorization", "")
    if auth_header.startswith("Bearer ") and auth_header[7:].strip():
        return auth_header[7:].strip()
    return request.session.get("access_token")


def get_user_token(token: Optional[str] = Depends(get_optional_token)) -> str:
    if not token:
        raise HTTPException(status_code=401, detail="User not authenticated with Spotify. Please log in first.")
    return token


def get_spotify(
    token: str = Depends(get_user_token),
    factory: Callable[[str], SpotifyClient] = Depends(get_client_factory),
) -> SpotifyClient:
    return factory(token)


# Utility functions

def create_state_token() -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=STATE_EXPIRE_MINUTES)
    return jwt.encode({"nonce": uuid.uuid4().hex, "exp": expire}, settings.session_secret, algorithm=STATE_ALGORITHM)


def verify_state_token(state: Optional[str]) -> bool:
    if not state:
        return False
    try:
        jwt.decode(state, settings.session_secret, algorithms=[STATE_ALGORITHM])
    except JWTError:
        return False
    return True


# Routes
@app.get("/")
def read_root():
    return {"message": "Song Guess API running"}


@app.get("/test")
@app.get("/api/test")
def test_database():
    """Test endpoint to check if database is available and accessible"""
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_url": None,
        "database_name": None,
        "connection_status": "Not Connected",
        "collections": [],
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    db = database.db
    if db is not None:
        response["database"] = "✅ Available"
        response["database_name"] = db.name
        response["connection_status"] = "Connected"
        try:
            response["collections"] = db.list_collection_names()[:10]
            response["database"] = "✅ Connected & Working"
        except Exception as e:
            logger.warning(f"Database check failed: {e}")
            response["database"] = f"⚠️  Connected but Error: {str(e)[:50]}"

    response["database_url"] = "✅ Set" if settings.mongodb_uri else "❌ Not Set"
    return response


@app.get("/api/env-check")
def env_check():
    environment = {
        "MONGODB_URI": "SET" if settings.mongodb_uri else "NOT SET",
        "DATABASE_NAME": settings.database_name,
        "COLLECTION_NAME": settings.collection_name,
        "SPOTIFY_CLIENT_ID": "SET" if settings.spotify_client_id else "NOT SET",
        "SPOTIFY_CLIENT_SECRET": "SET" if settings.spotify_client_secret else "NOT SET",
        "SESSION_SECRET": "SET" if os.getenv("SESSION_SECRET") else "NOT SET",
        "REDIRECT_URI": settings.redirect_uri,
        "FRONTEND_URL": settings.frontend_url,
    }
    return {
        "message": "Environment check",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": environment,
        "allRequiredSet": bool(settings.mongodb_uri) and settings.spotify_configured,
    }


@app.get("/api/music-test")
def music_test(catalog: SongCatalog = Depends(get_catalog)):
    try:
        genres = catalog.get_all_genres()
        artists = catalog.get_all_artists()
    except Exception as e:
        logger.error(f"Music API test error: {e}")
        raise HTTPException(
            status_code=500,
            detail={"error": "Music API test failed", "message": str(e), "mongodbConnected": False},
        )
    return {
        "message": "Music API test successful!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "genresCount": len(genres),
        "artistsCount": len(artists),
        "sampleGenres": genres[:5],
        "sampleArtists": artists[:5],
        "mongodbConnected": True,
    }


# Auth endpoints
@app.get("/auth/login")
@app.get("/api/auth/login")
def login(auth: SpotifyAuth = Depends(get_spotify_auth)):
    return RedirectResponse(auth.authorize_url(create_state_token()))


@app.get("/auth/callback")
@app.get("/api/auth/callback")
def callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    auth: SpotifyAuth = Depends(get_spotify_auth),
):
    if error:
        raise HTTPException(status_code=400, detail={"error": "Spotify authorization failed", "message": error})
    if not code:
        raise HTTPException(status_code=400, detail="No code provided")
    if not verify_state_token(state):
        raise HTTPException(status_code=400, detail="Invalid or expired state")

    token = auth.exchange_code(code)
    request.session["access_token"] = token.access_token
    request.session["refresh_token"] = token.refresh_token
    request.session["expires_at"] = token.expires_at
    logger.info("Spotify login completed")

    params = {"access_token": token.access_token}
    if token.refresh_token:
        params["refresh_token"] = token.refresh_token
    return RedirectResponse(f"{settings.frontend_url}/?{urlencode(params)}")


@app.post("/auth/refresh")
@app.post("/api/auth/refresh")
def refresh(payload: RefreshRequest, auth: SpotifyAuth = Depends(get_spotify_auth)):
    if not payload.refresh_token:
        raise HTTPException(status_code=400, detail="Refresh token is required")
    if not settings.spotify_configured:
        raise HTTPException(status_code=500, detail="Spotify credentials not configured")

    try:
        token = auth.refresh(payload.refresh_token)
    except SpotifyError as e:
        raise HTTPException(status_code=e.status_code, detail={"error": "Failed to refresh token", "details": e.details})
    return {"access_token": token.access_token, "expires_in": token.expires_in, "token_type": token.token_type}


@app.get("/auth/auto-login")
@app.post("/auth/auto-login")
@app.get("/api/auth/auto-login")
@app.post("/api/auth/auto-login")
def auto_login(
    auth: SpotifyAuth = Depends(get_spotify_auth),
    factory: Callable[[str], SpotifyClient] = Depends(get_client_factory),
):
    try:
        return app_account_token(settings.app_access_token, settings.app_refresh_token, auth, factory)
    except SpotifyError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={"error": e.message, "details": e.details, "setup_required": True},
        )


@app.get("/auth/logout")
@app.get("/api/auth/logout")
@app.post("/auth/logout")
@app.post("/api/auth/logout")
def logout(request: Request):
    request.session.clear()
    logger.info("Session cleared")
    return RedirectResponse(settings.frontend_url, status_code=303)


@app.get("/auth/test")
@app.get("/api/auth/test")
def auth_test(request: Request):
    session = dict(request.session)
    return {
        "message": "Auth endpoints are working",
        "session": {"authenticated": bool(session.get("access_token")), "expires_at": session.get("expires_at")},
    }


# Music catalog endpoints
@app.get("/api/music/search")
@app.get("/api/search")
def search_music(
    q: Optional[str] = None,
    limit: int = 10,
    genre: Optional[str] = None,
    artist: Optional[str] = None,
    catalog: SongCatalog = Depends(get_catalog),
):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Search query is required")

    logger.info(f'Searching catalog for "{q}" - genre: {genre or "none"}, artist: {artist or "none"}, limit: {limit}')
    songs = catalog.advanced_search({"title": q, "genre": genre, "artist": artist}, limit=max(limit, 1))
    logger.info(f'Found {len(songs)} songs matching "{q}"')
    return songs


@app.get("/api/music/suggestions")
def music_suggestions(
    q: Optional[str] = None,
    titles: list[str] = Query(default=[]),
    limit: int = 10,
    catalog: SongCatalog = Depends(get_catalog),
):
    """Guess suggestions from the playlist titles the client holds plus catalog titles."""
    if not q or len(q.strip()) < SUGGESTION_MIN_CHARS:
        return {"suggestions": []}
    songs = catalog.advanced_search({"title": q.strip()}, limit=max(limit, 1))
    return {"suggestions": rank_suggestions(q, [*titles, *(song["title"] for song in songs)])}


@app.get("/api/music/genres")
def music_genres(catalog: SongCatalog = Depends(get_catalog)):
    return {"genres": catalog.get_all_genres()}


@app.get("/api/music/artists")
def music_artists(catalog: SongCatalog = Depends(get_catalog)):
    return {"artists": catalog.get_all_artists()}


@app.get("/api/random-database-song")
def random_database_song(
    genre: Optional[str] = None,
    yearFrom: Optional[str] = None,
    yearTo: Optional[str] = None,
    catalog: SongCatalog = Depends(get_catalog),
):
    song = catalog.get_random_song({"genre": genre, "yearFrom": yearFrom, "yearTo": yearTo})
    if song is None:
        raise HTTPException(status_code=404, detail="No songs found with the specified filters")
    return {"song": song}


# Spotify endpoints
@app.get("/api/tracks/{track_id}")
def track_details(
    track_id: str,
    token: Optional[str] = Depends(get_optional_token),
    auth: SpotifyAuth = Depends(get_spotify_auth),
    factory: Callable[[str], SpotifyClient] = Depends(get_client_factory),
):
    """Track lookup with the user's token, or the app's client-credentials token."""
    client = factory(token or auth.client_credentials_token())
    track = client.get_track(track_id)
    return {**normalize_track(track), "duration_ms": track.get("duration_ms")}


@app.post("/api/search-and-add-to-playlist")
def search_and_add_to_playlist(payload: SearchAndAddRequest, client: SpotifyClient = Depends(get_spotify)):
    if not payload.title or not payload.artist:
        raise HTTPException(status_code=400, detail="Title and artist are required")
    if not payload.playlistId:
        raise HTTPException(status_code=400, detail="Playlist ID is required")

    try:
        return playlists.search_and_add(payload.title, payload.artist, client, payload.playlistId)
    except playlists.TrackNotFound:
        raise HTTPException(
            status_code=404,
            detail={"error": "Song not found on Spotify", "searchQuery": f"{payload.title} {payload.artist}"},
        )


@app.post("/api/create-dynamic-playlist")
def create_dynamic_playlist(
    payload: CreateDynamicPlaylistRequest,
    client: SpotifyClient = Depends(get_spotify),
    catalog: SongCatalog = Depends(get_catalog),
):
    try:
        return playlists.create_dynamic_playlist(
            catalog,
            client,
            name=payload.playlistName or payload.name,
            description=payload.description,
            filters=payload.as_filters(),
        )
    except SpotifyError as e:
        raise HTTPException(status_code=e.status_code, detail={"error": "Failed to create playlist", "details": e.details})


@app.post("/api/create-playlist-with-song")
def create_playlist_with_song(
    payload: CreatePlaylistWithSongRequest,
    client: SpotifyClient = Depends(get_spotify),
    catalog: SongCatalog = Depends(get_catalog),
):
    logger.info(f"Creating playlist with song, filters: {payload.as_filters()}")
    song = catalog.get_random_song(payload.as_filters())
    if song is None:
        raise HTTPException(status_code=404, detail="No songs found with the specified filters")

    try:
        return playlists.create_playlist_with_song(song, client, payload.playlistName)
    except playlists.TrackNotFound as e:
        raise HTTPException(
            status_code=404,
            detail={"error": "Song not found on Spotify", "originalSong": song, "searchError": str(e)},
        )
    except SpotifyError as e:
        raise HTTPException(status_code=e.status_code, detail={"error": "Failed to create playlist", "details": e.details})


@app.get("/api/playlist-tracks/{playlist_id}")
def playlist_tracks(playlist_id: str, limit: int = 50, client: SpotifyClient = Depends(get_spotify)):
    try:
        tracks = client.playlist_tracks(playlist_id, limit=limit)
    except SpotifyError as e:
        raise HTTPException(status_code=e.status_code, detail="Failed to fetch playlist tracks")
    return {"tracks": [normalize_track(t) for t in tracks]}


@app.delete("/api/playlist-tracks/{playlist_id}")
def remove_playlist_track(playlist_id: str, payload: RemoveTrackRequest, client: SpotifyClient = Depends(get_spotify)):
    if not payload.uri:
        raise HTTPException(status_code=400, detail="Track URI is required")
    try:
        client.remove_tracks(playlist_id, [payload.uri])
    except SpotifyError as e:
        raise HTTPException(status_code=e.status_code, detail={"error": "Failed to remove track", "details": e.details})
    return {"success": True, "uri": payload.uri, "message": "Track removed from playlist"}


@app.post("/api/add-random-song-to-playlist")
def add_random_song_to_playlist(
    payload: AddRandomSongRequest,
    client: SpotifyClient = Depends(get_spotify),
    catalog: SongCatalog = Depends(get_catalog),
):
    if not payload.playlistId:
        raise HTTPException(status_code=400, detail="Playlist ID is required")

    logger.info(f"Adding random song to playlist {payload.playlistId}, filters: {payload.as_filters()}")
    found = playlists.find_unique_random_song(catalog, client, payload.playlistId, payload.as_filters())
    if found is None:
        raise HTTPException(
            status_code=409,
            detail={
                "error": "Could not find a unique song to add. Playlist may be full or all matching songs "
                "are already in the playlist.",
                "attempts": playlists.MAX_ATTEMPTS,
            },
        )

    song, track = found
    try:
        client.add_tracks(payload.playlistId, [track["uri"]])
    except SpotifyError as e:
        raise HTTPException(status_code=e.status_code, detail={"error": "Failed to add track to playlist", "details": e.details})

    return {
        "success": True,
        "track": normalize_track(track),
        "originalSong": song,
        "message": "Song added successfully to playlist",
    }


@app.post("/api/add-specific-song-to-playlist")
def add_specific_song_to_playlist(payload: AddSpecificSongRequest, client: SpotifyClient = Depends(get_spotify)):
    if not payload.playlistId or not payload.song:
        raise HTTPException(status_code=400, detail="Playlist ID and song are required")
    song = payload.song
    if not song.get("title") or not song.get("artist"):
        raise HTTPException(status_code=400, detail="Song title and artist are required")

    logger.info(f"Adding specific song to playlist: {song['title']} by {song['artist']}")
    try:
        return playlists.add_specific_song(song, client, payload.playlistId)
    except playlists.TrackNotFound as e:
        raise HTTPException(
            status_code=404,
            detail={"error": "Song not found on Spotify", "originalSong": song, "searchError": str(e)},
        )
    except playlists.DuplicateTrack as e:
        track = normalize_track(e.track)
        track.pop("preview_url", None)
        raise HTTPException(status_code=409, detail={"error": str(e), "track": track})
    except SpotifyError as e:
        raise HTTPException(status_code=e.status_code, detail={"error": "Failed to add track to playlist", "details": e.details})


# Player endpoints
@app.get("/api/player")
def player_state(client: SpotifyClient = Depends(get_spotify)):
    """Current playback with the position the estimator derives from it."""
    state = client.current_playback()
    estimator = PlaybackEstimator()
    estimator.sync_from_player(state)
    item = (state or {}).get("item")
    return {
        "is_playing": estimator.is_playing,
        "position_ms": int(estimator.position()),
        "duration_ms": estimator.duration_ms,
        "track": normalize_track(item) if item else None,
        "device_id": ((state or {}).get("device") or {}).get("id"),
    }


@app.put("/api/player/play")
def player_play(payload: PlayerRequest, client: SpotifyClient = Depends(get_spotify)):
    if not payload.uris:
        raise HTTPException(status_code=400, detail="Track URIs are required")
    client.play(payload.device_id, payload.uris)
    return {"success": True}


@app.put("/api/player/pause")
def player_pause(payload: PlayerRequest, client: SpotifyClient = Depends(get_spotify)):
    client.pause(payload.device_id)
    return {"success": True}


@app.put("/api/player/resume")
def player_resume(payload: PlayerRequest, client: SpotifyClient = Depends(get_spotify)):
    client.resume(payload.device_id)
    return {"success": True}


@app.put("/api/player/seek")
def player_seek(payload: PlayerRequest, client: SpotifyClient = Depends(get_spotify)):
    if payload.position_ms is None or payload.position_ms < 0:
        raise HTTPException(status_code=400, detail="A non-negative position_ms is required")
    client.seek(payload.device_id, payload.position_ms)
    return {"success": True}


# Game endpoints
@app.post("/api/game/guess")
def check_guess(payload: GuessRequest):
    if not payload.title:
        raise HTTPException(status_code=400, detail="Song title is required")
    return {"correct": is_correct_guess(payload.guess, payload.title), "actualTitle": payload.title}


# Vocabulary endpoints
@app.get("/api/vocab/words")
def list_words(repo: vocab.WordRepository = Depends(get_word_repository)):
    return {"words": repo.list_all()}


def _validated_word(payload: WordRequest) -> WordRequest:
    if not payload.term.strip() or not payload.translation.strip():
        raise HTTPException(status_code=400, detail="Term and translation are required")
    return payload


@app.post("/api/vocab/words", status_code=201)
def create_word(payload: WordRequest, repo: vocab.WordRepository = Depends(get_word_repository)):
    payload = _validated_word(payload)
    return repo.upsert(payload.term, payload.translation, payload.example)


@app.get("/api/vocab/words/{word_id}")
def get_word(word_id: int, repo: vocab.WordRepository = Depends(get_word_repository)):
    word = repo.get(word_id)
    if word is None:
        raise HTTPException(status_code=404, detail="Word not found")
    return word


@app.put("/api/vocab/words/{word_id}")
def update_word(word_id: int, payload: WordRequest, repo: vocab.WordRepository = Depends(get_word_repository)):
    payload = _validated_word(payload)
    if repo.get(word_id) is None:
        raise HTTPException(status_code=404, detail="Word not found")
    return repo.upsert(payload.term, payload.translation, payload.example, word_id=word_id)


@app.delete("/api/vocab/words/{word_id}")
def delete_word(word_id: int, repo: vocab.WordRepository = Depends(get_word_repository)):
    if not repo.delete(word_id):
        raise HTTPException(status_code=404, detail="Word not found")
    return {"success": True}


@app.post("/api/vocab/words/{word_id}/answer")
def answer_word(word_id: int, payload: AnswerRequest, repo: vocab.WordRepository = Depends(get_word_repository)):
    word = repo.mark_answer(word_id, payload.correct)
    if word is None:
        raise HTTPException(status_code=404, detail="Word not found")
    return word


@app.get("/api/vocab/due")
def due_words(limit: int = vocab.DUE_LIMIT, repo: vocab.WordRepository = Depends(get_word_repository)):
    return {"words": repo.due(limit=max(limit, 1))}


@app.get("/api/vocab/random")
def random_word(repo: vocab.WordRepository = Depends(get_word_repository)):
    word = repo.random()
    if word is None:
        raise HTTPException(status_code=404, detail="No words yet")
    return word


@app.get("/api/vocab/reminder")
def reminder(repo: vocab.WordRepository = Depends(get_word_repository)):
    return vocab.review_reminder(repo)


@app.post("/api/vocab/import")
def import_words(payload: CsvImportRequest, repo: vocab.WordRepository = Depends(get_word_repository)):
    return {"imported": vocab.import_csv(repo, payload.csv)}


@app.get("/api/vocab/export")
def export_words(repo: vocab.WordRepository = Depends(get_word_repository)):
    text, count = vocab.export_csv(repo)
    logger.info(f"Exported {count} words")
    return PlainTextResponse(
        text,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="words.csv"'},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
