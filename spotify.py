"""
Spotify accounts (OAuth) and Web API access over `requests`.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional
from urllib.parse import urlencode

import requests
from loguru import logger

ACCOUNTS_URL = "https://accounts.spotify.com"
API_URL = "https://api.spotify.com/v1"

SCOPE = (
    "streaming user-read-email user-read-private user-modify-playback-state "
    "user-read-playback-state playlist-read-private playlist-read-collaborative "
    "playlist-modify-public playlist-modify-private"
)

REQUEST_TIMEOUT = 10
TOKEN_EXPIRY_SKEW = 60


class SpotifyError(Exception):
    """Non-2xx answer from Spotify."""

    def __init__(self, status_code: int, message: str, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


@dataclass(frozen=True)
class TokenInfo:
    access_token: str
    token_type: str
    expires_at: float
    refresh_token: Optional[str] = None
    scope: Optional[str] = None

    @staticmethod
    def from_spotify_token_response(payload: dict[str, Any], *, now: Optional[float] = None) -> "TokenInfo":
        now_ts = float(time.time() if now is None else now)
        return TokenInfo(
            access_token=str(payload.get("access_token", "")),
            token_type=str(payload.get("token_type", "Bearer")),
            expires_at=now_ts + float(payload.get("expires_in", 0)),
            refresh_token=payload.get("refresh_token"),
            scope=payload.get("scope"),
        )

    @property
    def expires_in(self) -> int:
        return max(int(self.expires_at - time.time()), 0)

    def is_expired(self, *, skew_seconds: int = TOKEN_EXPIRY_SKEW, now: Optional[float] = None) -> bool:
        now_ts = time.time() if now is None else now
        return now_ts >= self.expires_at - skew_seconds

    def to_dict(self) -> dict[str, Any]:
        return {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "expires_at": self.expires_at,
            "refresh_token": self.refresh_token,
            "scope": self.scope,
        }


def _error_payload(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"message": response.text[:200] or "Could not parse error response"}


class SpotifyAuth:
    """Authorization-code, refresh-token and client-credentials grants."""

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        redirect_uri: str,
        session: Optional[requests.Session] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.session = session or requests.Session()
        self._app_token: Optional[TokenInfo] = None

    def authorize_url(self, state: str) -> str:
        params = {
            "response_type": "code",
            "client_id": self.client_id or "",
            "scope": SCOPE,
            "redirect_uri": self.redirect_uri,
            "state": state,
        }
        return f"{ACCOUNTS_URL}/authorize?{urlencode(params)}"

    def _token_request(self, data: dict[str, str]) -> TokenInfo:
        if not (self.client_id and self.client_secret):
            raise SpotifyError(500, "Spotify credentials not configured")

        response = self.session.post(
            f"{ACCOUNTS_URL}/api/token",
            data=data,
            auth=(self.client_id, self.client_secret),
            timeout=REQUEST_TIMEOUT,
        )
        payload = _error_payload(response)
        if not response.ok or not isinstance(payload, dict) or not payload.get("access_token"):
            logger.error(f"Token request ({data.get('grant_type')}) failed: {payload}")
            raise SpotifyError(400, "Failed to obtain token", payload)
        return TokenInfo.from_spotify_token_response(payload)

    def exchange_code(self, code: str) -> TokenInfo:
        return self._token_request(
            {"grant_type": "authorization_code", "code": code, "redirect_uri": self.redirect_uri}
        )

    def refresh(self, refresh_token: str) -> TokenInfo:
        token = self._token_request({"grant_type": "refresh_token", "refresh_token": refresh_token})
        if token.refresh_token is None:
            # Spotify may omit the refresh token when it is unchanged
            token = TokenInfo(
                access_token=token.access_token,
                token_type=token.token_type,
                expires_at=token.expires_at,
                refresh_token=refresh_token,
                scope=token.scope,
            )
        return token

    def client_credentials_token(self) -> str:
        """App token for public-data calls, cached until a minute before expiry."""
        if self._app_token is not None and not self._app_token.is_expired():
            return self._app_token.access_token
        self._app_token = self._token_request({"grant_type": "client_credentials"})
        logger.debug("Fetched new client-credentials token")
        return self._app_token.access_token


class SpotifyClient:
    """Thin wrapper over the Web API endpoints the game uses."""

    def __init__(self, access_token: str, session: Optional[requests.Session] = None):
        self.access_token = access_token
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, *, params: Optional[dict] = None, json: Any = None) -> Any:
        response = self.session.request(
            method,
            f"{API_URL}{path}",
            headers={"Authorization": f"Bearer {self.access_token}"},
            params=params,
            json=json,
            timeout=REQUEST_TIMEOUT,
        )
        if not response.ok:
            details = _error_payload(response)
            raise SpotifyError(response.status_code, f"Spotify API error: {response.status_code}", details)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def current_user(self) -> dict:
        return self._request("GET", "/me")

    def search_tracks(self, query: str, limit: int = 5) -> list[dict]:
        data = self._request("GET", "/search", params={"q": query, "type": "track", "limit": limit}) or {}
        return (data.get("tracks") or {}).get("items") or []

    def get_track(self, track_id: str) -> dict:
        return self._request("GET", f"/tracks/{track_id}")

    def create_playlist(self, user_id: str, name: str, description: str, public: bool = False) -> dict:
        return self._request(
            "POST",
            f"/users/{user_id}/playlists",
            json={"name": name, "description": description, "public": public},
        )

    def add_tracks(self, playlist_id: str, uris: list[str]) -> dict:
        return self._request("POST", f"/playlists/{playlist_id}/tracks", json={"uris": uris})

    def remove_tracks(self, playlist_id: str, uris: list[str]) -> dict:
        return self._request(
            "DELETE",
            f"/playlists/{playlist_id}/tracks",
            json={"tracks": [{"uri": uri} for uri in uris]},
        )

    def playlist_tracks(self, playlist_id: str, limit: int = 50) -> list[dict]:
        data = self._request("GET", f"/playlists/{playlist_id}/tracks", params={"limit": limit}) or {}
        return [item["track"] for item in data.get("items", []) if item.get("track")]

    def current_playback(self) -> Optional[dict]:
        return self._request("GET", "/me/player")

    def play(self, device_id: Optional[str], uris: list[str]) -> None:
        self._request("PUT", "/me/player/play", params={"device_id": device_id}, json={"uris": uris})

    def pause(self, device_id: Optional[str]) -> None:
        self._request("PUT", "/me/player/pause", params={"device_id": device_id})

    def resume(self, device_id: Optional[str]) -> None:
        self._request("PUT", "/me/player/play", params={"device_id": device_id})

    def seek(self, device_id: Optional[str], position_ms: int) -> None:
        self._request("PUT", "/me/player/seek", params={"device_id": device_id, "position_ms": position_ms})


def artist_names(track: dict) -> str:
    return ", ".join(a.get("name", "") for a in track.get("artists") or [])


def normalize_track(track: dict) -> dict:
    return {
        "id": track.get("id"),
        "title": track.get("name"),
        "artist": artist_names(track),
        "album": (track.get("album") or {}).get("name"),
        "uri": track.get("uri"),
        "preview_url": track.get("preview_url"),
    }


def app_account_token(
    access_token: Optional[str],
    refresh_token: Optional[str],
    auth: SpotifyAuth,
    client_factory: Callable[[str], SpotifyClient] = SpotifyClient,
) -> dict:
    """
    Token for the pre-authenticated app account.

    The stored access token is used as long as /me accepts it; otherwise the
    stored refresh token is exchanged for a new one. Raises SpotifyError when
    neither works.
    """
    if not access_token and not refresh_token:
        raise SpotifyError(
            500,
            "App Spotify credentials not configured. Please set SPOTIFY_APP_ACCESS_TOKEN "
            "and SPOTIFY_APP_REFRESH_TOKEN in environment variables.",
        )

    if access_token:
        try:
            client_factory(access_token).current_user()
            return {
                "access_token": access_token,
                "token_type": "Bearer",
                "expires_in": 3600,
                "auto_login": True,
                "message": "Using pre-authenticated app account",
            }
        except (SpotifyError, requests.RequestException):
            logger.info("Stored app token is invalid, attempting refresh...")

    if not refresh_token:
        raise SpotifyError(500, "No valid app credentials available")

    token = auth.refresh(refresh_token)
    logger.info("Successfully refreshed app access token")
    return {
        "access_token": token.access_token,
        "token_type": token.token_type,
        "expires_in": token.expires_in,
        "auto_login": True,
        "message": "Successfully authenticated with app account",
    }
