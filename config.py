import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_NAME = "musicApp"
DEFAULT_COLLECTION_NAME = "songs"
DEFAULT_REDIRECT_URI = "http://127.0.0.1:8000/auth/callback"
DEFAULT_FRONTEND_URL = "http://localhost:3000"
DEFAULT_SESSION_SECRET = "dev-session-secret-change"


@dataclass(frozen=True)
class Settings:
    spotify_client_id: Optional[str]
    spotify_client_secret: Optional[str]
    mongodb_uri: Optional[str]
    database_name: str
    collection_name: str
    session_secret: str
    redirect_uri: str
    frontend_url: str
    app_access_token: Optional[str]
    app_refresh_token: Optional[str]
    log_level: str = "INFO"
    port: int = 8000

    @property
    def spotify_configured(self) -> bool:
        return bool(self.spotify_client_id and self.spotify_client_secret)


def get_settings() -> Settings:
    """Read settings from the environment (and .env, if present)."""
    return Settings(
        spotify_client_id=os.getenv("SPOTIFY_CLIENT_ID"),
        spotify_client_secret=os.getenv("SPOTIFY_CLIENT_SECRET"),
        mongodb_uri=os.getenv("MONGODB_URI") or os.getenv("DATABASE_URL"),
        database_name=os.getenv("DATABASE_NAME", DEFAULT_DATABASE_NAME),
        collection_name=os.getenv("COLLECTION_NAME", DEFAULT_COLLECTION_NAME),
        session_secret=os.getenv("SESSION_SECRET", DEFAULT_SESSION_SECRET),
        redirect_uri=os.getenv("REDIRECT_URI", DEFAULT_REDIRECT_URI),
        frontend_url=os.getenv("FRONTEND_URL", DEFAULT_FRONTEND_URL).rstrip("/"),
        app_access_token=os.getenv("SPOTIFY_APP_ACCESS_TOKEN"),
        app_refresh_token=os.getenv("SPOTIFY_APP_REFRESH_TOKEN"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        port=int(os.getenv("PORT", 8000)),
    )
