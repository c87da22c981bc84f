"""
MongoDB access helpers.

`db` is None when no connection string is configured; callers check it
before touching collections (see the /test endpoint).
"""

from typing import Any, Optional

from loguru import logger
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from config import get_settings

_settings = get_settings()

client: Optional[MongoClient] = None
db: Optional[Database] = None

if _settings.mongodb_uri:
    client = MongoClient(_settings.mongodb_uri, serverSelectionTimeoutMS=5000)
    db = client[_settings.database_name]
    logger.info(f"MongoDB client created for database '{_settings.database_name}'")
else:
    logger.warning("MONGODB_URI is not set; database features are disabled")


def get_collection(name: str) -> Collection:
    if db is None:
        raise RuntimeError("MONGODB_URI environment variable is required. Please set it in your .env file.")
    return db[name]


def serialize_document(doc: Optional[dict]) -> Optional[dict]:
    """Make a Mongo document JSON-safe (ObjectId -> str)."""
    if doc is None:
        return None
    out: dict[str, Any] = dict(doc)
    if "_id" in out:
        out["_id"] = str(out["_id"])
    return out
