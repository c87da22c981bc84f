"""
Song catalog queries over the MongoDB songs collection.
"""

import re
from typing import Any, Optional

from loguru import logger
from pymongo import DESCENDING
from pymongo.collection import Collection

from database import serialize_document


def _icontains(value: str) -> dict:
    return {"$regex": re.escape(str(value).strip()), "$options": "i"}


def _as_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class SongCatalog:
    def __init__(self, collection: Collection):
        self.collection = collection

    def search_songs(self, query: str, limit: int = 50) -> list[dict]:
        """Match the query against title, artist or genre, most popular first."""
        pattern = _icontains(query)
        search_query = {"$or": [{"title": pattern}, {"artist": pattern}, {"genre": pattern}]}
        cursor = self.collection.find(search_query).sort("popularity", DESCENDING).limit(limit)
        return [serialize_document(doc) for doc in cursor]

    def advanced_search(self, filters: Optional[dict] = None, limit: int = 50) -> list[dict]:
        filters = filters or {}
        query: dict[str, Any] = {}

        for field in ("title", "artist", "genre"):
            if filters.get(field):
                query[field] = _icontains(filters[field])

        year = _as_int(filters.get("year"))
        if year is not None:
            query["year"] = year

        year_range = filters.get("yearRange")
        if year_range:
            start, end = _as_int(year_range.get("start")), _as_int(year_range.get("end"))
            bounds = {}
            if start is not None:
                bounds["$gte"] = start
            if end is not None:
                bounds["$lte"] = end
            if bounds:
                query["year"] = bounds

        min_popularity = _as_int(filters.get("minPopularity"))
        if min_popularity is not None:
            query["popularity"] = {"$gte": min_popularity}

        cursor = self.collection.find(query).sort("popularity", DESCENDING).limit(limit)
        return [serialize_document(doc) for doc in cursor]

    def random_song_query(self, filters: Optional[dict] = None) -> dict:
        filters = filters or {}
        query: dict[str, Any] = {}

        if filters.get("genre"):
            query["genre"] = _icontains(filters["genre"])

        year_from, year_to = _as_int(filters.get("yearFrom")), _as_int(filters.get("yearTo"))
        if year_from is not None or year_to is not None:
            query["year"] = {}
            if year_from is not None:
                query["year"]["$gte"] = year_from
            if year_to is not None:
                query["year"]["$lte"] = year_to

        if filters.get("artistGender"):
            query["artistGender"] = filters["artistGender"]

        min_popularity = _as_int(filters.get("minPopularity"))
        if min_popularity is not None:
            query["popularity"] = {"$gte": min_popularity}

        return query

    def get_random_song(self, filters: Optional[dict] = None) -> Optional[dict]:
        """Return one random song matching the filters, or None if nothing matches."""
        query = self.random_song_query(filters)

        if self.collection.count_documents(query) == 0:
            logger.debug(f"No songs match {query}")
            return None

        sample = list(self.collection.aggregate([{"$match": query}, {"$sample": {"size": 1}}]))
        return serialize_document(sample[0]) if sample else None

    def get_all_genres(self) -> list[str]:
        return sorted(g for g in self.collection.distinct("genre") if g is not None)

    def get_all_artists(self) -> list[str]:
        return sorted(a for a in self.collection.distinct("artist") if a is not None)
