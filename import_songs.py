"""
Load a JSON song list into the catalog collection.

    python import_songs.py data/songs.json
"""

import argparse
import json
import sys
from pathlib import Path

from loguru import logger
from pydantic import ValidationError
from pymongo import ASCENDING, DESCENDING, TEXT
from pymongo.collection import Collection

from config import get_settings
from logging_config import setup_logging
from schemas import Song


def load_songs(path: Path) -> list[dict]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of songs")
    songs = []
    for index, raw in enumerate(data):
        try:
            songs.append(Song(**raw).model_dump())
        except ValidationError as e:
            logger.warning(f"Skipping song #{index}: {e.errors()[0]['msg']}")
    return songs


def create_indexes(collection: Collection) -> None:
    collection.create_index([("title", ASCENDING)])
    collection.create_index([("artist", ASCENDING)])
    collection.create_index([("genre", ASCENDING)])
    collection.create_index([("year", ASCENDING)])
    collection.create_index([("popularity", DESCENDING)])
    collection.create_index([("title", TEXT), ("artist", TEXT), ("genre", TEXT)])


def import_songs(collection: Collection, songs: list[dict], with_indexes: bool = True) -> dict:
    """Replace the collection's contents with `songs` and report statistics."""
    logger.info("Clearing existing data...")
    collection.delete_many({})

    inserted = 0
    if songs:
        inserted = len(collection.insert_many(songs).inserted_ids)
    logger.info(f"Successfully imported {inserted} songs")

    if with_indexes:
        create_indexes(collection)
        logger.info("Indexes created successfully")

    stats = {
        "total": collection.count_documents({}),
        "genres": len(collection.distinct("genre")),
        "artists": len(collection.distinct("artist")),
    }
    logger.info(f"Total songs: {stats['total']}, unique genres: {stats['genres']}, unique artists: {stats['artists']}")
    for i, song in enumerate(collection.find({}).limit(5), start=1):
        logger.info(f"{i}. {song['title']} by {song['artist']} ({song.get('year')}) - {song.get('genre')}")
    return stats


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Import songs into the MongoDB catalog")
    parser.add_argument("path", type=Path, help="JSON file with an array of songs")
    parser.add_argument("--no-indexes", action="store_true", help="Skip index creation")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level)

    from database import get_collection

    try:
        songs = load_songs(args.path)
        logger.info(f"Found {len(songs)} songs to import")
        import_songs(get_collection(settings.collection_name), songs, with_indexes=not args.no_indexes)
    except Exception as e:
        logger.exception(f"Import failed: {e}")
        return 1
    logger.info("Import completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
