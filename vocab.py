"""
Vocabulary flashcards with a fixed-interval review schedule.

A correct answer schedules the next review 1, 1, 3 and then 7 days out,
indexed by the run of consecutive correct answers before it. A wrong answer
resets the run and schedules the card for tomorrow.
"""

import csv
import io
import time
from typing import Optional

from loguru import logger
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection

from schemas import Word

INTERVAL_DAYS = [1, 1, 3, 7]
SECONDS_PER_DAY = 24 * 60 * 60
DUE_LIMIT = 20

CSV_HEADER = ["term", "translation", "example"]


def next_review_days(streak_before: int, correct: bool) -> int:
    if not correct:
        return INTERVAL_DAYS[0]
    return INTERVAL_DAYS[min(max(streak_before, 0), len(INTERVAL_DAYS) - 1)]


def _now(now: Optional[int]) -> int:
    return int(time.time()) if now is None else int(now)


def _public(doc: Optional[dict]) -> Optional[dict]:
    if doc is None:
        return None
    doc = dict(doc)
    doc.pop("_id", None)
    return doc


class WordRepository:
    def __init__(self, collection: Collection, counters: Collection):
        self.collection = collection
        self.counters = counters

    def _next_id(self) -> int:
        counter = self.counters.find_one_and_update(
            {"_id": self.collection.name},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(counter["seq"])

    def _claim_id(self, word_id: int) -> None:
        """Keep the sequence ahead of an explicitly chosen id."""
        self.counters.update_one({"_id": self.collection.name}, {"$max": {"seq": word_id}}, upsert=True)

    def list_all(self) -> list[dict]:
        cursor = self.collection.find({}).sort("updatedAtEpochSec", DESCENDING)
        return [_public(doc) for doc in cursor]

    def get(self, word_id: int) -> Optional[dict]:
        return _public(self.collection.find_one({"id": word_id}))

    def upsert(
        self,
        term: str,
        translation: str,
        example: Optional[str] = None,
        word_id: Optional[int] = None,
        now: Optional[int] = None,
    ) -> dict:
        """
        Create a word, or replace the text of an existing one.

        Editing keeps the review history; saving under an unknown id creates
        a new word with that id.
        """
        ts = _now(now)
        example = (example or "").strip() or None
        existing = self.get(word_id) if word_id else None

        if existing is None:
            if word_id:
                self._claim_id(word_id)
            word = Word(
                id=word_id or self._next_id(),
                term=term.strip(),
                translation=translation.strip(),
                example=example,
                createdAtEpochSec=ts,
                updatedAtEpochSec=ts,
            )
        else:
            word = Word(
                **{
                    **existing,
                    "term": term.strip(),
                    "translation": translation.strip(),
                    "example": example,
                    "updatedAtEpochSec": ts,
                }
            )

        self.collection.replace_one({"id": word.id}, word.model_dump(), upsert=True)
        return word.model_dump()

    def delete(self, word_id: int) -> bool:
        return self.collection.delete_one({"id": word_id}).deleted_count > 0

    def mark_answer(self, word_id: int, correct: bool, now: Optional[int] = None) -> Optional[dict]:
        ts = _now(now)
        update: dict = {"$inc": {}, "$set": {"updatedAtEpochSec": ts}}
        if correct:
            update["$inc"].update(correctCount=1, streak=1)
        else:
            update["$inc"]["incorrectCount"] = 1
            update["$set"]["streak"] = 0
        word = self.collection.find_one_and_update({"id": word_id}, update, return_document=ReturnDocument.AFTER)
        if word is None:
            return None

        # streak already includes this answer
        days = next_review_days(word["streak"] - 1, correct)
        word["nextReviewAtEpochSec"] = ts + days * SECONDS_PER_DAY
        self.collection.update_one({"id": word_id}, {"$set": {"nextReviewAtEpochSec": word["nextReviewAtEpochSec"]}})
        logger.debug(f"Word {word_id} answered {'correctly' if correct else 'incorrectly'}, next review in {days}d")
        return _public(word)

    def due(self, limit: int = DUE_LIMIT, now: Optional[int] = None) -> list[dict]:
        cursor = (
            self.collection.find({"nextReviewAtEpochSec": {"$lte": _now(now)}})
            .sort("nextReviewAtEpochSec", ASCENDING)
            .limit(limit)
        )
        return [_public(doc) for doc in cursor]

    def random(self) -> Optional[dict]:
        sample = list(self.collection.aggregate([{"$sample": {"size": 1}}]))
        return _public(sample[0]) if sample else None


def import_csv(repo: WordRepository, text: str, now: Optional[int] = None) -> int:
    """Load term,translation[,example] rows. Returns the number of words saved."""
    count = 0
    for index, row in enumerate(csv.reader(io.StringIO(text))):
        term = row[0].strip() if len(row) > 0 else ""
        translation = row[1].strip() if len(row) > 1 else ""
        example = row[2].strip() if len(row) > 2 else None
        if index == 0 and [term.lower(), translation.lower()] == CSV_HEADER[:2]:
            continue
        if term and translation:
            repo.upsert(term, translation, example, now=now)
            count += 1
    logger.info(f"Imported {count} words from CSV")
    return count


def export_csv(repo: WordRepository) -> tuple[str, int]:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    words = repo.list_all()
    for word in words:
        writer.writerow([word["term"], word["translation"], word.get("example") or ""])
    return out.getvalue(), len(words)


def review_reminder(repo: WordRepository, now: Optional[int] = None) -> dict:
    """What the periodic reminder should show, if anything."""
    due = repo.due(limit=1, now=now)
    if not due:
        return {"due": False}
    return {"due": True, "title": "Vocabulary review", "text": "You have words due for review"}
