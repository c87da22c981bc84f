"""
Database Schemas

MongoDB collection schemas as Pydantic models. They validate documents on the
way in (the catalog import, vocabulary writes); reads return plain dicts.

- Song -> catalog collection (name from COLLECTION_NAME, default "songs")
- Word -> "word" collection
"""

from typing import Optional

from pydantic import BaseModel, Field


class Song(BaseModel):
    """
    Catalog song, created by the import command and never mutated at runtime
    Collection name: COLLECTION_NAME
    """
    title: str = Field(..., description="Song title")
    artist: str = Field(..., description="Performing artist")
    genre: Optional[str] = Field(None, description="Genre name")
    year: Optional[int] = Field(None, description="Release year")
    popularity: int = Field(0, description="Popularity score, higher is more popular")
    artistGender: Optional[str] = Field(None, description="Artist gender label used by filters")


class Word(BaseModel):
    """
    Vocabulary flashcard
    Collection name: "word"
    """
    id: int = Field(..., description="Auto-increment identifier")
    term: str = Field(..., min_length=1, description="Word or phrase being learned")
    translation: str = Field(..., min_length=1, description="Translation shown on the back of the card")
    example: Optional[str] = Field(None, description="Example sentence")
    correctCount: int = Field(0, ge=0)
    incorrectCount: int = Field(0, ge=0)
    streak: int = Field(0, ge=0, description="Consecutive correct answers")
    nextReviewAtEpochSec: int = Field(0, description="When the card is next due")
    createdAtEpochSec: int = Field(..., description="Creation time")
    updatedAtEpochSec: int = Field(..., description="Last modification time")
