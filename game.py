"""
Guessing-game rules: modes, scoring and round selection.
"""

import random
from dataclasses import dataclass, field
from typing import Iterable, Optional

MODE_DURATIONS_MS = {
    "normal": 30000,
    "timeAttack": 15000,
    "endless": None,
    "progressive": 100,
}

PROGRESSIVE_STEPS_MS = [100, 500, 1000, 2000, 4000, 8000, 16000]

SUGGESTION_MIN_CHARS = 2
SUGGESTION_LIMIT = 8


def is_correct_guess(guess: Optional[str], title: Optional[str]) -> bool:
    """Trimmed, case-insensitive title comparison. Blank guesses never match."""
    if not guess or not guess.strip() or not title:
        return False
    return guess.strip().lower() == title.strip().lower()


def rank_suggestions(text: Optional[str], titles: Iterable[str], limit: int = SUGGESTION_LIMIT) -> list[str]:
    """
    Titles containing `text`, de-duplicated, ranked exact match first, then
    titles starting with it, then the rest alphabetically. Fewer than two
    characters of input gives no suggestions.
    """
    needle = (text or "").strip().lower()
    if len(needle) < SUGGESTION_MIN_CHARS:
        return []

    matches = []
    seen = set()
    for title in titles:
        if not title or title in seen or needle not in title.lower():
            continue
        seen.add(title)
        matches.append(title)

    def rank(title: str) -> tuple:
        lowered = title.lower()
        if lowered == needle:
            tier = 0
        elif lowered.startswith(needle):
            tier = 1
        else:
            tier = 2
        return tier, lowered

    return sorted(matches, key=rank)[:limit]


def mode_duration(mode: str, track_duration_ms: int = 0, step_index: int = 0) -> int:
    """Listening window in milliseconds for a round."""
    if mode not in MODE_DURATIONS_MS:
        raise ValueError(f"Unknown game mode: {mode}")
    if mode == "endless":
        return track_duration_ms
    if mode == "progressive":
        return PROGRESSIVE_STEPS_MS[min(step_index, len(PROGRESSIVE_STEPS_MS) - 1)]
    return MODE_DURATIONS_MS[mode]


@dataclass
class GuessResult:
    correct: bool
    actual_title: str

    def to_dict(self) -> dict:
        return {"correct": self.correct, "actualTitle": self.actual_title}


@dataclass
class GameSession:
    mode: str = "normal"
    score: int = 0
    total_guesses: int = 0
    streak: int = 0
    best_streak: int = 0
    high_score: int = 0
    rounds_played: int = 0
    step_index: int = 0
    current_title: Optional[str] = None
    current_result: Optional[GuessResult] = None
    played: set = field(default_factory=set)
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def __post_init__(self):
        if self.mode not in MODE_DURATIONS_MS:
            raise ValueError(f"Unknown game mode: {self.mode}")

    @property
    def accuracy(self) -> int:
        return round(self.score / self.total_guesses * 100) if self.total_guesses else 0

    def next_track(self, track_uris: list[str]) -> Optional[str]:
        """
        Random URI not yet played this session. Once every URI has been
        played the session starts over with the whole list.
        """
        if not track_uris:
            return None
        unplayed = [uri for uri in track_uris if uri not in self.played]
        if not unplayed:
            self.played.clear()
            unplayed = list(track_uris)
        uri = self.rng.choice(unplayed)
        self.played.add(uri)
        return uri

    def start_round(self, title: str) -> None:
        self.current_title = title
        self.current_result = None
        self.step_index = 0
        self.rounds_played += 1

    def reveal(self) -> int:
        """Advance the progressive listening window; returns the new window."""
        if self.step_index < len(PROGRESSIVE_STEPS_MS) - 1:
            self.step_index += 1
        return PROGRESSIVE_STEPS_MS[self.step_index]

    def window_ms(self, track_duration_ms: int = 0) -> int:
        return mode_duration(self.mode, track_duration_ms, self.step_index)

    def _record(self, correct: bool) -> GuessResult:
        self.total_guesses += 1
        if correct:
            self.score += 1
            self.high_score = max(self.high_score, self.score)
            self.streak += 1
            self.best_streak = max(self.best_streak, self.streak)
        else:
            self.streak = 0
        self.current_result = GuessResult(correct, self.current_title or "")
        return self.current_result

    def submit_guess(self, guess: str) -> Optional[GuessResult]:
        """Score a guess for the current round. Blank input is ignored."""
        if self.current_title is None or not guess or not guess.strip():
            return None
        return self._record(is_correct_guess(guess, self.current_title))

    def time_up(self) -> Optional[GuessResult]:
        """The listening window ran out; an unanswered round counts as wrong."""
        if self.current_title is None or self.current_result is not None:
            return None
        return self._record(False)

    def skip(self) -> None:
        """Give up on the current song: the streak is lost but no guess is counted."""
        self.streak = 0
        self.current_title = None
        self.current_result = None
        self.step_index = 0

    def reset(self) -> None:
        """Start a fresh game; high score and best streak survive."""
        self.score = 0
        self.total_guesses = 0
        self.streak = 0
        self.rounds_played = 0
        self.step_index = 0
        self.current_title = None
        self.current_result = None
        self.played.clear()
