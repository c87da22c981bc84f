"""
Track-position estimate between polls of the player's state.

The host player reports its position only occasionally. In between, the
position is extrapolated from the last known (position, timestamp) pair and
clamped to the track length. Times are milliseconds on a monotonic clock.
"""

import time
from typing import Optional


def now_ms() -> float:
    return time.monotonic() * 1000.0


class PlaybackEstimator:
    def __init__(self, duration_ms: int = 0):
        self.duration_ms = max(int(duration_ms), 0)
        self.known_position_ms = 0.0
        self.timestamp_ms = 0.0
        self.is_playing = False

    def _clamp(self, position: float) -> float:
        if position < 0:
            return 0.0
        if self.duration_ms and position > self.duration_ms:
            return float(self.duration_ms)
        return position

    def _anchor(self, position_ms: float, now: Optional[float]) -> None:
        self.known_position_ms = self._clamp(float(position_ms))
        self.timestamp_ms = now_ms() if now is None else float(now)

    def start(self, position_ms: int = 0, duration_ms: Optional[int] = None, now: Optional[float] = None) -> None:
        if duration_ms is not None:
            self.duration_ms = max(int(duration_ms), 0)
        self.is_playing = True
        self._anchor(position_ms, now)

    def pause(self, now: Optional[float] = None) -> None:
        if not self.is_playing:
            return
        self._anchor(self.position(now), now)
        self.is_playing = False

    def resume(self, now: Optional[float] = None) -> None:
        if self.is_playing:
            return
        self._anchor(self.known_position_ms, now)
        self.is_playing = True

    def seek(self, position_ms: int, now: Optional[float] = None) -> None:
        self._anchor(position_ms, now)

    def sync(
        self,
        position_ms: int,
        is_playing: bool,
        duration_ms: Optional[int] = None,
        now: Optional[float] = None,
    ) -> None:
        """Adopt the player's authoritative state."""
        if duration_ms:
            self.duration_ms = int(duration_ms)
        self.is_playing = bool(is_playing)
        self._anchor(position_ms, now)

    def position(self, now: Optional[float] = None) -> float:
        if not self.is_playing:
            return self.known_position_ms
        current = now_ms() if now is None else float(now)
        return self._clamp(self.known_position_ms + (current - self.timestamp_ms))

    def expired(self, limit_ms: float, now: Optional[float] = None) -> bool:
        """Whether playback reached `limit_ms` (e.g. a round's listening window)."""
        return self.position(now) >= limit_ms

    def sync_from_player(self, state: Optional[dict], now: Optional[float] = None) -> None:
        """Adopt a Web API playback-state payload; None means nothing is playing."""
        if not state:
            self.is_playing = False
            self._anchor(0, now)
            return
        item = state.get("item") or {}
        self.sync(
            position_ms=state.get("progress_ms") or 0,
            is_playing=bool(state.get("is_playing")),
            duration_ms=item.get("duration_ms"),
            now=now,
        )
