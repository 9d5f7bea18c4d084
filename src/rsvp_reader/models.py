from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PlaybackState(str, Enum):
    """Lifecycle of a playback engine."""

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass(frozen=True, slots=True)
class FixationSplit:
    """A token cut around its fixation character."""

    prefix: str
    focal: str | None
    suffix: str

    @property
    def leading_count(self) -> int:
        """Number of characters before the focal point (for alignment)."""
        return len(self.prefix)

    @property
    def total_count(self) -> int:
        return len(self.prefix) + len(self.focal or "") + len(self.suffix)

    def joined(self) -> str:
        return f"{self.prefix}{self.focal or ''}{self.suffix}"


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """Payload handed to the progress recorder when a session ends."""

    word_index: int
    elapsed_seconds: float
    words_advanced: int


@dataclass(slots=True)
class SessionStats:
    """Accumulator for a single play -> pause/stop span."""

    started_at: float | None = None
    words_advanced: int = 0

    @property
    def active(self) -> bool:
        return self.started_at is not None

    def start(self, now: float) -> None:
        self.started_at = now
        self.words_advanced = 0

    def elapsed(self, now: float) -> float:
        if self.started_at is None:
            return 0.0
        return max(0.0, now - self.started_at)

    def reset(self) -> None:
        self.started_at = None
        self.words_advanced = 0


@dataclass(frozen=True, slots=True)
class EngineSnapshot:
    """Read-only view of the engine published to observers."""

    position: int
    current_token: str
    state: PlaybackState
    words_per_minute: int
    total_words: int
    pause_on_punctuation: bool = True

    @property
    def progress(self) -> float:
        if self.total_words <= 0:
            return 0.0
        return self.position / self.total_words


@dataclass(slots=True)
class ReadingProgress:
    """Aggregate reading statistics built from progress events."""

    current_word_index: int = 0
    total_reading_time: float = 0.0
    sessions_count: int = 0
    words_read: int = 0
    last_updated: datetime = field(default_factory=_utcnow)

    @property
    def average_wpm(self) -> int:
        """Cumulative words read divided by cumulative minutes."""
        if self.total_reading_time <= 0:
            return 0
        return int(self.words_read / (self.total_reading_time / 60.0))

    def update_progress(
        self, word_index: int, session_time: float, words_in_session: int
    ) -> None:
        self.current_word_index = word_index
        self.total_reading_time += session_time
        self.words_read += words_in_session
        self.last_updated = _utcnow()

    def start_new_session(self) -> None:
        self.sessions_count += 1
        self.last_updated = _utcnow()

    def percent_complete(self, total_words: int) -> float:
        if total_words <= 0:
            return 0.0
        return min(1.0, self.current_word_index / total_words)


@dataclass(slots=True)
class Bookmark:
    """A saved position inside a token sequence."""

    word_index: int
    note: str | None = None
    highlighted_text: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
