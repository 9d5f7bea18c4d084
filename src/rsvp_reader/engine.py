from __future__ import annotations

import logging
import math
import threading
import time
from typing import Callable, Iterable, List, Sequence

from .config import ReaderConfig
from .fixation import split_fixation
from .models import (
    Bookmark,
    EngineSnapshot,
    FixationSplit,
    PlaybackState,
    ProgressEvent,
    SessionStats,
)
from .progress import NoOpProgressRecorder, ProgressRecorder
from .scheduling import LoopScheduler, Scheduler, TimerHandle
from .sentences import SentenceBoundaryDetector, ends_sentence
from .textutils import estimated_reading_time
from .tokenization import process_text

logger = logging.getLogger(__name__)

Observer = Callable[[EngineSnapshot], None]

CLAUSE_TERMINATORS = (",", ";", ":")
SENTENCE_PAUSE_MULTIPLIER = 2.0
CLAUSE_PAUSE_MULTIPLIER = 1.5
LONG_WORD_MULTIPLIER = 1.2
LONG_WORD_LENGTH = 10


class PlaybackEngine:
    """
    Timed presentation of a token sequence, one token at a time.

    At most one advance is pending while playing: every state-changing call
    cancels the outstanding timer before it mutates anything. Mutators and
    timer callbacks all hold the scheduler's lock, and a timer re-checks its
    generation under that lock, so a user action never races a late timer.
    Hold ``engine.lock`` to make several calls atomic from another thread.
    """

    def __init__(
        self,
        config: ReaderConfig | None = None,
        *,
        scheduler: Scheduler | None = None,
        clock: Callable[[], float] | None = None,
        recorder: ProgressRecorder | None = None,
    ) -> None:
        self._config = config or ReaderConfig()
        if scheduler is None:
            scheduler = LoopScheduler(clock=clock or time.monotonic)
        if clock is None:
            clock = (
                scheduler.clock
                if isinstance(scheduler, LoopScheduler)
                else time.monotonic
            )
        self._scheduler = scheduler
        self._lock = scheduler.lock
        self._clock = clock
        self.recorder: ProgressRecorder = recorder or NoOpProgressRecorder()

        self._tokens: tuple[str, ...] = ()
        self._sentences = SentenceBoundaryDetector(self._tokens)
        self._position = 0
        self._state = PlaybackState.STOPPED
        self._wpm = self._config.clamp_speed(self._config.words_per_minute)
        self._pause_on_punctuation = self._config.pause_on_punctuation
        self._session = SessionStats()
        self._timer: TimerHandle | None = None
        self._generation = 0
        self._observers: List[Observer] = []

    # Read accessors -----------------------------------------------------

    @property
    def config(self) -> ReaderConfig:
        return self._config

    @property
    def lock(self) -> threading.RLock:
        """Re-entrant lock shared with the scheduler's timer callbacks."""
        return self._lock

    @property
    def tokens(self) -> Sequence[str]:
        return self._tokens

    @property
    def position(self) -> int:
        return self._position

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def words_per_minute(self) -> int:
        return self._wpm

    @property
    def pause_on_punctuation(self) -> bool:
        return self._pause_on_punctuation

    @property
    def total_words(self) -> int:
        return len(self._tokens)

    @property
    def has_content(self) -> bool:
        return bool(self._tokens)

    @property
    def is_at_end(self) -> bool:
        return self._position >= len(self._tokens)

    @property
    def is_at_start(self) -> bool:
        return self._position == 0

    @property
    def progress(self) -> float:
        if not self._tokens:
            return 0.0
        return self._position / len(self._tokens)

    @property
    def current_token(self) -> str:
        if self.is_at_end:
            return ""
        return self._tokens[self._position]

    @property
    def current_split(self) -> FixationSplit:
        return split_fixation(self.current_token)

    @property
    def session_words_advanced(self) -> int:
        return self._session.words_advanced

    def snapshot(self) -> EngineSnapshot:
        with self._lock:
            return EngineSnapshot(
                position=self._position,
                current_token=self.current_token,
                state=self._state,
                words_per_minute=self._wpm,
                total_words=len(self._tokens),
                pause_on_punctuation=self._pause_on_punctuation,
            )

    def current_sentence(self) -> list[str]:
        """Tokens of the sentence around the current position."""
        with self._lock:
            return self._sentences.sentence_tokens(self._position)

    def remaining_seconds(self) -> float:
        remaining = max(0, len(self._tokens) - self._position)
        return estimated_reading_time(remaining, self._wpm)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; the returned callable removes it again."""
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    # Loading --------------------------------------------------------------

    def load(self, tokens: Iterable[str]) -> None:
        """Replace the sequence, rewind to 0 and stop without emitting progress."""
        with self._lock:
            self._cancel_timer()
            self._tokens = tuple(
                token for token in tokens if token and not token.isspace()
            )
            self._sentences = SentenceBoundaryDetector(self._tokens)
            self._position = 0
            self._state = PlaybackState.STOPPED
            self._session.reset()
            logger.debug("Loaded %d tokens", len(self._tokens))
            self._notify()

    def load_text(self, raw_text: str) -> None:
        self.load(process_text(raw_text))

    # Transport ------------------------------------------------------------

    def play(self) -> None:
        with self._lock:
            if not self._tokens or self.is_at_end or self.is_playing:
                return
            self._state = PlaybackState.PLAYING
            self._session.start(self._clock())
            self._schedule_current()
            self._notify()

    def pause(self) -> None:
        with self._lock:
            if not self.is_playing:
                return
            self._cancel_timer()
            self._state = PlaybackState.PAUSED
            self._flush_session()
            self._notify()

    def toggle(self) -> None:
        with self._lock:
            if self.is_playing:
                self.pause()
            else:
                self.play()

    def stop(self) -> None:
        """Halt playback, flushing an active session, and keep the position."""
        with self._lock:
            self._cancel_timer()
            self._state = PlaybackState.STOPPED
            self._flush_session()
            self._notify()

    # Navigation -----------------------------------------------------------

    def seek(self, index: int) -> None:
        with self._lock:
            if not self._tokens:
                self._position = 0
            else:
                self._position = min(max(int(index), 0), len(self._tokens) - 1)
            logger.debug("Seek to %d", self._position)
            if self.is_playing:
                self._cancel_timer()
                self._schedule_current()
            self._notify()

    def seek_to_fraction(self, fraction: float) -> None:
        if math.isnan(fraction):
            fraction = 0.0
        fraction = min(max(fraction, 0.0), 1.0)
        with self._lock:
            self.seek(math.floor(fraction * len(self._tokens)))

    def skip_forward(self, count: int | None = None) -> None:
        step = self._config.skip_words if count is None else count
        with self._lock:
            self.seek(self._position + step)

    def skip_backward(self, count: int | None = None) -> None:
        step = self._config.skip_words if count is None else count
        with self._lock:
            self.seek(self._position - step)

    def next_sentence(self) -> None:
        with self._lock:
            if not self._tokens:
                return
            self.seek(self._sentences.next_sentence_start(self._position))

    def previous_sentence(self) -> None:
        with self._lock:
            if not self._tokens:
                return
            self.seek(self._sentences.previous_sentence_start(self._position))

    def restart(self) -> None:
        self.seek(0)

    def bookmark(self, note: str | None = None) -> Bookmark:
        """Capture the current position with its sentence as context."""
        with self._lock:
            sentence = " ".join(self.current_sentence())
            return Bookmark(
                word_index=self._position,
                note=note,
                highlighted_text=sentence or None,
            )

    # Timing -----------------------------------------------------------------

    def set_speed(self, wpm: int) -> None:
        """Clamp and store the speed; the pending delay keeps its duration."""
        with self._lock:
            self._wpm = self._config.clamp_speed(wpm)
            logger.debug("Speed set to %d wpm", self._wpm)
            self._notify()

    def set_pause_on_punctuation(self, enabled: bool) -> None:
        with self._lock:
            self._pause_on_punctuation = bool(enabled)
            self._notify()

    def interval_for(self, token: str) -> float:
        """Seconds the token stays on screen at the current speed."""
        base = 60.0 / self._wpm
        if not self._pause_on_punctuation:
            return base
        if ends_sentence(token):
            return base * SENTENCE_PAUSE_MULTIPLIER
        if token.endswith(CLAUSE_TERMINATORS):
            return base * CLAUSE_PAUSE_MULTIPLIER
        if len(token) > LONG_WORD_LENGTH:
            return base * LONG_WORD_MULTIPLIER
        return base

    def advance(self) -> None:
        """Move to the next token; reaching the end stops and flushes the session."""
        with self._lock:
            if self.is_at_end:
                return
            self._cancel_timer()
            self._position += 1
            if self._session.active:
                self._session.words_advanced += 1
            if self.is_at_end:
                self._state = PlaybackState.STOPPED
                self._flush_session()
            elif self.is_playing:
                self._schedule_current()
            self._notify()

    # Internals ------------------------------------------------------------

    def _schedule_current(self) -> None:
        delay = self.interval_for(self.current_token)
        generation = self._generation
        self._timer = self._scheduler.call_later(
            delay, lambda: self._on_timer(generation)
        )

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or not self.is_playing:
                logger.debug("Ignoring stale timer (generation %d)", generation)
                return
            self.advance()

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _flush_session(self) -> None:
        if not self._session.active:
            return
        event = ProgressEvent(
            word_index=self._position,
            elapsed_seconds=self._session.elapsed(self._clock()),
            words_advanced=self._session.words_advanced,
        )
        self._session.reset()
        logger.info(
            "Session ended at index=%d words=%d elapsed=%.2fs",
            event.word_index,
            event.words_advanced,
            event.elapsed_seconds,
        )
        try:
            self.recorder.record(event)
        except Exception:
            logger.exception("Progress recorder failed for index=%d", event.word_index)

    def _notify(self) -> None:
        if not self._observers:
            return
        snapshot = self.snapshot()
        for observer in list(self._observers):
            observer(snapshot)
