from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable

from .models import ProgressEvent, ReadingProgress

logger = logging.getLogger(__name__)


class ProgressRecorder(ABC):
    """Consumer of session progress emitted on pause, stop and end of text."""

    @abstractmethod
    def record(self, event: ProgressEvent) -> None:
        """Persist or aggregate a finished session."""
        raise NotImplementedError


class NoOpProgressRecorder(ProgressRecorder):
    """Discards every event."""

    def record(self, event: ProgressEvent) -> None:
        return None


class CallableProgressRecorder(ProgressRecorder):
    """Adapt an arbitrary callable into the ProgressRecorder interface."""

    def __init__(self, func: Callable[[ProgressEvent], None]) -> None:
        self._func = func

    def record(self, event: ProgressEvent) -> None:
        self._func(event)


class ReadingProgressRecorder(ProgressRecorder):
    """Fold events into a ReadingProgress aggregate, one session per event.

    ``events`` keeps the recorded events for reporting. Pass ``max_events`` to
    retain only the most recent ones in long-lived embeddings (``0`` keeps
    none); the aggregate always covers every session.
    """

    def __init__(
        self,
        progress: ReadingProgress | None = None,
        *,
        max_events: int | None = None,
    ) -> None:
        self.progress = progress if progress is not None else ReadingProgress()
        self.events: list[ProgressEvent] = []
        self._max_events = max_events

    def record(self, event: ProgressEvent) -> None:
        self.progress.start_new_session()
        self.progress.update_progress(
            event.word_index, event.elapsed_seconds, event.words_advanced
        )
        self.events.append(event)
        if self._max_events is not None and len(self.events) > self._max_events:
            del self.events[: len(self.events) - max(0, self._max_events)]
        logger.debug(
            "Recorded session index=%s words=%s elapsed=%.2fs avg_wpm=%s",
            event.word_index,
            event.words_advanced,
            event.elapsed_seconds,
            self.progress.average_wpm,
        )
