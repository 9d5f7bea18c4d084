from __future__ import annotations

from rsvp_reader.config import ReaderConfig
from rsvp_reader.engine import PlaybackEngine
from rsvp_reader.progress import ReadingProgressRecorder
from rsvp_reader.scheduling import LoopScheduler


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


def make_engine(
    config: ReaderConfig | None = None,
) -> tuple[PlaybackEngine, LoopScheduler, FakeClock, ReadingProgressRecorder]:
    """Engine wired to a fake clock so timing is deterministic."""
    clock = FakeClock()
    scheduler = LoopScheduler(clock=clock, sleep=clock.sleep)
    recorder = ReadingProgressRecorder()
    engine = PlaybackEngine(config, scheduler=scheduler, recorder=recorder)
    return engine, scheduler, clock, recorder


SENTENCE_TOKENS = ["The", "quick", "brown", "fox", "jumps.", "Then", "it", "ran."]
