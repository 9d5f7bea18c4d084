"""Minimal example embedding the engine with thread-backed timers."""

from __future__ import annotations

import threading

from rsvp_reader.config import ReaderConfig
from rsvp_reader.engine import PlaybackEngine
from rsvp_reader.models import EngineSnapshot, PlaybackState
from rsvp_reader.progress import ReadingProgressRecorder
from rsvp_reader.scheduling import ThreadingTimerScheduler


def main() -> None:
    recorder = ReadingProgressRecorder()
    engine = PlaybackEngine(
        ReaderConfig(words_per_minute=450),
        scheduler=ThreadingTimerScheduler(),
        recorder=recorder,
    )
    finished = threading.Event()

    def on_change(snapshot: EngineSnapshot) -> None:
        if snapshot.state is PlaybackState.STOPPED and snapshot.position > 0:
            finished.set()
        elif snapshot.current_token:
            split = engine.current_split
            print(f"{split.prefix}[{split.focal}]{split.suffix}")

    engine.subscribe(on_change)
    engine.load_text(
        "Rapid serial visual presentation flashes one word at a time. "
        "The eye stays put, so reading speeds up."
    )
    engine.play()
    # Observers run on timer threads while they hold engine.lock.
    finished.wait()
    print(f"Read {recorder.progress.words_read} words at {recorder.progress.average_wpm} wpm")


if __name__ == "__main__":
    main()
