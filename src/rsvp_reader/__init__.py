"""
rsvp_reader package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .config import ReaderConfig, config_from_dict, config_from_yaml, load_config
from .engine import PlaybackEngine
from .fixation import fixation_index, split_fixation
from .models import (
    Bookmark,
    EngineSnapshot,
    FixationSplit,
    PlaybackState,
    ProgressEvent,
    ReadingProgress,
)
from .progress import (
    CallableProgressRecorder,
    NoOpProgressRecorder,
    ProgressRecorder,
    ReadingProgressRecorder,
)
from .scheduling import LoopScheduler, Scheduler, ThreadingTimerScheduler
from .sentences import SentenceBoundaryDetector
from .tokenization import process_text

__all__ = [
    "ReaderConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "PlaybackEngine",
    "fixation_index",
    "split_fixation",
    "Bookmark",
    "EngineSnapshot",
    "FixationSplit",
    "PlaybackState",
    "ProgressEvent",
    "ReadingProgress",
    "ProgressRecorder",
    "NoOpProgressRecorder",
    "CallableProgressRecorder",
    "ReadingProgressRecorder",
    "Scheduler",
    "LoopScheduler",
    "ThreadingTimerScheduler",
    "SentenceBoundaryDetector",
    "process_text",
]

__version__ = "0.1.0"
