from __future__ import annotations

import heapq
import itertools
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class TimerHandle(ABC):
    """A pending one-shot callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from firing. Safe to call more than once."""
        raise NotImplementedError

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        raise NotImplementedError


class Scheduler(ABC):
    """Deadline-based scheduler for one-shot callbacks."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """Re-entrant lock held while callbacks run."""
        return self._lock

    @abstractmethod
    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        """Run ``callback`` once after ``delay`` seconds."""
        raise NotImplementedError


class _LoopHandle(TimerHandle):
    def __init__(self, deadline: float, callback: Callback) -> None:
        self.deadline = deadline
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class LoopScheduler(Scheduler):
    """Single-threaded deadline queue driven by the caller.

    Callbacks only run from ``run_due`` / ``run_until_idle``, so everything
    happens on the thread that drives the loop.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__()
        self._clock = clock
        self._sleep = sleep
        self._queue: List[Tuple[float, int, _LoopHandle]] = []
        self._counter = itertools.count()

    @property
    def clock(self) -> Callable[[], float]:
        return self._clock

    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        handle = _LoopHandle(self._clock() + max(0.0, delay), callback)
        heapq.heappush(self._queue, (handle.deadline, next(self._counter), handle))
        return handle

    def _discard_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def next_deadline(self) -> float | None:
        self._discard_cancelled()
        if not self._queue:
            return None
        return self._queue[0][0]

    def run_due(self) -> int:
        """Fire every callback whose deadline has passed; return how many ran."""
        fired = 0
        while True:
            deadline = self.next_deadline()
            if deadline is None or deadline > self._clock():
                return fired
            _, _, handle = heapq.heappop(self._queue)
            handle.cancel()
            with self._lock:
                handle.callback()
            fired += 1

    def run_until_idle(self, max_callbacks: int | None = None) -> int:
        """Sleep between deadlines and fire callbacks until nothing is pending."""
        fired = 0
        while max_callbacks is None or fired < max_callbacks:
            deadline = self.next_deadline()
            if deadline is None:
                break
            wait = deadline - self._clock()
            if wait > 0:
                self._sleep(wait)
            _, _, handle = heapq.heappop(self._queue)
            handle.cancel()
            with self._lock:
                handle.callback()
            fired += 1
        return fired


class _ThreadHandle(TimerHandle):
    def __init__(self, timer: threading.Timer) -> None:
        self._timer = timer
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ThreadingTimerScheduler(Scheduler):
    """Scheduler backed by daemon ``threading.Timer`` objects.

    Every callback runs on its timer thread while holding ``lock``, and is
    dropped when its handle was cancelled before the lock was acquired. Code on
    other threads that touches what the callbacks touch should hold the same
    lock (the playback engine does this itself).
    """

    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        def run() -> None:
            with self.lock:
                if handle.cancelled:
                    return
                callback()

        timer = threading.Timer(max(0.0, delay), run)
        timer.daemon = True
        handle = _ThreadHandle(timer)
        timer.start()
        logger.debug("Started timer for %.3fs", delay)
        return handle
