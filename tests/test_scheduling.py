import threading
import time

from rsvp_reader.scheduling import LoopScheduler, ThreadingTimerScheduler
from tests.utils import FakeClock


def test_loop_scheduler_fires_in_deadline_order():
    clock = FakeClock()
    scheduler = LoopScheduler(clock=clock, sleep=clock.sleep)
    fired: list[str] = []
    scheduler.call_later(0.5, lambda: fired.append("late"))
    scheduler.call_later(0.1, lambda: fired.append("early"))

    assert scheduler.run_due() == 0
    clock.sleep(0.2)
    assert scheduler.run_due() == 1
    assert fired == ["early"]
    assert scheduler.run_until_idle() == 1
    assert fired == ["early", "late"]
    assert clock.now >= 100.4


def test_cancelled_callbacks_never_run():
    clock = FakeClock()
    scheduler = LoopScheduler(clock=clock, sleep=clock.sleep)
    fired: list[int] = []
    handle = scheduler.call_later(0.1, lambda: fired.append(1))
    handle.cancel()
    handle.cancel()

    assert handle.cancelled
    assert scheduler.pending == 0
    assert scheduler.next_deadline() is None
    assert scheduler.run_until_idle() == 0
    assert fired == []


def test_run_until_idle_respects_limit():
    clock = FakeClock()
    scheduler = LoopScheduler(clock=clock, sleep=clock.sleep)
    count = {"value": 0}

    def tick() -> None:
        count["value"] += 1
        scheduler.call_later(1.0, tick)

    scheduler.call_later(1.0, tick)
    assert scheduler.run_until_idle(max_callbacks=5) == 5
    assert count["value"] == 5
    assert scheduler.pending == 1


def test_threading_scheduler_runs_and_cancels():
    scheduler = ThreadingTimerScheduler()
    done = threading.Event()
    skipped = threading.Event()

    scheduler.call_later(0.01, done.set)
    handle = scheduler.call_later(0.05, skipped.set)
    handle.cancel()

    assert done.wait(2.0)
    assert not skipped.wait(0.2)
    assert handle.cancelled


def test_threading_scheduler_holds_lock_during_callback():
    scheduler = ThreadingTimerScheduler()
    observed = threading.Event()

    with scheduler.lock:
        scheduler.call_later(0.0, observed.set)
        # The timer has fired but waits for the lock.
        assert not observed.wait(0.05)
    assert observed.wait(2.0)


def test_threading_scheduler_drops_callback_cancelled_while_waiting():
    scheduler = ThreadingTimerScheduler()
    fired = threading.Event()
    with scheduler.lock:
        handle = scheduler.call_later(0.0, fired.set)
        # Give the timer thread time to fire and block on the lock.
        time.sleep(0.05)
        handle.cancel()
    assert not fired.wait(0.1)
