import itertools

import pytest
from fastapi.testclient import TestClient

from rest_timer import RestTimer
from rest_timer_api import _TIMERS, app, get_scheduler


class ManualHandle:
    def __init__(self, when, seq, callback, args):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """call_later() against a clock that only moves when advance() is called."""

    def __init__(self):
        self.now = 0.0
        self._handles = []
        self._seq = itertools.count()

    def call_later(self, delay, callback, *args):
        handle = ManualHandle(self.now + delay, next(self._seq), callback, args)
        self._handles.append(handle)
        return handle

    @property
    def pending(self):
        return sum(1 for h in self._handles if not h.cancelled)

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            self._handles = [h for h in self._handles if not h.cancelled]
            due = [h for h in self._handles if h.when <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: (h.when, h.seq))
            self._handles.remove(handle)
            self.now = handle.when
            handle.callback(*handle.args)
        self.now = target


class RecordingNotifier:
    def __init__(self):
        self.events = []

    def on_started(self, duration_s, label):
        self.events.append(("started", duration_s, label))

    def on_completed(self):
        self.events.append(("completed",))

    @property
    def completed_count(self):
        return self.events.count(("completed",))


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def timer(scheduler, notifier):
    return RestTimer(scheduler=scheduler, notifier=notifier, tick_interval=1.0)


@pytest.fixture
def client(scheduler):
    """TestClient whose timers tick on the manual scheduler."""
    _TIMERS.clear()
    app.dependency_overrides[get_scheduler] = lambda: scheduler
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    _TIMERS.clear()
