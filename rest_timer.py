"""
Rest Timer
----------
The countdown shown between sets. A caller starts it with a duration (and
an optional label, usually the exercise name). While running it loses one
second per tick, and when it reaches zero on its own it tells the caller's
notifier so the next set can be prompted.

States
------
idle       nothing scheduled, duration and remaining are 0
running    exactly one tick is pending
paused     remaining is frozen until resume()
completed  reached zero by ticking; on_completed has fired once

Timer Rules
-----------
- remaining_s never goes negative.
- At most one tick handle is pending per timer. Every state change goes
  through _transition(), which cancels the pending handle before it
  installs a new one, so a second start() can never double-decrement.
- stop() is a silent cancel. Only a natural run-out emits on_completed.
- duration_s is the high-water mark of remaining_s for the current run,
  so remaining/duration stays a usable progress ratio after add_time().

Scheduling
----------
Ticks are scheduled with ``call_later(delay, callback)`` and cancelled with
``handle.cancel()``. An asyncio event loop provides exactly that, and it is
used by default (the running loop is looked up when the first tick is
scheduled). Tests pass a manual clock instead.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Literal, Optional, Protocol

from pydantic import BaseModel

from config import TICK_INTERVAL_S

logger = logging.getLogger(__name__)

TimerStatus = Literal["idle", "running", "paused", "completed"]


class ContractViolation(ValueError):
    """Raised when a caller hands the timer input it refuses to coerce."""


# -------------------------
# Data Models
# -------------------------
class TimerState(BaseModel):
    duration_s: int = 0
    remaining_s: int = 0
    status: TimerStatus = "idle"
    label: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == "running"


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Handle: ...


class TimerNotifier(Protocol):
    def on_started(self, duration_s: int, label: Optional[str]) -> None: ...

    def on_completed(self) -> None: ...


def _require_int(name: str, value: Any) -> None:
    # bool is an int subclass, but True is not a number of seconds
    if isinstance(value, bool) or not isinstance(value, int):
        raise ContractViolation(f"{name} must be an integer, got {value!r}")


# -------------------------
# Timer core
# -------------------------
class RestTimer:
    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        notifier: Optional[TimerNotifier] = None,
        tick_interval: float = TICK_INTERVAL_S,
    ) -> None:
        if tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        self._scheduler = scheduler
        self._notifier = notifier
        self._tick_interval = tick_interval
        self._state = TimerState()
        self._handle: Optional[Handle] = None

    @property
    def state(self) -> TimerState:
        """Snapshot of the current state. Mutating it does not affect the timer."""
        return self._state.model_copy()

    @property
    def notifier(self) -> Optional[TimerNotifier]:
        return self._notifier

    @property
    def is_active(self) -> bool:
        return self._state.is_active

    @property
    def has_pending_tick(self) -> bool:
        return self._handle is not None

    def start(self, duration_s: int, label: Optional[str] = None) -> None:
        """Start a fresh countdown, superseding whatever was running."""
        _require_int("duration_s", duration_s)
        if duration_s < 0:
            raise ContractViolation(f"duration_s must be >= 0, got {duration_s}")

        # Nothing to count down; the run is over as soon as it begins.
        status = "running" if duration_s > 0 else "completed"
        self._transition(TimerState(
            duration_s=duration_s,
            remaining_s=duration_s,
            status=status,
            label=label,
        ))
        logger.info("Rest timer started: %ds for %s", duration_s, label or "exercise")
        if self._notifier is not None:
            self._notifier.on_started(duration_s, label)

        if status == "completed":
            logger.info("Rest complete for %s", label or "exercise")
            if self._notifier is not None:
                self._notifier.on_completed()

    def pause(self) -> None:
        if self._state.status != "running":
            logger.debug("Pause ignored, timer is %s", self._state.status)
            return
        self._transition(self._state.model_copy(update={"status": "paused"}))
        logger.info("Rest timer paused at %ds", self._state.remaining_s)

    def resume(self) -> None:
        s = self._state
        if s.status == "running" or s.remaining_s == 0:
            logger.debug("Resume ignored, timer is %s with %ds left", s.status, s.remaining_s)
            return
        self._transition(s.model_copy(update={"status": "running"}))
        logger.info("Rest timer resumed at %ds", s.remaining_s)

    def stop(self) -> None:
        """Cancel the countdown and return to idle without notifying."""
        self._transition(TimerState())
        logger.info("Rest timer stopped")

    def dispose(self) -> None:
        """Release the pending tick. The timer may still be started again."""
        self.stop()

    def add_time(self, delta_s: int) -> None:
        """Add (or with a negative delta, remove) seconds from the countdown."""
        _require_int("delta_s", delta_s)
        s = self._state
        remaining = max(0, s.remaining_s + delta_s)
        duration = max(s.duration_s, remaining)

        if s.status == "running":
            if remaining == 0:
                # Drained by hand rather than by ticking: no completion event.
                self._transition(s.model_copy(update={
                    "duration_s": duration,
                    "remaining_s": 0,
                    "status": "paused",
                }))
            else:
                # The pending tick keeps its phase.
                s.duration_s = duration
                s.remaining_s = remaining
        elif s.status == "paused":
            s.duration_s = duration
            s.remaining_s = remaining
        elif remaining > 0:
            # Extending an idle or finished timer leaves it ready to resume.
            self._transition(s.model_copy(update={
                "duration_s": duration,
                "remaining_s": remaining,
                "status": "paused",
            }))

        logger.debug("Added %+ds, %ds left of %ds", delta_s, self._state.remaining_s, self._state.duration_s)

    # -------------------------
    # Tick scheduling
    # -------------------------
    def _transition(self, state: TimerState) -> None:
        # Resolve the scheduler first so a missing event loop leaves state untouched
        scheduler = None
        if state.status == "running" and state.remaining_s > 0:
            scheduler = self._get_scheduler()
        self._cancel_tick()
        self._state = state
        if scheduler is not None:
            self._handle = scheduler.call_later(self._tick_interval, self._tick)

    def _get_scheduler(self) -> Scheduler:
        return self._scheduler or asyncio.get_running_loop()

    def _schedule_tick(self) -> None:
        self._handle = self._get_scheduler().call_later(self._tick_interval, self._tick)

    def _cancel_tick(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        self._handle = None
        s = self._state
        if s.status != "running" or s.remaining_s <= 0:
            return
        if s.remaining_s > 1:
            s.remaining_s -= 1
            self._schedule_tick()
            return
        self._complete()

    def _complete(self) -> None:
        self._transition(self._state.model_copy(update={"remaining_s": 0, "status": "completed"}))
        logger.info("Rest complete for %s", self._state.label or "exercise")
        if self._notifier is not None:
            self._notifier.on_completed()
