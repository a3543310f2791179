"""
Rest Timer API

Overview
--------
HTTP surface for the between-sets rest timer. Each timer lives in memory
for as long as the process does and ticks on the serving event loop.

Timer Rules
-----------
- A fresh start always supersedes the previous run; no stop needed first.
- Pause freezes remaining_s, resume continues from the same value.
- Stop is silent. Only a countdown reaching zero on its own raises the
  "Rest Complete" toast.
- add_time clamps at zero and raises duration_s to the new remaining_s
  when it exceeds it.

API Endpoints
-------------
- POST   /timers                      → create an idle timer
- GET    /timers/{id}                 → current state plus display fields
- POST   /timers/{id}/start           → {duration_s, label?}
- POST   /timers/{id}/pause
- POST   /timers/{id}/resume
- POST   /timers/{id}/stop
- POST   /timers/{id}/add_time        → {delta_s} (defaults to the +/- step)
- GET    /timers/{id}/notifications   → toasts raised so far
- DELETE /timers/{id}                 → dispose and forget

Invalid input reaching the timer (e.g. a negative duration) is answered
with 422. Unknown ids are 404.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import ADJUST_STEP_S, TICK_INTERVAL_S, URGENT_THRESHOLD_S
from display import format_time, is_urgent, is_visible, progress
from notifications import Toast, ToastNotifier
from rest_timer import ContractViolation, RestTimer, Scheduler, TimerStatus

logger = logging.getLogger(__name__)

# -------------------------
# In-memory store
# -------------------------
_TIMERS: Dict[str, RestTimer] = {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    for timer in _TIMERS.values():
        timer.dispose()
    logger.info("Disposed %d rest timer(s) on shutdown", len(_TIMERS))
    _TIMERS.clear()


app = FastAPI(title="Rest Timer API", lifespan=lifespan)


@app.exception_handler(ContractViolation)
async def contract_violation_handler(request: Request, exc: ContractViolation):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# -------------------------
# Request / response models
# -------------------------
class StartRequest(BaseModel):
    duration_s: int
    label: Optional[str] = None


class AddTimeRequest(BaseModel):
    delta_s: int = ADJUST_STEP_S


class TimerView(BaseModel):
    id: str
    status: TimerStatus
    duration_s: int
    remaining_s: int
    is_active: bool
    label: Optional[str] = None
    display: str
    progress: float
    urgent: bool
    visible: bool


def _view(tid: str, timer: RestTimer) -> TimerView:
    s = timer.state
    return TimerView(
        id=tid,
        status=s.status,
        duration_s=s.duration_s,
        remaining_s=s.remaining_s,
        is_active=s.is_active,
        label=s.label,
        display=format_time(s.remaining_s),
        progress=progress(s),
        urgent=is_urgent(s, URGENT_THRESHOLD_S),
        visible=is_visible(s),
    )


async def get_scheduler() -> Scheduler:
    return asyncio.get_running_loop()


def _get_timer(tid: str) -> RestTimer:
    timer = _TIMERS.get(tid)
    if timer is None:
        logger.warning("Rest timer %s not found", tid)
        raise HTTPException(404, "Timer not found")
    return timer


# -------------------------
# Timers API
# -------------------------
@app.post("/timers", response_model=TimerView)
async def create_timer(scheduler: Scheduler = Depends(get_scheduler)):
    tid = str(uuid.uuid4())
    timer = RestTimer(scheduler=scheduler, notifier=ToastNotifier(), tick_interval=TICK_INTERVAL_S)
    _TIMERS[tid] = timer
    logger.info("Created rest timer %s", tid)
    return _view(tid, timer)


@app.get("/timers/{tid}", response_model=TimerView)
async def get_timer(tid: str):
    return _view(tid, _get_timer(tid))


@app.post("/timers/{tid}/start", response_model=TimerView)
async def start_timer(tid: str, body: StartRequest):
    timer = _get_timer(tid)
    timer.start(body.duration_s, body.label)
    return _view(tid, timer)


@app.post("/timers/{tid}/pause", response_model=TimerView)
async def pause_timer(tid: str):
    timer = _get_timer(tid)
    timer.pause()
    return _view(tid, timer)


@app.post("/timers/{tid}/resume", response_model=TimerView)
async def resume_timer(tid: str):
    timer = _get_timer(tid)
    timer.resume()
    return _view(tid, timer)


@app.post("/timers/{tid}/stop", response_model=TimerView)
async def stop_timer(tid: str):
    timer = _get_timer(tid)
    timer.stop()
    return _view(tid, timer)


@app.post("/timers/{tid}/add_time", response_model=TimerView)
async def add_time(tid: str, body: Optional[AddTimeRequest] = None):
    timer = _get_timer(tid)
    timer.add_time((body or AddTimeRequest()).delta_s)
    return _view(tid, timer)


@app.get("/timers/{tid}/notifications", response_model=List[Toast])
async def get_notifications(tid: str):
    notifier = _get_timer(tid).notifier
    return list(getattr(notifier, "toasts", []))


@app.delete("/timers/{tid}")
async def delete_timer(tid: str):
    timer = _get_timer(tid)
    timer.dispose()
    del _TIMERS[tid]
    logger.info("Deleted rest timer %s", tid)
    return {"deleted": tid}


# -------------------------
# Dev helper: run with uvicorn
# -------------------------
# Run with:
#   uvicorn rest_timer_api:app --reload --port 8080
# or: python run_rest_timer_api.py
