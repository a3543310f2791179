"""Presentation helpers for the rest timer overlay."""

from __future__ import annotations

from config import URGENT_THRESHOLD_S
from rest_timer import TimerState


def format_time(seconds: int) -> str:
    """Format seconds as m:ss, e.g. 65 -> '1:05'."""
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins}:{secs:02d}"


def progress(state: TimerState) -> float:
    if state.duration_s <= 0:
        return 0.0
    return state.remaining_s / state.duration_s


def is_urgent(state: TimerState, threshold_s: int = URGENT_THRESHOLD_S) -> bool:
    # The overlay turns red for the last few seconds
    return state.remaining_s <= threshold_s


def is_visible(state: TimerState) -> bool:
    return state.is_active or state.remaining_s > 0
