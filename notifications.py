"""Toast-style notifications for rest timer events."""

from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

STARTED_TITLE = "Rest Timer Started"
COMPLETED_TITLE = "Rest Complete! 💪"
COMPLETED_DESCRIPTION = "Time to start your next set"
COMPLETED_DURATION_MS = 5000


class Toast(BaseModel):
    title: str
    description: str
    duration_ms: Optional[int] = None


class ToastNotifier:
    """Records every toast a timer raises, in order, and logs it."""

    def __init__(self) -> None:
        self.toasts: List[Toast] = []

    def on_started(self, duration_s: int, label: Optional[str]) -> None:
        self._push(Toast(
            title=STARTED_TITLE,
            description=f"{duration_s} seconds rest time for {label or 'exercise'}",
        ))

    def on_completed(self) -> None:
        self._push(Toast(
            title=COMPLETED_TITLE,
            description=COMPLETED_DESCRIPTION,
            duration_ms=COMPLETED_DURATION_MS,
        ))

    def _push(self, toast: Toast) -> None:
        self.toasts.append(toast)
        logger.info("Toast: %s - %s", toast.title, toast.description)
