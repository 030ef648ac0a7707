"""Refresh scheduling on the monotonic clock."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass
class RefreshClock:
    """Decide when the next capture is due.

    ``last_capture`` is ``None`` until the first capture, which makes the
    first check due immediately. Wall-clock jumps do not affect scheduling.
    """

    interval: float
    last_capture: float | None = None
    now: Callable[[], float] = field(default=time.monotonic, repr=False)

    def is_due(self, now: float | None = None) -> bool:
        if self.last_capture is None:
            return True
        current = self.now() if now is None else now
        return current - self.last_capture >= self.interval

    def mark(self, now: float | None = None) -> None:
        self.last_capture = self.now() if now is None else now

    def force(self) -> None:
        """Make the next ``is_due`` check succeed."""
        self.last_capture = None
