"""State owned by one watch session.

Bundles configuration, the current content grid, viewport, navigator and
refresh clock, and performs the capture-to-grid refresh step.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..capture import CaptureResult, capture_command
from ..clock import RefreshClock
from ..config import WatchConfig
from ..grid import EMPTY_GRID, ContentGrid, build_grid, gutter_width
from ..navigation import Navigator
from ..viewport import Viewport

logger = logging.getLogger(__name__)

CaptureFn = Callable[[str, int, float], CaptureResult]


@dataclass
class WatchSession:
    config: WatchConfig
    viewport: Viewport
    navigator: Navigator
    clock: RefreshClock
    capture: CaptureFn = capture_command
    grid: ContentGrid = EMPTY_GRID
    captured_at: float | None = None

    @classmethod
    def create(
        cls,
        config: WatchConfig,
        terminal_size: Callable[[], tuple[int, int]],
        capture: CaptureFn = capture_command,
        clock: RefreshClock | None = None,
    ) -> WatchSession:
        """Build a session sized to the current terminal."""
        rows, columns = terminal_size()
        viewport = Viewport(visible_rows=rows, visible_cols=columns)
        return cls(
            config=config,
            viewport=viewport,
            navigator=Navigator(viewport, terminal_size),
            clock=clock or RefreshClock(interval=config.interval),
            capture=capture,
        )

    def refresh(self) -> ContentGrid:
        """Run one capture cycle and swap in the resulting grid."""
        result = self.capture(self.config.command, self.config.buffer_size, self.config.timeout)
        grid = build_grid(result.output, self.config.tab_stop)
        self.grid = grid
        self.captured_at = result.started_at
        self.viewport.on_refresh(
            grid.content_height,
            grid.content_width,
            gutter_width(grid, self.config.show_lineno),
        )
        self.clock.mark()
        return grid

    def refresh_if_due(self) -> bool:
        if not self.clock.is_due():
            return False
        self.refresh()
        return True
