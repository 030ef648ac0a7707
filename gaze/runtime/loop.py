"""Main interactive loop for the watch screen.

Coordinates periodic captures, resize detection, rendering, and key
dispatch on a single thread. Feature logic lives in the session and the
navigator; this module is wiring.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..navigation import RESIZE_KEY, KeyAction
from ..render import render_frame, render_help_page
from ..terminal import TerminalController
from .session import WatchSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    poll_slice_ms: int = 50


def show_help(terminal: TerminalController, read_key: Callable[[int], str], timing: RuntimeLoopTiming) -> None:
    """Show the help modal until ``ESC`` or ``q``; other keys ring the bell."""
    size = terminal.size()
    terminal.write(render_help_page(size[1], size[0]))
    while True:
        key = read_key(timing.poll_slice_ms)
        if key in {"ESC", "q"}:
            return
        current = terminal.size()
        if current != size:
            size = current
            terminal.write(render_help_page(size[1], size[0]))
        elif key:
            terminal.bell()


def run_main_loop(
    session: WatchSession,
    terminal: TerminalController,
    read_key: Callable[[int], str],
    timing: RuntimeLoopTiming | None = None,
    max_iterations: int | None = None,
) -> None:
    """Run capture, render, and input until a quit key arrives.

    ``read_key`` receives the poll slice in milliseconds and returns ``""``
    when no key arrived. ``max_iterations`` bounds the loop for tests.
    """
    timing = timing or RuntimeLoopTiming()
    navigator = session.navigator
    last_size = terminal.size()
    dirty = True
    iterations = 0

    while max_iterations is None or iterations < max_iterations:
        iterations += 1

        if session.refresh_if_due():
            dirty = True

        size = terminal.size()
        if size != last_size:
            last_size = size
            navigator.handle_key(RESIZE_KEY)
            dirty = True

        if dirty:
            terminal.write(
                render_frame(
                    session.grid,
                    session.viewport,
                    command=session.config.command,
                    interval=session.config.interval,
                    captured_at=session.captured_at,
                    goto_prompt=navigator.goto_prompt,
                    tab_stop=session.config.tab_stop,
                )
            )
            dirty = False

        key = read_key(timing.poll_slice_ms)
        if not key:
            continue

        action = navigator.handle_key(key)
        dirty = True
        if action is KeyAction.QUIT:
            logger.debug("quit requested")
            return
        if action is KeyAction.REFRESH:
            session.clock.force()
        elif action is KeyAction.HELP:
            show_help(terminal, read_key, timing)
        elif action is KeyAction.INVALID:
            terminal.bell()
