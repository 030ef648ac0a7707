"""Public runtime orchestration entry points.

This package groups the watch bootstrap (`run_watch`), the session state it
drives, and the lower-level event loop used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import RuntimeLoopTiming
    from .session import WatchSession


def run_watch(*args, **kwargs):
    """Lazily import the watch entrypoint to keep package imports light."""
    from .app import run_watch as _run_watch

    return _run_watch(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name == "RuntimeLoopTiming":
        from . import loop as _loop

        return _loop.RuntimeLoopTiming
    if name == "WatchSession":
        from . import session as _session

        return _session.WatchSession
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_watch",
    "RuntimeLoopTiming",
    "WatchSession",
    "run_main_loop",
]
