"""Watch session bootstrap.

Checks that stdin/stdout are terminals, installs the termination-signal
contract, and runs the main loop inside raw mode so every exit path,
fatal errors included, restores the terminal before anything is printed.
"""

from __future__ import annotations

import functools
import logging
import os
import signal
import sys

from ..config import WatchConfig
from ..errors import TerminalError
from ..input import read_key
from ..terminal import TerminalController
from .loop import RuntimeLoopTiming, run_main_loop
from .session import WatchSession

logger = logging.getLogger(__name__)

TERMINATING_SIGNALS = (signal.SIGHUP, signal.SIGTERM)


def _exit_on_signal(signum: int, _frame) -> None:
    logger.info("terminating on signal %d", signum)
    raise SystemExit(1)


def install_signal_handlers() -> None:
    """Turn hangup/termination into ``SystemExit`` so cleanup code runs."""
    for signum in TERMINATING_SIGNALS:
        signal.signal(signum, _exit_on_signal)


def run_watch(config: WatchConfig, timing: RuntimeLoopTiming | None = None) -> None:
    """Run the interactive watch screen until the user quits."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not (os.isatty(stdin_fd) and os.isatty(stdout_fd)):
        raise TerminalError("gaze needs an interactive terminal")

    install_signal_handlers()
    terminal = TerminalController(stdin_fd, stdout_fd)
    session = WatchSession.create(config, terminal.size)
    logger.info(
        "watching %r every %ds (timeout %ds, buffer %d bytes)",
        config.command,
        config.interval,
        config.timeout,
        config.buffer_size,
    )
    with terminal.raw_mode():
        run_main_loop(
            session,
            terminal,
            functools.partial(read_key, stdin_fd),
            timing,
        )
