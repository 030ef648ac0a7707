"""Terminal control helpers for the watch session.

Owns raw-mode lifecycle, alternate-screen switching, frame output, and the
bell. Failures to enter or leave raw mode are reported as ``TerminalError``.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

from .errors import TerminalError

DEFAULT_TERMINAL_SIZE = (80, 24)


class TerminalController:
    """Manage terminal mode transitions and screen output."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalError(f"Unable to read terminal attributes: {exc}") from exc

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            raise TerminalError(f"Unable to enter raw mode: {exc}") from exc
        self.write("\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, and restore tty state."""
        self.write("\x1b[?25h\x1b[?1049l")
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except termios.error as exc:
            raise TerminalError(f"Unable to restore terminal: {exc}") from exc

    def size(self) -> tuple[int, int]:
        """Return ``(rows, columns)`` of the controlling terminal."""
        term = shutil.get_terminal_size(DEFAULT_TERMINAL_SIZE)
        return max(1, term.lines), max(1, term.columns)

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8", errors="replace"))

    def bell(self) -> None:
        self.write("\a")

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
