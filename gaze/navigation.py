"""Keyboard state machine for normal navigation and goto-line entry.

Normal mode maps keys onto viewport operations. Typing a digit switches to
goto-line mode, which collects a line number until any non-digit key
commits it (``ESC`` aborts instead). The key that ends goto-line mode is
consumed and never runs its normal-mode action.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

from .input import KeyComboBinding, KeyComboRegistry
from .viewport import Viewport

logger = logging.getLogger(__name__)

GOTO_LINE_LIMIT = 200_000_000

RESIZE_KEY = "RESIZE"


def _is_digit(key: str) -> bool:
    return len(key) == 1 and "0" <= key <= "9"


class KeyAction(enum.Enum):
    """What the loop must do after a key was handled."""

    NONE = "none"
    MOVED = "moved"
    QUIT = "quit"
    REFRESH = "refresh"
    HELP = "help"
    INVALID = "invalid"


@dataclass(frozen=True)
class NormalMode:
    pass


@dataclass(frozen=True)
class GotoLineMode:
    """Goto-line entry with the digits typed so far (possibly none)."""

    digits: str = ""

    @property
    def value(self) -> int:
        return int(self.digits) if self.digits else 0

    def push(self, digit: str) -> GotoLineMode:
        if not self.digits and digit == "0":
            return self
        if self.value >= GOTO_LINE_LIMIT:
            return self
        return GotoLineMode(self.digits + digit)

    def pop(self) -> GotoLineMode:
        return GotoLineMode(self.digits[:-1])


InputMode = NormalMode | GotoLineMode


class Navigator:
    """Apply key tokens to a ``Viewport`` according to the current mode.

    ``terminal_size`` returns ``(rows, columns)`` and is consulted when a
    ``RESIZE`` token arrives.
    """

    def __init__(self, viewport: Viewport, terminal_size: Callable[[], tuple[int, int]]) -> None:
        self.viewport = viewport
        self.terminal_size = terminal_size
        self.mode: InputMode = NormalMode()
        self._normal_bindings = self._build_normal_bindings()

    @property
    def goto_prompt(self) -> str | None:
        """Digits typed in goto-line mode, or ``None`` outside that mode."""
        if isinstance(self.mode, GotoLineMode):
            return self.mode.digits
        return None

    def _build_normal_bindings(self) -> KeyComboRegistry[KeyAction]:
        viewport = self.viewport

        def move(operation: Callable[[], Viewport]) -> Callable[[], KeyAction]:
            def run() -> KeyAction:
                operation()
                return KeyAction.MOVED

            return run

        return KeyComboRegistry[KeyAction]().register_bindings(
            KeyComboBinding(("ESC", "q", "CTRL_C"), lambda: KeyAction.QUIT),
            KeyComboBinding(("F5", "r"), lambda: KeyAction.REFRESH),
            KeyComboBinding(("F1", "?"), lambda: KeyAction.HELP),
            KeyComboBinding(("UP", "w"), move(viewport.scroll_up)),
            KeyComboBinding(("DOWN", "s"), move(viewport.scroll_down)),
            KeyComboBinding(("LEFT", "a"), move(viewport.scroll_left)),
            KeyComboBinding(("RIGHT", "d"), move(viewport.scroll_right)),
            KeyComboBinding(("PAGE_DOWN", "n"), move(viewport.page_down)),
            KeyComboBinding(("PAGE_UP", "b"), move(viewport.page_up)),
            KeyComboBinding(("HOME", "h"), move(viewport.jump_home)),
            KeyComboBinding(("END", "e"), move(viewport.jump_end)),
            KeyComboBinding(("<", "z"), move(viewport.scroll_far_left)),
            KeyComboBinding((">", "x"), move(viewport.scroll_far_right)),
            KeyComboBinding((RESIZE_KEY,), self._resize),
        )

    def _resize(self) -> KeyAction:
        rows, columns = self.terminal_size()
        self.viewport.on_resize(rows, columns)
        return KeyAction.MOVED

    def handle_key(self, key: str) -> KeyAction:
        """Handle one key token and report what the loop should do next."""
        if not key:
            return KeyAction.NONE
        if isinstance(self.mode, GotoLineMode):
            return self._handle_goto_key(self.mode, key)
        return self._handle_normal_key(key)

    def _handle_normal_key(self, key: str) -> KeyAction:
        if _is_digit(key):
            if key != "0":
                self.mode = GotoLineMode(key)
            return KeyAction.NONE
        action = self._normal_bindings.dispatch(key)
        if action is None:
            logger.debug("invalid key %r", key)
            return KeyAction.INVALID
        return action

    def _handle_goto_key(self, mode: GotoLineMode, key: str) -> KeyAction:
        if _is_digit(key):
            self.mode = mode.push(key)
            return KeyAction.NONE
        if key == "BACKSPACE":
            self.mode = mode.pop()
            return KeyAction.NONE
        if key == RESIZE_KEY:
            return self._resize()
        self.mode = NormalMode()
        if key == "ESC":
            return KeyAction.MOVED
        if mode.value > 0:
            self.viewport.jump_to_line(mode.value)
        return KeyAction.MOVED
