"""Tests for the navigation key state machine."""

from __future__ import annotations

import unittest

from gaze.navigation import GOTO_LINE_LIMIT, GotoLineMode, KeyAction, Navigator, NormalMode
from gaze.viewport import Viewport


def _navigator(content_height: int = 100, rows: int = 10, cols: int = 40, size=None) -> Navigator:
    viewport = Viewport(visible_rows=rows, visible_cols=cols).on_refresh(content_height, 200)
    terminal_size = size if size is not None else (lambda: (rows, cols))
    return Navigator(viewport, terminal_size)


def _feed(navigator: Navigator, *keys: str) -> list[KeyAction]:
    return [navigator.handle_key(key) for key in keys]


class NormalModeTests(unittest.TestCase):
    def test_arrow_and_letter_keys_scroll(self) -> None:
        navigator = _navigator()

        _feed(navigator, "DOWN", "s", "s")
        self.assertEqual(navigator.viewport.top_row, 3)
        _feed(navigator, "UP", "w")
        self.assertEqual(navigator.viewport.top_row, 1)
        _feed(navigator, "RIGHT", "d", "LEFT")
        self.assertEqual(navigator.viewport.left_col, 1)

    def test_page_home_end_keys(self) -> None:
        navigator = _navigator()

        _feed(navigator, "PAGE_DOWN")
        self.assertEqual(navigator.viewport.top_row, 9)
        _feed(navigator, "n", "b")
        self.assertEqual(navigator.viewport.top_row, 9)
        _feed(navigator, "END")
        self.assertEqual(navigator.viewport.top_row, 91)
        _feed(navigator, "h")
        self.assertEqual(navigator.viewport.top_row, 0)

    def test_far_left_and_right_keys(self) -> None:
        navigator = _navigator()

        _feed(navigator, ">")
        self.assertEqual(navigator.viewport.left_col, 160)
        _feed(navigator, "z")
        self.assertEqual(navigator.viewport.left_col, 0)
        _feed(navigator, "x")
        self.assertEqual(navigator.viewport.left_col, 160)
        _feed(navigator, "<")
        self.assertEqual(navigator.viewport.left_col, 0)

    def test_command_keys_report_actions(self) -> None:
        navigator = _navigator()

        self.assertEqual(_feed(navigator, "q", "ESC", "CTRL_C"), [KeyAction.QUIT] * 3)
        self.assertEqual(_feed(navigator, "r", "F5"), [KeyAction.REFRESH] * 2)
        self.assertEqual(_feed(navigator, "?", "F1"), [KeyAction.HELP] * 2)

    def test_unknown_key_is_invalid_and_keeps_state(self) -> None:
        navigator = _navigator()
        navigator.viewport.top_row = 5

        self.assertEqual(navigator.handle_key("Q"), KeyAction.INVALID)
        self.assertEqual(navigator.handle_key("BACKSPACE"), KeyAction.INVALID)
        self.assertEqual(navigator.viewport.top_row, 5)
        self.assertEqual(navigator.mode, NormalMode())

    def test_empty_poll_is_a_no_op(self) -> None:
        navigator = _navigator()

        self.assertEqual(navigator.handle_key(""), KeyAction.NONE)

    def test_resize_reclamps_viewport(self) -> None:
        size = [(10, 40)]
        navigator = _navigator(content_height=30, size=lambda: size[0])
        navigator.viewport.top_row = 20
        size[0] = (60, 40)

        self.assertEqual(navigator.handle_key("RESIZE"), KeyAction.MOVED)
        self.assertEqual(navigator.viewport.visible_rows, 60)
        self.assertEqual(navigator.viewport.top_row, 0)


class GotoLineModeTests(unittest.TestCase):
    def test_leading_zero_is_ignored_then_digits_commit(self) -> None:
        navigator = _navigator()

        _feed(navigator, "0", "1", "2")
        self.assertEqual(navigator.goto_prompt, "12")
        _feed(navigator, "ENTER")

        self.assertEqual(navigator.viewport.top_row, 11)
        self.assertEqual(navigator.mode, NormalMode())
        self.assertIsNone(navigator.goto_prompt)

    def test_zero_alone_does_not_enter_mode(self) -> None:
        navigator = _navigator()

        self.assertEqual(navigator.handle_key("0"), KeyAction.NONE)
        self.assertEqual(navigator.mode, NormalMode())

    def test_commit_is_clamped_against_content(self) -> None:
        navigator = _navigator(content_height=30, rows=10)

        _feed(navigator, "9", "9", "ENTER")
        self.assertEqual(navigator.viewport.top_row, 21)

    def test_commit_key_is_consumed(self) -> None:
        navigator = _navigator()

        actions = _feed(navigator, "5", "q")
        self.assertEqual(actions[-1], KeyAction.MOVED)
        self.assertEqual(navigator.viewport.top_row, 4)
        self.assertEqual(navigator.mode, NormalMode())

        _feed(navigator, "3", "s")
        self.assertEqual(navigator.viewport.top_row, 2)

    def test_escape_aborts_without_moving(self) -> None:
        navigator = _navigator()
        navigator.viewport.top_row = 7

        _feed(navigator, "4", "2", "ESC")
        self.assertEqual(navigator.viewport.top_row, 7)
        self.assertEqual(navigator.mode, NormalMode())

    def test_backspace_removes_digits_and_stays_in_mode(self) -> None:
        navigator = _navigator()

        _feed(navigator, "1", "2", "BACKSPACE")
        self.assertEqual(navigator.goto_prompt, "1")
        _feed(navigator, "BACKSPACE", "BACKSPACE")
        self.assertEqual(navigator.goto_prompt, "")
        self.assertEqual(navigator.mode, GotoLineMode(""))

    def test_empty_value_commit_does_not_move(self) -> None:
        navigator = _navigator()
        navigator.viewport.top_row = 7

        _feed(navigator, "4", "BACKSPACE", "0", "ENTER")
        self.assertEqual(navigator.viewport.top_row, 7)
        self.assertEqual(navigator.mode, NormalMode())

    def test_digits_saturate_at_limit(self) -> None:
        navigator = _navigator()

        _feed(navigator, *"9" * 20)
        value = navigator.mode.value
        self.assertGreaterEqual(value, GOTO_LINE_LIMIT)
        self.assertEqual(navigator.goto_prompt, "999999999")
        _feed(navigator, "ENTER")
        self.assertEqual(navigator.viewport.top_row, 91)

    def test_resize_does_not_leave_mode(self) -> None:
        navigator = _navigator()

        _feed(navigator, "4", "RESIZE", "2", "ENTER")
        self.assertEqual(navigator.viewport.top_row, 41)


if __name__ == "__main__":
    unittest.main()
