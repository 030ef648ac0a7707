"""Scroll position of the visible window into the content grid.

``visible_rows`` and ``visible_cols`` are the full terminal size. The first
terminal row holds the header, so the largest top row that still fills the
content area is ``content_height - visible_rows + 1``. Horizontal bounds use
the display width: content width plus the line-number gutter.

Every operation mutates the viewport in place and returns it, so calls can
be chained and tests can assert on the result directly.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Viewport:
    visible_rows: int
    visible_cols: int
    content_height: int = 1
    content_width: int = 1
    gutter_width: int = 0
    top_row: int = 0
    left_col: int = 0

    @property
    def display_width(self) -> int:
        return self.content_width + self.gutter_width

    @property
    def max_top(self) -> int:
        """Largest top row that keeps the last line on screen (may be negative)."""
        return self.content_height - self.visible_rows + 1

    @property
    def max_left(self) -> int:
        """Largest left column that keeps the right edge on screen (may be negative)."""
        return self.display_width - self.visible_cols

    @property
    def page_rows(self) -> int:
        return max(1, self.visible_rows - 1)

    def _clamp_top_to_content(self) -> None:
        if self.content_height <= self.visible_rows:
            self.top_row = 0
        elif self.top_row > self.max_top:
            self.top_row = self.max_top
        self.top_row = max(0, self.top_row)

    def _clamp_left(self) -> None:
        self.left_col = max(0, min(self.left_col, self.max_left))

    def on_refresh(self, content_height: int, content_width: int, gutter_width: int = 0) -> Viewport:
        """Adopt the dimensions of a freshly captured grid."""
        self.content_height = max(1, content_height)
        self.content_width = max(1, content_width)
        self.gutter_width = max(0, gutter_width)
        self._clamp_top_to_content()
        self._clamp_left()
        return self

    def on_resize(self, visible_rows: int, visible_cols: int) -> Viewport:
        """Adopt a new terminal size and pull the window back inside the content."""
        self.visible_rows = max(1, visible_rows)
        self.visible_cols = max(1, visible_cols)
        if self.left_col + self.visible_cols > self.display_width:
            self.left_col = max(0, self.max_left)
        self.top_row = max(0, min(self.top_row, self.max_top))
        return self

    def scroll_up(self, n: int = 1) -> Viewport:
        self.top_row = max(0, self.top_row - n)
        return self

    def scroll_down(self, n: int = 1) -> Viewport:
        if self.top_row < self.max_top:
            self.top_row = min(self.top_row + n, self.max_top)
        return self

    def scroll_left(self, n: int = 1) -> Viewport:
        self.left_col = max(0, self.left_col - n)
        return self

    def scroll_right(self, n: int = 1) -> Viewport:
        if self.left_col < self.max_left:
            self.left_col = min(self.left_col + n, self.max_left)
        return self

    def scroll_far_left(self) -> Viewport:
        self.left_col = 0
        return self

    def scroll_far_right(self) -> Viewport:
        if self.max_left > 0:
            self.left_col = self.max_left
        return self

    def jump_home(self) -> Viewport:
        """Go to the first row; a second press also returns to column 0."""
        if self.top_row == 0:
            self.left_col = 0
        self.top_row = 0
        return self

    def jump_end(self) -> Viewport:
        """Go to the last page; a second press also scrolls fully right.

        Content shorter than the screen keeps one line of slack above the
        last line instead of snapping to row 0.
        """
        if self.content_height > self.visible_rows:
            target = self.max_top
        else:
            target = max(0, self.content_height - 2)
        if self.top_row == target:
            self.scroll_far_right()
        self.top_row = target
        return self

    def jump_to_line(self, line_number: int) -> Viewport:
        """Put 1-based ``line_number`` at the top, clamped like a refresh."""
        self.top_row = max(0, line_number - 1)
        self._clamp_top_to_content()
        return self

    def page_down(self) -> Viewport:
        if self.top_row + self.page_rows < self.max_top:
            self.top_row += self.page_rows
        elif self.content_height >= self.visible_rows:
            self.top_row = max(0, self.max_top)
        else:
            self.top_row = 0
        return self

    def page_up(self) -> Viewport:
        if self.top_row >= self.visible_rows:
            self.top_row -= self.page_rows
        else:
            self.top_row = 0
        return self
