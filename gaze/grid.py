"""Captured-output to content-grid conversion.

A grid is the immutable backing store the viewport scrolls over: the raw
lines of one capture plus their dimensions after tab expansion.
"""

from __future__ import annotations

from dataclasses import dataclass

from .text import TAB_STOP, line_display_width


@dataclass(frozen=True)
class ContentGrid:
    """Lines of one capture cycle and their rectangular extent."""

    lines: tuple[str, ...]
    content_width: int
    content_height: int

    def line(self, row: int) -> str:
        if 0 <= row < self.content_height:
            return self.lines[row]
        return ""


EMPTY_GRID = ContentGrid(lines=("",), content_width=1, content_height=1)


def decode_output(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def build_grid(data: bytes | str, tab_stop: int = TAB_STOP) -> ContentGrid:
    """Build a ``ContentGrid`` from captured bytes.

    Lines are split strictly on ``\\n``, so a trailing line break yields an
    empty final row. Width is the widest line after tab expansion and never
    drops below one column. Lines are stored with their tabs intact and are
    never truncated; horizontal scrolling is how long lines become visible.
    """
    text = decode_output(data) if isinstance(data, (bytes, bytearray)) else data
    lines = tuple(text.split("\n"))
    return ContentGrid(lines=lines, content_width=_content_width(text, lines, tab_stop), content_height=len(lines))


def _content_width(text: str, lines: tuple[str, ...], tab_stop: int) -> int:
    # Plain ASCII output is one column per character.
    if text.isascii() and text.replace("\n", "").isprintable():
        return max(1, max(map(len, lines)))
    return max(1, max(line_display_width(line, tab_stop) for line in lines))


def count_digits(value: int) -> int:
    """Return the number of characters needed to print ``value``."""
    return len(str(value))


def gutter_width(grid: ContentGrid, show_lineno: bool) -> int:
    """Width of the line-number gutter: digits of the last line plus ``:``."""
    if not show_lineno:
        return 0
    return count_digits(grid.content_height) + 1
