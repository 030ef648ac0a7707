"""Display-width accounting and horizontal slicing for captured text.

Tabs advance to the next tab stop, wide characters take two columns, and
control characters are shown in caret notation so raw escape sequences in
command output can never reach the terminal.
"""

from __future__ import annotations

import unicodedata

TAB_STOP = 8


def caret_form(ch: str) -> str:
    """Return the printable stand-in for a control character."""
    code = ord(ch)
    if code < 0x20 or code == 0x7F:
        return "^" + chr(code ^ 0x40)
    return "~" + chr(code - 0x40)


def is_control(ch: str) -> bool:
    return ch != "\t" and unicodedata.category(ch) == "Cc"


def char_display_width(ch: str, col: int, tab_stop: int = TAB_STOP) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next ``tab_stop`` column, combining marks consume no
    columns, control characters take two (``^X``), and East Asian
    wide/fullwidth characters take two.
    """
    if ch == "\t":
        return tab_stop - (col % tab_stop)
    if is_control(ch):
        return 2
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def line_display_width(text: str, tab_stop: int = TAB_STOP) -> int:
    if text.isascii():
        if text.isprintable():
            return len(text)
        if text.replace("\t", "").isprintable():
            return len(text.expandtabs(tab_stop))
    col = 0
    for ch in text:
        col += char_display_width(ch, col, tab_stop)
    return col


def slice_line(text: str, start_cols: int, max_cols: int, tab_stop: int = TAB_STOP) -> str:
    """Return the part of ``text`` visible in a horizontal window.

    The window starts at display column ``start_cols`` and is ``max_cols``
    columns wide. Tabs are expanded to spaces relative to the start of the
    line, so scrolling never shifts tab alignment. A wide glyph cut by either
    edge is replaced by spaces.
    """
    if max_cols <= 0 or not text:
        return ""
    if start_cols < 0:
        start_cols = 0

    out: list[str] = []
    col = 0
    shown = 0
    for ch in text:
        if shown >= max_cols:
            break
        w = char_display_width(ch, col, tab_stop)
        if col + w <= start_cols:
            col += w
            continue
        if ch == "\t" or col < start_cols:
            # Partially visible: only the columns right of start_cols remain.
            visible = min(col + w - start_cols, w, max_cols - shown)
            out.append(" " * visible)
            shown += visible
            col += w
            continue
        if shown + w > max_cols:
            out.append(" " * (max_cols - shown))
            break
        out.append(caret_form(ch) if is_control(ch) else ch)
        shown += w
        col += w

    return "".join(out)


def clip_line(text: str, max_cols: int, tab_stop: int = TAB_STOP) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns."""
    return slice_line(text, 0, max_cols, tab_stop)
