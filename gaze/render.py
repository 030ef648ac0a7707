"""Frame composition for the watch screen and the help modal.

Functions here are side-effect free: they return the full escape-sequence
payload for one frame and the caller writes it in a single ``os.write``.
"""

from __future__ import annotations

import time

from .grid import ContentGrid
from .text import clip_line, line_display_width, slice_line
from .viewport import Viewport

HEADER_PREFIX = "Every {interval} seconds: "
GOTO_PROMPT = "Line: "

HELP_TITLE = "gaze help"
HELP_LINES: tuple[str, ...] = (
    "Press <Esc> or q to exit this window.",
    "",
    "\033[1;38;5;81mCommands\033[0m",
    "  \033[38;5;229m<Esc>,q\033[0m         quit this program",
    "  \033[38;5;229m<F5>,r\033[0m          execute command now",
    "",
    "  \033[38;5;229m<Up>,w\033[0m          scroll up by one row",
    "  \033[38;5;229m<Down>,s\033[0m        scroll down by one row",
    "  \033[38;5;229m<Left>,a\033[0m        scroll left by one column",
    "  \033[38;5;229m<Right>,d\033[0m       scroll right by one column",
    "  \033[38;5;229m<PageDn>,n\033[0m      scroll to the next page",
    "  \033[38;5;229m<PageUp>,b\033[0m      scroll to the previous page",
    "  \033[38;5;229m<Home>,h\033[0m        scroll to top (twice: also far left)",
    "  \033[38;5;229m<End>,e\033[0m         scroll to end (twice: also far right)",
    "  \033[38;5;229m<,z\033[0m             scroll far left",
    "  \033[38;5;229m>,x\033[0m             scroll far right",
    "",
    "\033[1;38;5;81mGoto line number mode\033[0m",
    "  \033[38;5;229m1 through 9\033[0m     begin goto line number mode",
    "  \033[38;5;229m0 through 9\033[0m     add digit",
    "  \033[38;5;229m<Backspace>\033[0m     delete digit",
    "  \033[38;5;229m<Esc>\033[0m           leave mode without moving",
    "  \033[38;5;229m<Any other key>\033[0m go to line and leave mode",
)


def build_header(command: str, interval: int, captured_at: float | None, width: int) -> str:
    """Return the top row: interval and command left, capture time right.

    The command is cut first when space runs out; the timestamp is dropped
    only when even the prefix does not fit next to it.
    """
    usable = max(1, width - 1)
    prefix = HEADER_PREFIX.format(interval=interval)
    stamp = time.ctime(captured_at) if captured_at is not None else ""
    if len(prefix) + len(stamp) + 1 > usable:
        stamp = ""
    room = max(0, usable - len(prefix) - len(stamp))
    left = clip_line(prefix + clip_line(command, max(0, room - 1)), usable)
    gap = " " * max(0, usable - line_display_width(left) - len(stamp))
    return f"{left}{gap}{stamp}"


def build_goto_prompt(digits: str, width: int) -> str:
    return clip_line(GOTO_PROMPT + digits, max(1, width - 1))


def build_content_rows(grid: ContentGrid, viewport: Viewport, tab_stop: int) -> list[str]:
    """Return the visible content rows, gutter included when enabled."""
    rows: list[str] = []
    gutter = viewport.gutter_width
    digits = max(0, gutter - 1)
    text_cols = max(0, viewport.visible_cols - gutter)
    for screen_row in range(max(0, viewport.visible_rows - 1)):
        line_idx = viewport.top_row + screen_row
        if line_idx >= grid.content_height:
            break
        prefix = f"{line_idx + 1:>{digits}}:" if gutter else ""
        rows.append(prefix[: viewport.visible_cols] + slice_line(grid.line(line_idx), viewport.left_col, text_cols, tab_stop))
    return rows


def render_frame(
    grid: ContentGrid,
    viewport: Viewport,
    *,
    command: str,
    interval: int,
    captured_at: float | None,
    goto_prompt: str | None = None,
    tab_stop: int = 8,
) -> str:
    """Compose one full-screen frame for the current grid and viewport."""
    out: list[str] = ["\033[H\033[J"]
    if goto_prompt is not None:
        out.append(build_goto_prompt(goto_prompt, viewport.visible_cols))
    else:
        out.append(build_header(command, interval, captured_at, viewport.visible_cols))
    for row in build_content_rows(grid, viewport, tab_stop):
        out.append("\r\n")
        out.append(row)
    return "".join(out)


def render_help_page(width: int, height: int) -> str:
    """Compose the boxed help modal centered on a dimmed screen."""
    out: list[str] = ["\033[H\033[J"]

    modal_w = max(20, width - 10)
    modal_h = max(6, height - 2)
    x = max(0, (width - modal_w) // 2)
    y = max(0, (height - modal_h) // 2)
    inner_w = max(1, modal_w - 2)
    inner_h = max(1, modal_h - 2)

    out.append(f"\033[{y + 1};{x + 1}H\033[38;5;45m╭")
    out.append("─" * inner_w)
    out.append("╮\033[0m")
    for i in range(inner_h):
        out.append(f"\033[{y + 2 + i};{x + 1}H\033[38;5;45m│\033[0m")
        out.append(" " * inner_w)
        out.append("\033[38;5;45m│\033[0m")
    out.append(f"\033[{y + modal_h};{x + 1}H\033[38;5;45m╰")
    out.append("─" * inner_w)
    out.append("╯\033[0m")

    title_x = x + max(2, (modal_w - 2 - len(HELP_TITLE)) // 2)
    out.append(f"\033[{y + 1};{title_x + 1}H\033[1;38;5;45m{HELP_TITLE}\033[0m")

    body_rows = min(len(HELP_LINES), inner_h)
    for i in range(body_rows):
        out.append(f"\033[{y + 2 + i};{x + 3}H")
        out.append(_clip_styled(HELP_LINES[i], inner_w - 2))
        out.append("\033[0m")

    return "".join(out)


def _clip_styled(text: str, max_cols: int) -> str:
    """Clip a help line that may carry SGR color sequences."""
    out: list[str] = []
    shown = 0
    i = 0
    while i < len(text) and shown < max_cols:
        if text[i] == "\033":
            end = text.find("m", i)
            if end != -1:
                out.append(text[i : end + 1])
                i = end + 1
                continue
        out.append(text[i])
        shown += 1
        i += 1
    return "".join(out)
