"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, cursor/editing keys, and function keys.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"P": "F1",
}

_CSI_TILDE_KEYS = {
    "1": "HOME",
    "4": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "7": "HOME",
    "8": "END",
    "11": "F1",
    "15": "F5",
}

_SS3_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"P": "F1",
}

# Linux console reports F1-F5 as ESC [ [ A..E.
_LINUX_CONSOLE_FKEYS = {
    b"A": "F1",
    b"E": "F5",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_csi(fd: int) -> str:
    """Decode the remainder of an ``ESC [`` sequence."""
    first = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if first is None:
        return "ESC"
    if first == b"[":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        return _LINUX_CONSOLE_FKEYS.get(final, "UNKNOWN") if final is not None else "ESC"

    params: list[bytes] = []
    part = first
    while b"0" <= part <= b"?":
        params.append(part)
        if len(params) > 16:
            return "UNKNOWN"
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"

    # Modifier suffixes such as "1;5" are folded onto the base key.
    param_text = b"".join(params).decode("ascii", errors="replace").split(";")[0]
    if part == b"~":
        return _CSI_TILDE_KEYS.get(param_text, "UNKNOWN")
    return _CSI_FINAL_KEYS.get(part, "UNKNOWN")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    Returns ``""`` when nothing arrives within ``timeout_ms``. Printable input
    is returned as the character itself; named keys use upper-case tokens
    (``UP``, ``PAGE_DOWN``, ``F5``, ``BACKSPACE``, ``ESC`` ...). Escape
    sequences that are not recognized decode to ``UNKNOWN``.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in {b"\x08", b"\x7f"}:
        return "BACKSPACE"
    if ch == b"\x03":
        return "CTRL_C"
    if ch == b"\t":
        return "TAB"
    if ch == b"\r":
        return "ENTER"
    if ch == b"\n":
        return "ENTER"

    if ch != b"\x1b":
        return _decode_utf8(fd, ch)

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        return _SS3_KEYS.get(final, "UNKNOWN")
    _PENDING_BYTES.append(seq)
    return "ESC"


def _decode_utf8(fd: int, lead: bytes) -> str:
    """Collect continuation bytes for a multi-byte UTF-8 character."""
    first = lead[0]
    if first < 0x80:
        return lead.decode("ascii")
    if first >= 0xF0:
        expected = 3
    elif first >= 0xE0:
        expected = 2
    elif first >= 0xC0:
        expected = 1
    else:
        expected = 0
    data = lead
    for _ in range(expected):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")
