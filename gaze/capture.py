"""Bounded execution of the watched command.

Runs the command through ``sh -c`` with stdin from ``/dev/null`` and stdout
and stderr merged into one pipe, reads at most ``buffer_size - 1`` bytes, and
bounds the read loop by a wall-clock deadline. The child is always
terminated and reaped before ``capture_command`` returns, so at most one
watched process exists at a time.
"""

from __future__ import annotations

import logging
import os
import select
import signal
import subprocess
import time
from dataclasses import dataclass

from .errors import CaptureBufferError

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = b"\n\n\t\tCOMMAND TIMED OUT"
SHELL = "/bin/sh"
KILL_GRACE_SECONDS = 0.5
READ_CHUNK = 64 * 1024


@dataclass(frozen=True)
class CaptureResult:
    """Outcome of one capture cycle.

    ``output`` is either the command's merged output (at most
    ``buffer_size - 1`` bytes) or, when ``timed_out`` is set, the fixed
    timeout message. Partial output is never returned alongside a timeout.
    """

    output: bytes
    timed_out: bool = False
    truncated: bool = False
    returncode: int | None = None
    started_at: float = 0.0
    duration: float = 0.0


def allocate_buffer(buffer_size: int) -> bytearray:
    if buffer_size < 2:
        raise ValueError("buffer_size must be at least 2")
    try:
        return bytearray(buffer_size)
    except MemoryError as exc:
        raise CaptureBufferError(f"Failed to allocate command output buffer ({buffer_size} bytes)") from exc


def timeout_payload(buffer_size: int) -> bytes:
    """Return the timeout message, cut to fit a buffer of ``buffer_size``."""
    return TIMEOUT_MESSAGE[: buffer_size - 1]


def _read_bounded(fd: int, buffer: bytearray, deadline: float) -> tuple[int, bool, bool]:
    """Fill ``buffer`` from ``fd`` until EOF, full, or ``deadline``.

    Returns ``(size, timed_out, truncated)``. One byte of capacity is always
    left unused. Each wait on the pipe is bounded by the time remaining, so a
    silent child cannot block past the deadline.
    """
    limit = len(buffer) - 1
    view = memoryview(buffer)
    size = 0
    while size < limit:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return size, True, False
        ready, _, _ = select.select([fd], [], [], remaining)
        if not ready:
            return size, True, False
        count = os.readv(fd, [view[size : min(limit, size + READ_CHUNK)]])
        if count == 0:
            return size, False, False
        size += count
    return size, False, True


def _signal_group(pgid: int, signum: int) -> bool:
    """Send ``signum`` to a process group; ``False`` once the group is gone."""
    try:
        os.killpg(pgid, signum)
    except (ProcessLookupError, PermissionError):
        return False
    return True


def _terminate(proc: subprocess.Popen) -> int | None:
    """Signal the child's whole process group and reap the child.

    The group is signaled even after the shell exits: background jobs it
    started stay in the group and can still hold the pipe open.
    """
    pgid = proc.pid
    if not _signal_group(pgid, signal.SIGTERM):
        return proc.wait()
    try:
        returncode = proc.wait(timeout=KILL_GRACE_SECONDS)
    except subprocess.TimeoutExpired:
        logger.debug("pid %d ignored SIGTERM, sending SIGKILL", pgid)
        _signal_group(pgid, signal.SIGKILL)
        return proc.wait()

    deadline = time.monotonic() + KILL_GRACE_SECONDS
    while _signal_group(pgid, 0):
        if time.monotonic() >= deadline:
            logger.debug("process group %d outlived SIGTERM, sending SIGKILL", pgid)
            _signal_group(pgid, signal.SIGKILL)
            break
        time.sleep(0.01)
    return returncode


def capture_command(command: str, buffer_size: int, timeout: float) -> CaptureResult:
    """Run ``command`` once and return its bounded, merged output.

    The buffer is allocated before the child is spawned; allocation failure
    raises ``CaptureBufferError``. When ``timeout`` seconds pass before the
    output ends, the result holds ``TIMEOUT_MESSAGE`` instead of whatever was
    read. A shell that cannot be started is reported as output.
    """
    buffer = allocate_buffer(buffer_size)
    started_at = time.time()
    started = time.monotonic()
    try:
        proc = subprocess.Popen(
            [SHELL, "-c", command],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            start_new_session=True,
        )
    except OSError as exc:
        logger.error("cannot start %s: %s", SHELL, exc)
        message = f"{SHELL}: {exc.strerror or exc}".encode("utf-8", errors="replace")
        return CaptureResult(output=message[: buffer_size - 1], started_at=started_at)

    assert proc.stdout is not None
    timed_out = False
    truncated = False
    size = 0
    try:
        size, timed_out, truncated = _read_bounded(proc.stdout.fileno(), buffer, started + timeout)
    finally:
        proc.stdout.close()
        returncode = _terminate(proc)

    duration = time.monotonic() - started
    if timed_out:
        logger.warning("command timed out after %.1fs: %s", duration, command)
        output = timeout_payload(buffer_size)
    else:
        output = bytes(buffer[:size])
        logger.debug(
            "captured %d bytes in %.3fs (exit %s%s)",
            size,
            duration,
            returncode,
            ", truncated" if truncated else "",
        )
    return CaptureResult(
        output=output,
        timed_out=timed_out,
        truncated=truncated,
        returncode=returncode,
        started_at=started_at,
        duration=duration,
    )
