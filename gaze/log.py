"""Logging setup.

The terminal belongs to the UI while gaze runs, so records only go to a
file, and only when one is requested with ``--log-file`` or
``GAZE_LOG_FILE``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_FILE_ENV = "GAZE_LOG_FILE"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.getLogger("gaze").addHandler(logging.NullHandler())


def resolve_log_path(cli_value: str | None) -> Path | None:
    value = cli_value or os.environ.get(LOG_FILE_ENV)
    return Path(value).expanduser() if value else None


def configure_logging(path: Path | None, level: int = logging.DEBUG) -> logging.Handler | None:
    """Attach a file handler to the ``gaze`` logger when ``path`` is set."""
    if path is None:
        return None
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("gaze")
    root.addHandler(handler)
    root.setLevel(level)
    return handler
