"""Watch configuration: built-in defaults, config-file defaults, validation.

An optional JSON file under the platform config directory may override the
built-in defaults for ``interval``, ``timeout``, ``buffer_size`` and
``show_lineno``. Reading is defensive: a missing or malformed file, or an
individual invalid value, falls back to the built-in default. The file is
never written.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .errors import ConfigError
from .text import TAB_STOP

logger = logging.getLogger(__name__)

APP_NAME = "gaze"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_BUFFER_SIZE = 16 * 1024 * 1024
DEFAULT_INTERVAL = 2
DEFAULT_TIMEOUT = 5
MIN_SECONDS = 1
MAX_SECONDS = 60
MIN_BUFFER_SIZE = 2
MAX_BUFFER_SIZE = 2**31 - 1

_SIZE_SUFFIXES = {"k": 1024, "m": 1024**2, "g": 1024**3}


@dataclass(frozen=True)
class WatchConfig:
    """Read-only settings for one watch session."""

    command: str
    buffer_size: int = DEFAULT_BUFFER_SIZE
    interval: int = DEFAULT_INTERVAL
    timeout: int = DEFAULT_TIMEOUT
    show_lineno: bool = False
    tab_stop: int = TAB_STOP

    def __post_init__(self) -> None:
        validate_seconds("Interval", self.interval)
        validate_seconds("Timeout", self.timeout)
        validate_buffer_size(self.buffer_size)
        if not self.command.strip():
            raise ConfigError("No command given")


def validate_seconds(label: str, value: int) -> int:
    if not MIN_SECONDS <= value <= MAX_SECONDS:
        raise ConfigError(f"{label} out of range [{MIN_SECONDS}-{MAX_SECONDS}]")
    return value


def validate_buffer_size(value: int) -> int:
    if value < MIN_BUFFER_SIZE:
        raise ConfigError("Buffer size too small")
    if value > MAX_BUFFER_SIZE:
        raise ConfigError("Buffer size too large")
    return value


def parse_seconds(label: str, text: str) -> int:
    """Parse an interval/timeout flag value given in whole seconds."""
    try:
        value = int(text, 10)
    except ValueError as exc:
        raise ConfigError(f"Invalid {label.lower()}: {text!r}") from exc
    return validate_seconds(label, value)


def parse_buffer_size(text: str) -> int:
    """Parse a byte count with an optional ``k``/``m``/``g`` suffix.

    Suffixes are case-insensitive powers of 1024: ``"64k"`` is 65536.
    """
    raw = text.strip()
    multiplier = 1
    if raw and raw[-1].lower() in _SIZE_SUFFIXES:
        multiplier = _SIZE_SUFFIXES[raw[-1].lower()]
        raw = raw[:-1]
    try:
        value = int(raw, 10)
    except ValueError as exc:
        raise ConfigError(f"Invalid buffer size: {text!r}") from exc
    return validate_buffer_size(value * multiplier)


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_int(value: object, validate) -> int | None:
    """Accept only real integers that pass ``validate``; booleans are rejected."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    try:
        return validate(value)
    except ConfigError:
        return None


def load_defaults() -> dict[str, object]:
    """Return ``WatchConfig`` keyword defaults taken from the config file.

    Only valid keys are returned; anything else is dropped with a log entry.
    """
    data = load_config()
    defaults: dict[str, object] = {}

    interval = _coerce_int(data.get("interval"), lambda v: validate_seconds("Interval", v))
    if interval is not None:
        defaults["interval"] = interval
    timeout = _coerce_int(data.get("timeout"), lambda v: validate_seconds("Timeout", v))
    if timeout is not None:
        defaults["timeout"] = timeout

    buffer_size = data.get("buffer_size")
    if isinstance(buffer_size, str):
        try:
            defaults["buffer_size"] = parse_buffer_size(buffer_size)
        except ConfigError:
            pass
    else:
        coerced = _coerce_int(buffer_size, validate_buffer_size)
        if coerced is not None:
            defaults["buffer_size"] = coerced

    show_lineno = data.get("show_lineno")
    if isinstance(show_lineno, bool):
        defaults["show_lineno"] = show_lineno

    ignored = sorted(set(data) - set(defaults))
    if ignored:
        logger.info("ignored config keys: %s", ", ".join(ignored))
    return defaults
