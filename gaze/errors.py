"""Error taxonomy for gaze.

Fatal errors unwind to the CLI exit path after the terminal is restored.
Command timeouts and child failures are content, not errors: they reach the
user through the viewport.
"""

from __future__ import annotations


class GazeError(Exception):
    """Base class for errors that terminate the program."""


class ConfigError(GazeError):
    """Invalid configuration value from flags or the config file."""


class CaptureBufferError(GazeError):
    """The capture buffer could not be allocated."""


class TerminalError(GazeError):
    """Terminal setup or teardown failed."""
