"""Command-line front door for gaze.

Parses options and the watched command, merges config-file defaults, and
dispatches into the interactive watch runtime. This is the single exit path
for fatal errors: they are reported only after the terminal is restored.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence

from . import config as config_mod
from .errors import ConfigError, GazeError
from .log import configure_logging, resolve_log_path
from .runtime import run_watch


def _argparse_type(parse: Callable[[str], int]) -> Callable[[str], int]:
    """Adapt a ``ConfigError``-raising parser into an argparse type."""

    def convert(value: str) -> int:
        try:
            return parse(value)
        except ConfigError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc

    return convert


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gaze",
        description="Run a command periodically and show its output in a scrollable view.",
        epilog="While running press F1 or '?' for help.",
    )
    parser.add_argument("-l", dest="show_lineno", action="store_true", default=None, help="Show line numbers.")
    parser.add_argument(
        "-n",
        dest="interval",
        metavar="SECONDS",
        type=_argparse_type(lambda v: config_mod.parse_seconds("Interval", v)),
        default=None,
        help=f"Seconds between runs [1-60] (default: {config_mod.DEFAULT_INTERVAL}).",
    )
    parser.add_argument(
        "-t",
        dest="timeout",
        metavar="SECONDS",
        type=_argparse_type(lambda v: config_mod.parse_seconds("Timeout", v)),
        default=None,
        help=f"Command timeout [1-60] (default: {config_mod.DEFAULT_TIMEOUT}).",
    )
    parser.add_argument(
        "-b",
        dest="buffer_size",
        metavar="SIZE",
        type=_argparse_type(config_mod.parse_buffer_size),
        default=None,
        help="Output buffer size in bytes, optional k/m/g suffix (default: 16m).",
    )
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Write debug log to PATH.")
    parser.add_argument("command", nargs=argparse.REMAINDER, help="Command to run through sh -c.")
    return parser


def build_config(args: argparse.Namespace) -> config_mod.WatchConfig:
    """Merge config-file defaults with explicit flags into a ``WatchConfig``."""
    settings = config_mod.load_defaults()
    for key in ("show_lineno", "interval", "timeout", "buffer_size"):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value
    return config_mod.WatchConfig(command=" ".join(args.command), **settings)


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and run the watch screen.

    Usage errors exit with status 2, fatal runtime errors with status 1, and
    a quit key with status 0.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.error("a command is required")

    configure_logging(resolve_log_path(args.log_file))
    try:
        watch_config = build_config(args)
    except ConfigError as exc:
        parser.error(str(exc))

    try:
        run_watch(watch_config)
    except GazeError as exc:
        raise SystemExit(f"gaze: {exc}") from exc


if __name__ == "__main__":
    main()
