"""CLI argument handling and exit-status tests.

Verifies how ``gaze.cli.main`` merges flags with config-file defaults and
how usage and runtime failures are reported.
"""

from __future__ import annotations

import contextlib
import io
import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from gaze import cli
from gaze.errors import TerminalError
from gaze.log import LOG_FILE_ENV, configure_logging, resolve_log_path


class CliConfigTests(unittest.TestCase):
    def _run(self, argv: list[str], defaults: dict[str, object] | None = None):
        with mock.patch("gaze.cli.config_mod.load_defaults", return_value=dict(defaults or {})), mock.patch(
            "gaze.cli.run_watch"
        ) as run_watch, mock.patch("gaze.cli.configure_logging"):
            cli.main(argv)
        run_watch.assert_called_once()
        return run_watch.call_args.args[0]

    def test_command_words_are_joined(self) -> None:
        watch = self._run(["ls", "-l", "/tmp"])

        self.assertEqual(watch.command, "ls -l /tmp")
        self.assertEqual(watch.interval, 2)

    def test_flags_are_parsed(self) -> None:
        watch = self._run(["-l", "-n", "3", "-t", "9", "-b", "4k", "df", "-h"])

        self.assertTrue(watch.show_lineno)
        self.assertEqual((watch.interval, watch.timeout, watch.buffer_size), (3, 9, 4096))
        self.assertEqual(watch.command, "df -h")

    def test_flags_override_config_file_defaults(self) -> None:
        watch = self._run(["-n", "7", "date"], defaults={"interval": 30, "timeout": 20, "show_lineno": True})

        self.assertEqual(watch.interval, 7)
        self.assertEqual(watch.timeout, 20)
        self.assertTrue(watch.show_lineno)


class CliExitStatusTests(unittest.TestCase):
    def _exit_code(self, argv: list[str]) -> int | str | None:
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), mock.patch("gaze.cli.run_watch") as run_watch, mock.patch(
            "gaze.cli.config_mod.load_defaults", return_value={}
        ):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(argv)
        run_watch.assert_not_called()
        return ctx.exception.code

    def test_missing_command_is_a_usage_error(self) -> None:
        self.assertEqual(self._exit_code([]), 2)

    def test_interval_out_of_range_is_a_usage_error(self) -> None:
        self.assertEqual(self._exit_code(["-n", "0", "date"]), 2)
        self.assertEqual(self._exit_code(["-n", "61", "date"]), 2)

    def test_bad_buffer_size_is_a_usage_error(self) -> None:
        self.assertEqual(self._exit_code(["-b", "1", "date"]), 2)
        self.assertEqual(self._exit_code(["-b", "lots", "date"]), 2)

    def test_runtime_error_exits_with_message(self) -> None:
        with mock.patch("gaze.cli.config_mod.load_defaults", return_value={}), mock.patch(
            "gaze.cli.run_watch", side_effect=TerminalError("gaze needs an interactive terminal")
        ):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["date"])

        self.assertEqual(ctx.exception.code, "gaze: gaze needs an interactive terminal")


class LogSetupTests(unittest.TestCase):
    def test_log_path_prefers_flag_then_environment(self) -> None:
        with mock.patch.dict("os.environ", {LOG_FILE_ENV: "/tmp/from-env.log"}):
            self.assertEqual(resolve_log_path("/tmp/flag.log"), Path("/tmp/flag.log"))
            self.assertEqual(resolve_log_path(None), Path("/tmp/from-env.log"))
        with mock.patch.dict("os.environ", {}, clear=True):
            self.assertIsNone(resolve_log_path(None))

    def test_configure_logging_writes_records_to_file(self) -> None:
        self.assertIsNone(configure_logging(None))
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "gaze.log"
            handler = configure_logging(path)
            try:
                logging.getLogger("gaze.capture").debug("hello log")
                handler.flush()
                self.assertIn("gaze.capture - DEBUG - hello log", path.read_text(encoding="utf-8"))
            finally:
                logger = logging.getLogger("gaze")
                logger.removeHandler(handler)
                logger.setLevel(logging.NOTSET)
                handler.close()


if __name__ == "__main__":
    unittest.main()
