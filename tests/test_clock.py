from __future__ import annotations

import unittest

from gaze.clock import RefreshClock


class RefreshClockTests(unittest.TestCase):
    def test_first_check_is_due(self) -> None:
        self.assertTrue(RefreshClock(interval=2).is_due())

    def test_due_after_interval_elapses(self) -> None:
        clock = RefreshClock(interval=2)
        clock.mark(now=10.0)

        self.assertFalse(clock.is_due(now=11.9))
        self.assertTrue(clock.is_due(now=12.0))

    def test_force_makes_next_check_due(self) -> None:
        clock = RefreshClock(interval=60)
        clock.mark(now=0.0)
        clock.force()

        self.assertTrue(clock.is_due(now=1.0))

    def test_injected_time_source(self) -> None:
        ticks = iter([5.0, 6.0, 7.5])
        clock = RefreshClock(interval=2, now=lambda: next(ticks))
        clock.mark()

        self.assertFalse(clock.is_due())
        self.assertTrue(clock.is_due())


if __name__ == "__main__":
    unittest.main()
