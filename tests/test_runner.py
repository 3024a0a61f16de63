import time
import unittest
from unittest.mock import Mock

from httpcheck.checks.results import CheckSummary
from httpcheck.errors import DispatchError
from httpcheck.models import CheckConfig
from httpcheck.runner import Ticker, run_checks


def _dispatcher(*outcomes):
    """Fake dispatcher returning (or raising) the given outcomes in order."""
    return Mock(side_effect=list(outcomes))


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class RunChecksTests(unittest.TestCase):
    def test_zero_count_makes_no_requests(self) -> None:
        dispatcher = _dispatcher()
        summary = run_checks(CheckConfig(target_url="http://x", count=0), dispatcher=dispatcher)

        self.assertEqual(summary, CheckSummary(0, 0, 0))
        dispatcher.assert_not_called()

    def test_counts_passes_mismatches_and_errors(self) -> None:
        dispatcher = _dispatcher(200, 500, DispatchError("refused"), 200)
        cfg = CheckConfig(target_url="http://x", count=4)

        summary = run_checks(cfg, dispatcher=dispatcher)

        self.assertEqual(summary, CheckSummary(attempted=4, passed=2, failed=2))
        self.assertEqual(summary.attempted, summary.passed + summary.failed)

    def test_dispatch_arguments_come_from_config(self) -> None:
        dispatcher = _dispatcher(201)
        cfg = CheckConfig(
            target_url="http://x/items",
            count=1,
            request_method="POST",
            request_body='{"k": "v"}',
            expected_status_code=201,
            request_timeout_seconds=4,
        )

        summary = run_checks(cfg, dispatcher=dispatcher)

        dispatcher.assert_called_once_with("POST", "http://x/items", '{"k": "v"}', timeout_s=4)
        self.assertEqual(summary.passed, 1)

    def test_unsupported_method_counted_as_failures(self) -> None:
        cfg = CheckConfig(target_url="http://127.0.0.1:9", count=3, request_method="HEAD")

        summary = run_checks(cfg)

        self.assertEqual(summary, CheckSummary(attempted=3, passed=0, failed=3))

    def test_no_ticker_without_delay(self) -> None:
        ticker_factory = Mock()
        run_checks(
            CheckConfig(target_url="http://x", count=2),
            dispatcher=_dispatcher(200, 200),
            ticker_factory=ticker_factory,
        )
        ticker_factory.assert_not_called()

    def test_ticker_waited_after_every_request_including_last(self) -> None:
        ticker = Mock()
        ticker_factory = Mock(return_value=ticker)

        run_checks(
            CheckConfig(target_url="http://x", count=3, delay_seconds=5),
            dispatcher=_dispatcher(200, DispatchError("boom"), 404),
            ticker_factory=ticker_factory,
        )

        ticker_factory.assert_called_once_with(5)
        self.assertEqual(ticker.wait.call_count, 3)

    def test_pacing_applies_real_delay(self) -> None:
        start = time.monotonic()
        summary = run_checks(
            CheckConfig(target_url="http://x", count=2, delay_seconds=1),
            dispatcher=_dispatcher(200, 200),
        )
        elapsed = time.monotonic() - start

        self.assertEqual(summary.passed, 2)
        self.assertGreaterEqual(elapsed, 1.9)


class TickerTests(unittest.TestCase):
    def test_waits_until_next_tick(self) -> None:
        clock = FakeClock()
        ticker = Ticker(5, clock=clock, sleep=clock.sleep)

        clock.now += 1.5
        ticker.wait()
        ticker.wait()

        self.assertEqual(clock.sleeps, [3.5, 5.0])
        self.assertEqual(clock.now, 110.0)

    def test_late_wait_returns_immediately_and_drops_missed_ticks(self) -> None:
        clock = FakeClock()
        ticker = Ticker(5, clock=clock, sleep=clock.sleep)

        clock.now += 12  # ticks at 105 and 110 have passed
        ticker.wait()
        self.assertEqual(clock.sleeps, [])

        ticker.wait()
        self.assertEqual(clock.sleeps, [3.0])
        self.assertEqual(clock.now, 115.0)


if __name__ == "__main__":
    unittest.main()
