import unittest
from unittest.mock import Mock, patch

import requests

from httpcheck.errors import ReadinessError
from httpcheck.readiness import KuberhealthyWaiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


class KuberhealthyWaiterTests(unittest.TestCase):
    def test_returns_once_endpoint_answers(self) -> None:
        clock = FakeClock()
        waiter = KuberhealthyWaiter("http://kh.local/status", clock=clock, sleep=clock.sleep)
        answers = [requests.ConnectionError("refused"), Mock(status_code=405)]

        with patch("httpcheck.readiness.requests.get", side_effect=answers) as mock_get:
            waiter.wait_ready(60)

        self.assertEqual(mock_get.call_count, 2)
        self.assertEqual(clock.now, 1.0)

    def test_any_status_counts_as_contactable(self) -> None:
        clock = FakeClock()
        waiter = KuberhealthyWaiter("http://kh.local/status", clock=clock, sleep=clock.sleep)

        with patch("httpcheck.readiness.requests.get", return_value=Mock(status_code=500)):
            waiter.wait_ready(60)

        self.assertEqual(clock.now, 0.0)

    def test_deadline_raises_readiness_error(self) -> None:
        clock = FakeClock()
        waiter = KuberhealthyWaiter(
            "http://kh.local/status", poll_interval_s=2, clock=clock, sleep=clock.sleep
        )

        with patch(
            "httpcheck.readiness.requests.get",
            side_effect=requests.ConnectionError("refused"),
        ) as mock_get:
            with self.assertRaises(ReadinessError) as ctx:
                waiter.wait_ready(5)

        self.assertIn("refused", str(ctx.exception))
        self.assertEqual(mock_get.call_count, 3)
        self.assertEqual(clock.now, 5.0)

    def test_missing_url_raises_immediately(self) -> None:
        with patch("httpcheck.readiness.requests.get") as mock_get:
            with self.assertRaises(ReadinessError):
                KuberhealthyWaiter(None).wait_ready(60)

        mock_get.assert_not_called()


if __name__ == "__main__":
    unittest.main()
