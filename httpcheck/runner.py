from __future__ import annotations

import logging
import time
from typing import Callable

from httpcheck.checks.dispatcher import dispatch
from httpcheck.checks.results import CheckSummary
from httpcheck.errors import DispatchError
from httpcheck.formatting import redact_url
from httpcheck.models import CheckConfig

logger = logging.getLogger(__name__)

Dispatcher = Callable[..., int]


class Ticker:
    """
    Fixed-period ticker: ticks fire at start + k * period.

    A wait that starts after one or more ticks have already fired returns
    immediately and the remaining missed ticks are dropped, so a slow request
    never causes a burst of back-to-back requests afterwards.
    """

    def __init__(
        self,
        period_s: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.period_s = period_s
        self._clock = clock
        self._sleep = sleep
        self._next_tick = clock() + period_s

    def wait(self) -> None:
        now = self._clock()
        if now < self._next_tick:
            self._sleep(self._next_tick - now)
            self._next_tick += self.period_s
            return

        missed = int((now - self._next_tick) // self.period_s)
        self._next_tick += (missed + 1) * self.period_s


def run_checks(
    config: CheckConfig,
    *,
    dispatcher: Dispatcher = dispatch,
    ticker_factory: Callable[[float], Ticker] = Ticker,
) -> CheckSummary:
    logger.info("Beginning check.")
    summary = CheckSummary()
    target = redact_url(config.target_url)
    method = config.request_method

    ticker = ticker_factory(config.delay_seconds) if config.delay_seconds > 0 else None

    while summary.attempted < config.count:
        try:
            status_code = dispatcher(
                method,
                config.target_url,
                config.request_body,
                timeout_s=config.request_timeout_seconds,
            )
        except DispatchError as exc:
            summary.record(False)
            logger.error("Failed to reach URL %s: %s", target, exc)
        else:
            ok = status_code == config.expected_status_code
            summary.record(ok)
            if ok:
                logger.info("Got a %s with a %s to %s", status_code, method, target)
            else:
                logger.error(
                    "Got a %s with a %s to %s (expected %s)",
                    status_code,
                    method,
                    target,
                    config.expected_status_code,
                )

        if ticker is not None:
            ticker.wait()

    return summary
