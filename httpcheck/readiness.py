from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

import requests

from httpcheck.config import settings
from httpcheck.errors import ReadinessError

logger = logging.getLogger(__name__)

READINESS_TIMEOUT_S = 60


class Waiter(ABC):
    @abstractmethod
    def wait_ready(self, deadline_s: float) -> None:
        """Block until the orchestrator can receive reports, or raise ReadinessError."""


class KuberhealthyWaiter(Waiter):
    """Polls the reporting URL until it answers with any HTTP response."""

    def __init__(
        self,
        reporting_url: Optional[str],
        poll_interval_s: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.reporting_url = reporting_url
        self.poll_interval_s = poll_interval_s
        self._clock = clock
        self._sleep = sleep

    def wait_ready(self, deadline_s: float) -> None:
        if not self.reporting_url:
            raise ReadinessError("KH_REPORTING_URL is not configured")

        give_up_at = self._clock() + deadline_s
        last_error: Optional[Exception] = None
        while True:
            remaining = give_up_at - self._clock()
            if remaining <= 0:
                break
            try:
                resp = requests.get(
                    self.reporting_url,
                    timeout=min(remaining, max(self.poll_interval_s, 1.0)),
                )
            except requests.RequestException as exc:
                last_error = exc
                logger.debug("Reporting endpoint not contactable yet: %s", exc)
            else:
                resp.close()
                logger.debug("Reporting endpoint answered HTTP %s", resp.status_code)
                return

            self._sleep(min(self.poll_interval_s, max(0.0, give_up_at - self._clock())))

        raise ReadinessError(
            f"reporting endpoint {self.reporting_url} not contactable within "
            f"{deadline_s}s: {last_error}"
        )


def build_waiter() -> KuberhealthyWaiter:
    return KuberhealthyWaiter(settings.KH_REPORTING_URL)
