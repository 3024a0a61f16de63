from __future__ import annotations

import logging
import sys
from typing import Callable, Mapping, Optional

from httpcheck.checks.dispatcher import dispatch
from httpcheck.config import load_check_config, settings
from httpcheck.errors import ConfigError, ReadinessError, SinkError, VerdictError
from httpcheck.readiness import READINESS_TIMEOUT_S, Waiter, build_waiter
from httpcheck.reporter import Reporter, build_reporter
from httpcheck.runner import Dispatcher, Ticker, run_checks
from httpcheck.verdict import decide

logger = logging.getLogger(__name__)


def _report_failure(reporter: Reporter, err: Exception) -> None:
    logger.error("%s", err)
    reporter.report_failure([str(err)])
    logger.info("Reported failure to Kuberhealthy")


def execute(
    environ: Optional[Mapping[str, str]],
    waiter: Waiter,
    reporter: Reporter,
    *,
    dispatcher: Dispatcher = dispatch,
    ticker_factory: Callable[[float], Ticker] = Ticker,
) -> bool:
    """
    Run one complete check and report the verdict exactly once.

    Returns True when success was reported and False when failure was.
    SinkError from the reporter propagates to the caller.
    """
    try:
        cfg = load_check_config(environ)

        try:
            waiter.wait_ready(READINESS_TIMEOUT_S)
        except ReadinessError as exc:
            logger.error(
                "Error waiting for kuberhealthy endpoint to be contactable by checker pod: %s",
                exc,
            )

        logger.info(
            "Looking for at least %s percent of %s checks to pass",
            cfg.passing_percent,
            cfg.count,
        )
        summary = run_checks(cfg, dispatcher=dispatcher, ticker_factory=ticker_factory)
        logger.info("%s checks ran", summary.attempted)
        logger.info("%s checks passed", summary.passed)
        logger.info("%s checks failed", summary.failed)

        verdict = decide(summary, cfg)
        if not verdict.ok:
            raise VerdictError(verdict.detail)
    except (ConfigError, VerdictError) as exc:
        _report_failure(reporter, exc)
        return False

    reporter.report_success()
    logger.info("Successfully reported to Kuberhealthy")
    return True


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    try:
        execute(None, build_waiter(), build_reporter())
    except SinkError as exc:
        logger.critical("error when reporting to kuberhealthy: %s", exc)
        sys.exit(1)
    # Failure is communicated through the reporting endpoint, not the exit code.
    sys.exit(0)


if __name__ == "__main__":
    main()
