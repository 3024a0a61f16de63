from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import requests

from httpcheck.config import settings
from httpcheck.errors import SinkError

logger = logging.getLogger(__name__)

RUN_UUID_HEADER = "kh-run-uuid"


class Reporter(ABC):
    @abstractmethod
    def report_success(self) -> None:
        """Tell the orchestrator the check passed."""

    @abstractmethod
    def report_failure(self, messages: list[str]) -> None:
        """Tell the orchestrator the check failed, with error details."""


@dataclass
class KuberhealthyConfig:
    reporting_url: Optional[str]
    run_uuid: Optional[str] = None
    timeout_s: float = 10


class KuberhealthyReporter(Reporter):
    def __init__(self, cfg: KuberhealthyConfig) -> None:
        self.cfg = cfg

    def _post(self, ok: bool, errors: list[str]) -> None:
        if not self.cfg.reporting_url:
            raise SinkError("KH_REPORTING_URL is not configured")

        headers = {}
        if self.cfg.run_uuid:
            headers[RUN_UUID_HEADER] = self.cfg.run_uuid
        try:
            resp = requests.post(
                self.cfg.reporting_url,
                json={"OK": ok, "Errors": errors},
                headers=headers,
                timeout=self.cfg.timeout_s,
            )
        except requests.RequestException as exc:
            raise SinkError(
                f"failed to report to {self.cfg.reporting_url}: {exc.__class__.__name__}: {exc}"
            ) from exc

        if not 200 <= resp.status_code < 300:
            snippet = resp.text[:240].replace("\n", "\\n")
            raise SinkError(
                f"reporting endpoint returned HTTP {resp.status_code}: {snippet}"
            )

    def report_success(self) -> None:
        self._post(True, [])

    def report_failure(self, messages: list[str]) -> None:
        self._post(False, list(messages))


def build_reporter() -> KuberhealthyReporter:
    return KuberhealthyReporter(
        KuberhealthyConfig(
            reporting_url=settings.KH_REPORTING_URL,
            run_uuid=settings.KH_RUN_UUID,
            timeout_s=settings.KH_REPORT_TIMEOUT_SECONDS,
        )
    )
