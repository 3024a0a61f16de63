from __future__ import annotations

import os
import re
from typing import Mapping

from dotenv import load_dotenv
from pydantic import ValidationError

from httpcheck.errors import ConfigError
from httpcheck.models import CheckConfig, DEFAULT_EXPECTED_STATUS_CODE, DEFAULT_PASSING_PERCENT

load_dotenv()

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MAX = 2**63 - 1
_INT64_MIN = -(2**63)

# CheckConfig field -> environment variable it is read from
ENV_NAMES: dict[str, str] = {
    "target_url": "CHECK_URL",
    "count": "COUNT",
    "delay_seconds": "SECONDS",
    "passing_percent": "PASSING_PERCENT",
    "request_method": "REQUEST_TYPE",
    "request_body": "REQUEST_BODY",
    "expected_status_code": "EXPECTED_STATUS_CODE",
    "request_timeout_seconds": "REQUEST_TIMEOUT_SECONDS",
}

_INT_FIELDS = ("count", "delay_seconds", "passing_percent", "expected_status_code")


class Settings:
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    KH_REPORTING_URL: str = os.getenv("KH_REPORTING_URL")
    KH_RUN_UUID: str = os.getenv("KH_RUN_UUID")
    KH_REPORT_TIMEOUT_SECONDS: float = float(
        os.getenv("KH_REPORT_TIMEOUT_SECONDS", "10")
    )


settings = Settings()


def _parse_int(env_name: str, raw: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise ConfigError(f"invalid integer for {env_name}: {raw!r}")
    # Same range as a 64-bit int; checked on length first so int() never sees huge input.
    if len(raw.lstrip("+-").lstrip("0")) > len(str(_INT64_MAX)):
        raise ConfigError(f"invalid integer for {env_name}: value out of range")
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ConfigError(f"invalid integer for {env_name}: value out of range")
    return value


def load_check_config(environ: Mapping[str, str] | None = None) -> CheckConfig:
    """
    Build a CheckConfig from environment-style string values.

    Unset and empty values both fall back to the defaults. A passing percent
    or expected status code of 0 is treated as unset.
    """
    env = os.environ if environ is None else environ

    url = env.get("CHECK_URL") or ""
    if not url:
        raise ConfigError("missing required URL: set the CHECK_URL environment variable")
    if not url.startswith("http"):
        raise ConfigError("unsupported protocol in CHECK_URL (expected http or https)")

    values: dict[str, object] = {"target_url": url}
    for field in _INT_FIELDS:
        raw = env.get(ENV_NAMES[field]) or ""
        if raw:
            values[field] = _parse_int(ENV_NAMES[field], raw)

    for field in ("request_method", "request_body"):
        raw = env.get(ENV_NAMES[field]) or ""
        if raw:
            values[field] = raw

    raw_timeout = env.get("REQUEST_TIMEOUT_SECONDS") or ""
    if raw_timeout:
        try:
            values["request_timeout_seconds"] = float(raw_timeout)
        except ValueError as exc:
            raise ConfigError(
                f"invalid number for REQUEST_TIMEOUT_SECONDS: {raw_timeout!r}"
            ) from exc

    if values.get("passing_percent") == 0:
        values["passing_percent"] = DEFAULT_PASSING_PERCENT
    if values.get("expected_status_code") == 0:
        values["expected_status_code"] = DEFAULT_EXPECTED_STATUS_CODE

    try:
        return CheckConfig(**values)
    except ValidationError as exc:
        problems = []
        for err in exc.errors():
            field = str(err["loc"][0]) if err["loc"] else "config"
            problems.append(f"{ENV_NAMES.get(field, field)}: {err['msg']}")
        raise ConfigError("invalid configuration: " + "; ".join(problems)) from exc
