from __future__ import annotations

import math
import struct

from httpcheck.checks.results import CheckSummary, Verdict
from httpcheck.formatting import format_failure_detail
from httpcheck.models import CheckConfig


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def required_passes(passing_percent: int, count: int) -> int:
    """
    Minimum number of matching responses for a healthy run.

    The product is computed in single precision and truncated toward zero,
    so some percent/count pairs require one pass fewer (or more) than exact
    arithmetic would. Existing thresholds depend on this; keep it.
    """
    fraction = _f32(_f32(passing_percent) / _f32(100))
    score = _f32(fraction * _f32(count))
    return math.trunc(score)


def decide(summary: CheckSummary, config: CheckConfig) -> Verdict:
    required = required_passes(config.passing_percent, config.count)
    if summary.passed >= required:
        return Verdict(ok=True)
    return Verdict(
        ok=False,
        detail=format_failure_detail(
            config.expected_status_code,
            config.request_method,
            config.target_url,
            summary,
        ),
    )
