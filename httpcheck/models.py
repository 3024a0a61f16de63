from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_COUNT = 0
DEFAULT_SECONDS = 0
DEFAULT_PASSING_PERCENT = 100
DEFAULT_REQUEST_TYPE = "GET"
DEFAULT_REQUEST_BODY = "{}"
DEFAULT_EXPECTED_STATUS_CODE = 200
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0


class CheckConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_url: str = Field(..., min_length=1)
    count: int = Field(default=DEFAULT_COUNT, ge=0)
    delay_seconds: int = Field(default=DEFAULT_SECONDS, ge=0)
    passing_percent: int = DEFAULT_PASSING_PERCENT
    # Checked by the dispatcher, not here.
    request_method: str = DEFAULT_REQUEST_TYPE
    request_body: str = DEFAULT_REQUEST_BODY
    expected_status_code: int = DEFAULT_EXPECTED_STATUS_CODE
    request_timeout_seconds: float = Field(default=DEFAULT_REQUEST_TIMEOUT_SECONDS, gt=0)
