from __future__ import annotations

import requests

from httpcheck.errors import DispatchError
from httpcheck.formatting import redact_url
from httpcheck.models import DEFAULT_REQUEST_TIMEOUT_SECONDS

BODY_METHODS = ("POST", "PUT", "DELETE", "PATCH")


def _describe(exc: Exception, url: str, redacted: str) -> str:
    # requests echoes the raw URL in some messages (MissingSchema, InvalidURL)
    text = f"{exc.__class__.__name__}: {exc}"
    if url != redacted:
        text = text.replace(url, redacted)
    return text


def dispatch(
    method: str,
    url: str,
    body: str,
    timeout_s: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
) -> int:
    """
    Perform exactly one HTTP request and return its status code.

    GET requests never carry a body. Methods other than GET, POST, PUT,
    DELETE and PATCH are rejected before any network I/O.
    """
    redacted = redact_url(url)
    if method != "GET" and method not in BODY_METHODS:
        raise DispatchError(
            f"error occurred while calling {redacted}: unsupported method {method!r}"
        )

    try:
        if method == "GET":
            resp = requests.get(url, timeout=timeout_s)
        else:
            resp = requests.request(
                method, url, data=body.encode("utf-8", "surrogateescape"), timeout=timeout_s
            )
    except requests.RequestException as exc:
        raise DispatchError(
            f"error occurred while calling {redacted}: {_describe(exc, url, redacted)}"
        ) from exc

    try:
        return resp.status_code
    finally:
        resp.close()
