from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

from httpcheck.checks.results import CheckSummary

REDACTED_PASSWORD = "xxxxx"


def redact_url(url: str) -> str:
    """Replace the password in a URL's userinfo with a fixed mask; the username is kept."""
    try:
        parts = urlsplit(url)
        password = parts.password
    except ValueError:
        return url
    if password is None:
        return url

    userinfo, _, hostport = parts.netloc.rpartition("@")
    username = userinfo.partition(":")[0]
    netloc = f"{username}:{REDACTED_PASSWORD}@{hostport}"
    return urlunsplit(parts._replace(netloc=netloc))


def format_failure_detail(
    expected_status_code: int, method: str, url: str, summary: CheckSummary
) -> str:
    return (
        f"unable to retrieve a valid response (expected status: {expected_status_code}) "
        f"from {method} {redact_url(url)} "
        f"checks failed {summary.failed} out of {summary.attempted} attempts"
    )
