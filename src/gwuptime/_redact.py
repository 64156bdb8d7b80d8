"""Log hygiene for Gist requests.

Requests carry a GitHub token in their headers and transition logs can run
to megabytes, so neither goes to the logs as-is.
"""

from __future__ import annotations

from collections.abc import Mapping

_SENSITIVE_HEADERS: frozenset[str] = frozenset({"authorization", "cookie", "x-github-token"})


def redact_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Copy of *headers* with credential values replaced."""
    if not headers:
        return {}
    return {key: "<redacted>" if key.lower() in _SENSITIVE_HEADERS else value for key, value in headers.items()}


def shorten(text: str, limit: int = 200) -> str:
    """Cut *text* to *limit* characters, noting how many were dropped."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}…<{len(text) - limit} more chars>"
