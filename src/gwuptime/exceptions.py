"""Custom exception hierarchy for gwuptime."""

from __future__ import annotations


class UptimeError(Exception):
    """Base exception for all gwuptime errors."""


class UptimeConfigError(UptimeError):
    """Invalid or missing configuration (storage backend, credentials, time zone)."""


class UptimeStorageError(UptimeError):
    """Text-blob storage failure (network, non-2xx, unreadable payload)."""

    def __init__(
        self,
        message: str,
        *,
        resource: str = "",
        status_code: int | None = None,
    ) -> None:
        self.resource = resource
        self.status_code = status_code
        super().__init__(message)


class TimestampParseError(UptimeError, ValueError):
    """A civil timestamp could not be decoded.

    Raised by the codec; reconstruction and log readers catch it, log the
    offending value and carry on with the remaining lines.
    """

    def __init__(self, message: str, *, value: object = None) -> None:
        self.value = value
        super().__init__(message)
