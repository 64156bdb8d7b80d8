"""Wall-clock timestamp codec.

Every timestamp gwuptime persists is a *civil* timestamp: the calendar date
and time of day in one fixed region (``Europe/Lisbon`` by default), rendered
as ``YYYY-MM-DDTHH:MM:SS`` with no UTC offset.  :class:`WallClockCodec` is the
single place that converts between those strings and aware instants, so that
ordering and formatting stay consistent across the recorder, the carry store
and the reconstructor.

Known edge case: around a daylight-saving transition of the region the
mapping is not bijective.  The repeated hour in autumn decodes to its first
occurrence (``fold=0``) and the skipped hour in spring decodes to an instant
that re-encodes one hour later.  Round trips are exact everywhere else.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from gwuptime._constants import CIVIL_FORMAT, CIVIL_PATTERN, DEFAULT_TIME_ZONE, DISPLAY_FORMAT
from gwuptime.exceptions import TimestampParseError, UptimeConfigError


def utcnow() -> datetime:
    return datetime.now(UTC)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def load_zone(name: str) -> ZoneInfo:
    """Resolve an IANA zone name, raising :class:`UptimeConfigError` when unknown."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise UptimeConfigError(f"Unknown time zone: {name!r}") from exc


def round_to_interval(instant: datetime, minutes: int) -> datetime:
    """Round *instant* to the nearest multiple of *minutes* (halves round up).

    Poll ticks fire a few seconds late; aligning them to the poll interval
    keeps consecutive transitions an exact number of intervals apart.
    """
    if minutes <= 0:
        raise ValueError(f"minutes must be positive, got {minutes}")
    interval = minutes * 60
    seconds = ensure_aware(instant).timestamp()
    rounded = math.floor(seconds / interval + 0.5) * interval
    return datetime.fromtimestamp(rounded, tz=UTC)


class WallClockCodec:
    """Encode/decode civil timestamps for one fixed region."""

    def __init__(self, time_zone: str = DEFAULT_TIME_ZONE) -> None:
        self._zone_name = time_zone
        self._zone = load_zone(time_zone)

    @property
    def zone(self) -> ZoneInfo:
        return self._zone

    @property
    def time_zone(self) -> str:
        return self._zone_name

    def encode(self, instant: datetime) -> str:
        """Render *instant* as a civil timestamp (second precision, no offset)."""
        local = ensure_aware(instant).astimezone(self._zone)
        return local.strftime(CIVIL_FORMAT)

    def decode(self, text: str) -> datetime:
        """Parse a civil timestamp into an aware UTC instant.

        Strings of the exact civil shape are read as calendar fields of the
        region.  Anything else goes through generic ISO-8601 parsing; a naive
        result of that fallback is also placed in the region.
        """
        if not isinstance(text, str):
            raise TimestampParseError(f"Timestamp must be a string, got {type(text).__name__}", value=text)

        match = CIVIL_PATTERN.match(text)
        if match:
            year, month, day, hour, minute, second = (int(part) for part in match.groups())
            try:
                local = datetime(year, month, day, hour, minute, second, tzinfo=self._zone)
            except ValueError as exc:
                raise TimestampParseError(f"Invalid civil timestamp {text!r}: {exc}", value=text) from exc
            return local.astimezone(UTC)

        try:
            parsed = datetime.fromisoformat(text.strip())
        except ValueError as exc:
            raise TimestampParseError(f"Unrecognised timestamp {text!r}", value=text) from exc
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=self._zone)
        return parsed.astimezone(UTC)

    def format_display(self, instant: datetime) -> str:
        """Human-facing ``DD-MM-YYYY HH:MM`` rendering in the region."""
        return ensure_aware(instant).astimezone(self._zone).strftime(DISPLAY_FORMAT)
