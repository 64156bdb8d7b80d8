"""Calendar-month period keys.

Carry snapshots and transition logs are sharded per month of the fixed
region.  A period key is ``"YYYY-MM"``; its span runs from local midnight of
the first day to local midnight of the first day of the next month.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, tzinfo

from gwuptime._constants import PERIOD_PATTERN
from gwuptime.timestamps import ensure_aware


def period_key(instant: datetime, zone: tzinfo) -> str:
    local = ensure_aware(instant).astimezone(zone)
    return f"{local.year:04d}-{local.month:02d}"


def parse_period(key: str) -> tuple[int, int]:
    match = PERIOD_PATTERN.match(key)
    if not match:
        raise ValueError(f"Invalid period key: {key!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid period month in {key!r}")
    return year, month


def _next_month(year: int, month: int) -> tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def period_start(key: str, zone: tzinfo) -> datetime:
    """First instant of the period, as an aware UTC datetime."""
    year, month = parse_period(key)
    return datetime(year, month, 1, tzinfo=zone).astimezone(UTC)


def period_bounds(key: str, zone: tzinfo) -> tuple[datetime, datetime]:
    """Return ``(start, end)`` of the period; *end* is the next period's start."""
    year, month = parse_period(key)
    next_year, next_month = _next_month(year, month)
    start = datetime(year, month, 1, tzinfo=zone).astimezone(UTC)
    end = datetime(next_year, next_month, 1, tzinfo=zone).astimezone(UTC)
    return start, end


def iter_periods(start: datetime, end: datetime, zone: tzinfo) -> Iterator[str]:
    """Yield every period key whose span intersects ``[start, end]``, oldest first."""
    start_key = period_key(start, zone)
    end_key = period_key(end, zone)
    year, month = parse_period(start_key)
    last = parse_period(end_key)
    while (year, month) <= last:
        yield f"{year:04d}-{month:02d}"
        year, month = _next_month(year, month)


def periods_between(start: datetime, end: datetime, zone: tzinfo) -> list[str]:
    return list(iter_periods(start, end, zone))
