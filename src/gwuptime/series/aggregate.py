"""Exact uptime statistics integrated from intervals."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta

from gwuptime.models.events import TransitionEvent
from gwuptime.models.series import StateInterval, UptimeStats
from gwuptime.timestamps import ensure_aware

_ZERO = timedelta(0)


def aggregate(intervals: Sequence[StateInterval], start: datetime, end: datetime) -> UptimeStats:
    """Sum interval durations by state.

    Works on the intervals directly rather than on a raster, so there is no
    rounding loss: ``up_fraction`` is ``up / (end - start)`` exactly.
    """
    start = ensure_aware(start)
    end = ensure_aware(end)
    total = end - start
    if total <= _ZERO:
        return UptimeStats(up_duration=_ZERO, down_duration=_ZERO, up_fraction=0.0)

    up = _ZERO
    for interval in intervals:
        if interval.state != 1:
            continue
        clipped = min(interval.end, end) - max(interval.start, start)
        if clipped > _ZERO:
            up += clipped

    return UptimeStats(up_duration=up, down_duration=total - up, up_fraction=up / total)


def outages(intervals: Sequence[StateInterval]) -> list[StateInterval]:
    """Down periods, with back-to-back down intervals merged."""
    merged: list[StateInterval] = []
    for interval in intervals:
        if interval.state != 0:
            continue
        if merged and merged[-1].end == interval.start:
            merged[-1] = StateInterval(start=merged[-1].start, end=interval.end, state=0)
        else:
            merged.append(interval)
    return merged


def recent_transitions(
    events: Sequence[TransitionEvent],
    *,
    newest_first: bool = True,
    limit: int | None = None,
) -> list[TransitionEvent]:
    """Order time-sorted *events* for a history report."""
    ordered = list(reversed(events)) if newest_first else list(events)
    if limit is not None:
        ordered = ordered[: max(limit, 0)]
    return ordered


def format_duration(value: timedelta) -> str:
    """Render a duration as ``"1d 02h 03m 04s"``, dropping leading zero units.

    >>> format_duration(timedelta(minutes=5, seconds=1))
    '5m 01s'
    """
    seconds = max(int(value.total_seconds()), 0)
    days, seconds = divmod(seconds, 86400)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)

    units = [(days, "d"), (hours, "h"), (minutes, "m"), (seconds, "s")]
    while len(units) > 1 and units[0][0] == 0:
        units.pop(0)
    first, *rest = units
    return " ".join([f"{first[0]}{first[1]}", *(f"{amount:02d}{suffix}" for amount, suffix in rest)])
