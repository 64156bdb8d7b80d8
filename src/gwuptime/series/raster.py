"""Fixed-step rasterization of a reconstructed timeline."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta

from gwuptime.models.series import StateInterval
from gwuptime.timestamps import ensure_aware

_ZERO = timedelta(0)


def rasterize(
    intervals: Sequence[StateInterval],
    start: datetime,
    end: datetime,
    step: timedelta,
) -> list[bool]:
    """Return one boolean per *step*-long slot from *start* to *end*.

    The final slot is truncated at *end* when the window is not a multiple of
    *step*.  A slot is up when its up-overlap is at least half of *step*, the
    nominal slot length, so a short final slot needs the same absolute uptime
    as a full one.  An exact half resolves to up.  Existing historical reports
    were produced with that tie-break, so the inequality must not change.

    *intervals* must be time-ordered; they are consumed with an advancing
    pointer and a slot never looks at intervals that ended before it.
    """
    if step <= _ZERO:
        raise ValueError(f"step must be positive, got {step}")
    start = ensure_aware(start)
    end = ensure_aware(end)

    slots: list[bool] = []
    pointer = 0
    index = 0
    slot_start = start
    while slot_start < end:
        slot_end = min(start + (index + 1) * step, end)
        while pointer < len(intervals) and intervals[pointer].end <= slot_start:
            pointer += 1

        up = _ZERO
        scan = pointer
        while scan < len(intervals) and intervals[scan].start < slot_end:
            interval = intervals[scan]
            if interval.state == 1:
                overlap = min(interval.end, slot_end) - max(interval.start, slot_start)
                if overlap > _ZERO:
                    up += overlap
            scan += 1

        slots.append(up * 2 >= step)
        index += 1
        slot_start = slot_end
    return slots


def render_slots(slots: Sequence[bool], *, up: str = "█", down: str = "░") -> str:
    """One-character-per-slot bar, handy in logs and debugging output."""
    return "".join(up if slot else down for slot in slots)
