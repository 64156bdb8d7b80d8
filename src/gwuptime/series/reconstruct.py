"""Series reconstructor.

Rebuilds a gateway's up/down timeline over an arbitrary window, possibly
spanning several periods, from the per-period carries and transition logs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

from gwuptime.exceptions import TimestampParseError
from gwuptime.models.events import TransitionEvent
from gwuptime.models.series import StateInterval
from gwuptime.periods import periods_between
from gwuptime.state.carry import CarryStore
from gwuptime.state.transitions import TransitionLog
from gwuptime.timestamps import WallClockCodec, ensure_aware

_logger = logging.getLogger(__name__)

TimedEvent = tuple[datetime, TransitionEvent]


@dataclass(frozen=True, slots=True)
class Reconstruction:
    """Result of :meth:`SeriesReconstructor.reconstruct`.

    ``intervals`` cover ``[start, end]`` exactly; ``transitions_in_window``
    holds the events with ``start < t <= end`` in timeline order.
    """

    gateway_id: str
    start: datetime
    end: datetime
    intervals: list[StateInterval]
    transitions_in_window: list[TransitionEvent]
    initial_state: int
    state_at_start: int


def decode_timeline(events: Iterable[TransitionEvent], codec: WallClockCodec) -> list[TimedEvent]:
    """Decode event timestamps and sort ascending.

    The sort is stable, so events sharing a timestamp keep their file order.
    Events whose timestamp cannot be decoded are logged and dropped.
    """
    timeline: list[TimedEvent] = []
    for event in events:
        try:
            instant = codec.decode(event.timestamp)
        except TimestampParseError as exc:
            _logger.warning("Skipping transition for %s with bad timestamp: %s", event.gateway_id, exc)
            continue
        timeline.append((instant, event))
    timeline.sort(key=lambda item: item[0])
    return timeline


def build_intervals(
    timeline: Sequence[TimedEvent],
    initial_state: int,
    start: datetime,
    end: datetime,
) -> tuple[list[StateInterval], int]:
    """Walk a sorted timeline into intervals covering ``[start, end]``.

    Returns ``(intervals, state_at_start)``.  An event at or before the
    cursor only updates the running state, so duplicate or out-of-order
    timestamps never produce zero-length intervals and the last one in file
    order wins.
    """
    state = initial_state
    index = 0
    while index < len(timeline) and timeline[index][0] <= start:
        state = timeline[index][1].state
        index += 1
    state_at_start = state

    intervals: list[StateInterval] = []
    cursor = start
    for instant, event in timeline[index:]:
        if instant > end:
            break
        if instant <= cursor:
            state = event.state
            continue
        intervals.append(StateInterval(start=cursor, end=instant, state=state))
        cursor = instant
        state = event.state

    if cursor < end:
        intervals.append(StateInterval(start=cursor, end=end, state=state))
    return intervals, state_at_start


class SeriesReconstructor:
    """Load carries and logs for a window and stitch them into intervals."""

    def __init__(self, codec: WallClockCodec, carries: CarryStore, log: TransitionLog) -> None:
        self._codec = codec
        self._carries = carries
        self._log = log

    async def reconstruct(self, gateway_id: str, start: datetime, end: datetime) -> Reconstruction:
        """Reconstruct *gateway_id* over ``[start, end]``.

        The first carry (chronologically) that mentions the gateway gives the
        initial state; without one the gateway is assumed down.  Carry read
        failures count as absent; transition log read failures propagate as
        :class:`~gwuptime.exceptions.UptimeStorageError`.
        """
        start = ensure_aware(start)
        end = ensure_aware(end)
        if end <= start:
            raise ValueError(f"end ({end.isoformat()}) must be after start ({start.isoformat()})")

        periods = periods_between(start, end, self._codec.zone)
        initial_state: int | None = None
        events: list[TransitionEvent] = []
        for period in periods:
            if initial_state is None:
                initial_state = await self._carries.read_carry(period, gateway_id)
            events.extend(await self._log.events_for(period, gateway_id))

        if initial_state is None:
            initial_state = 0

        timeline = decode_timeline(events, self._codec)
        intervals, state_at_start = build_intervals(timeline, initial_state, start, end)
        in_window = [event for instant, event in timeline if start < instant <= end]

        _logger.debug(
            "Reconstructed %s over %s: %d event(s), %d interval(s)",
            gateway_id,
            ",".join(periods),
            len(timeline),
            len(intervals),
        )
        return Reconstruction(
            gateway_id=gateway_id,
            start=start,
            end=end,
            intervals=intervals,
            transitions_in_window=in_window,
            initial_state=initial_state,
            state_at_start=state_at_start,
        )
