"""Transition recorder.

Diffs each poll tick against the latest known snapshot and appends one event
per gateway whose state changed.  The diff is edge-triggered: repeated polls
observing the same state emit nothing, and a gateway emits at most one event
per tick.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime

from gwuptime.ingestion.normalize import normalize_state
from gwuptime.models.events import PollResult, TransitionEvent
from gwuptime.models.series import TickResult
from gwuptime.periods import period_key
from gwuptime.state.carry import CarryStore
from gwuptime.state.snapshot import LatestSnapshotStore
from gwuptime.state.transitions import TransitionLog
from gwuptime.timestamps import WallClockCodec, round_to_interval

_logger = logging.getLogger(__name__)


def diff_snapshot(
    previous: Mapping[str, int],
    polls: Iterable[PollResult],
    timestamp: str,
) -> tuple[list[TransitionEvent], dict[str, int]]:
    """Return ``(events, next_snapshot)`` for one tick.

    Gateways missing from *previous* count as down.  *next_snapshot* holds
    exactly the polled gateways.  A gateway polled more than once in the
    same tick keeps its last reported state.
    """
    next_snapshot: dict[str, int] = {}
    for poll in polls:
        if poll.gateway_id in next_snapshot:
            _logger.debug("Gateway %s polled twice in one tick, keeping last state", poll.gateway_id)
        next_snapshot[poll.gateway_id] = poll.state

    events: list[TransitionEvent] = []
    for gateway_id, state in next_snapshot.items():
        if state != normalize_state(previous.get(gateway_id)):
            events.append(TransitionEvent(timestamp=timestamp, gateway_id=gateway_id, state=state))
    return events, next_snapshot


class TransitionRecorder:
    """Apply poll ticks to the carry store, the transition log and the snapshot."""

    def __init__(
        self,
        codec: WallClockCodec,
        carries: CarryStore,
        log: TransitionLog,
        latest: LatestSnapshotStore,
        *,
        round_minutes: int = 0,
    ) -> None:
        self._codec = codec
        self._carries = carries
        self._log = log
        self._latest = latest
        self._round_minutes = round_minutes

    async def record(self, polls: Iterable[PollResult], now: datetime) -> TickResult:
        """Record one tick observed at *now*.

        The snapshot is rewritten even when nothing changed so the next diff
        runs against this tick.
        """
        polls = list(polls)
        if self._round_minutes > 0:
            now = round_to_interval(now, self._round_minutes)
        period = period_key(now, self._codec.zone)
        timestamp = self._codec.encode(now)

        previous = await self._latest.read()
        current = {poll.gateway_id: poll.state for poll in polls}
        await self._carries.ensure_carry(period, previous, current)

        events, next_snapshot = diff_snapshot(previous, polls, timestamp)
        if events:
            await self._log.append(period, events)
            _logger.info("Recorded %d transition(s) at %s", len(events), timestamp)
        else:
            _logger.debug("No transitions at %s (%d gateway(s) polled)", timestamp, len(polls))
        await self._latest.write(next_snapshot)

        return TickResult(emitted_events=events, updated_snapshot=next_snapshot, period=period)
