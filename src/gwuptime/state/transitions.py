"""Append-only NDJSON transition logs, one per period."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import ValidationError

from gwuptime._constants import transitions_name
from gwuptime.models.events import TransitionEvent
from gwuptime.storage.base import BlobStore, append_lines

_logger = logging.getLogger(__name__)


def parse_transition_lines(text: str, *, source: str = "") -> list[TransitionEvent]:
    """Parse NDJSON content in file order, skipping lines that fail to decode."""
    events: list[TransitionEvent] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            events.append(TransitionEvent.model_validate_json(line))
        except ValidationError as exc:
            _logger.warning("Skipping bad transition line %s:%d: %s", source, lineno, exc.errors()[:1])
    return events


class TransitionLog:
    """Append to and read ``uptime_transitions_<period>`` resources.

    Appends are read-modify-write on the underlying store and assume a single
    writer per period.  Storage errors propagate in both directions.
    """

    def __init__(self, store: BlobStore, *, name_prefix: str = "") -> None:
        self._store = store
        self._prefix = name_prefix

    def name(self, period: str) -> str:
        return transitions_name(period, self._prefix)

    async def append(self, period: str, events: Sequence[TransitionEvent]) -> None:
        if not events:
            return
        await append_lines(self._store, self.name(period), [event.to_line() for event in events])

    async def read(self, period: str) -> list[TransitionEvent]:
        name = self.name(period)
        text = await self._store.read(name)
        if not text:
            return []
        return parse_transition_lines(text, source=name)

    async def events_for(self, period: str, gateway_id: str) -> list[TransitionEvent]:
        return [event for event in await self.read(period) if event.gateway_id == gateway_id]
