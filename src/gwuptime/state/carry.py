"""Per-period carry baselines.

A carry records the state believed true at the first instant of a period so
that reconstruction never has to replay earlier periods.  It is created the
first time a tick runs during the period and is never rewritten, even when
later information would change it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import ValidationError

from gwuptime._constants import carry_name
from gwuptime.exceptions import UptimeStorageError
from gwuptime.ingestion.normalize import normalize_snapshot
from gwuptime.models.events import CarrySnapshot
from gwuptime.periods import period_start
from gwuptime.storage.base import BlobStore
from gwuptime.timestamps import WallClockCodec

_logger = logging.getLogger(__name__)


class CarryStore:
    """Create and read ``uptime_carry_<period>`` resources."""

    def __init__(self, store: BlobStore, codec: WallClockCodec, *, name_prefix: str = "") -> None:
        self._store = store
        self._codec = codec
        self._prefix = name_prefix

    def name(self, period: str) -> str:
        return carry_name(period, self._prefix)

    async def ensure_carry(
        self,
        period: str,
        fallback_primary: Mapping[str, int] | None,
        fallback_secondary: Mapping[str, int] | None = None,
    ) -> CarrySnapshot | None:
        """Create the carry for *period* unless one already exists.

        The baseline is *fallback_primary* when it has entries, otherwise
        *fallback_secondary*, otherwise empty.  Returns the new snapshot, or
        ``None`` when a carry was already present.

        Raises
        ------
        UptimeStorageError
            When the existence check or the write fails.  A missing carry
            silently breaks reconstruction for the whole period, so this is
            never swallowed.
        """
        name = self.name(period)
        existing = await self._store.read(name)
        if existing is not None and existing.strip():
            return None

        if fallback_primary:
            state = normalize_snapshot(fallback_primary)
        elif fallback_secondary:
            state = normalize_snapshot(fallback_secondary)
        else:
            state = {}

        snapshot = CarrySnapshot(
            period_start=self._codec.encode(period_start(period, self._codec.zone)),
            state=state,
        )
        await self._store.write(name, snapshot.to_json())
        _logger.info("Created carry %s with %d gateway(s)", name, len(state))
        return snapshot

    async def load(self, period: str) -> CarrySnapshot | None:
        """Return the carry for *period*, or ``None`` when absent or unreadable."""
        name = self.name(period)
        try:
            text = await self._store.read(name)
        except UptimeStorageError as exc:
            _logger.warning("Could not read carry %s, treating as absent: %s", name, exc)
            return None
        if text is None or not text.strip():
            return None
        try:
            return CarrySnapshot.model_validate_json(text)
        except ValidationError as exc:
            _logger.warning("Ignoring malformed carry %s: %s", name, exc.errors()[:1])
            return None

    async def read_carry(self, period: str, gateway_id: str) -> int | None:
        snapshot = await self.load(period)
        if snapshot is None:
            return None
        return snapshot.state.get(gateway_id)
