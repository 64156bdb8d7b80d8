"""Latest-known snapshot: ``{gatewayId: 0|1}``, overwritten on every tick."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from gwuptime._constants import LATEST_SNAPSHOT_NAME
from gwuptime.ingestion.normalize import normalize_snapshot
from gwuptime.storage.base import BlobStore

_logger = logging.getLogger(__name__)


class LatestSnapshotStore:
    """Read/replace the ``uptime_last`` resource.

    A missing or unparseable snapshot reads as empty (cold start).  Storage
    errors propagate: diffing against an empty snapshot because of a
    transient failure would record a spurious transition for every gateway.
    """

    def __init__(self, store: BlobStore, *, name_prefix: str = "") -> None:
        self._store = store
        self._name = f"{name_prefix}{LATEST_SNAPSHOT_NAME}"

    @property
    def name(self) -> str:
        return self._name

    async def read(self) -> dict[str, int]:
        text = await self._store.read(self._name)
        if text is None or not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            _logger.warning("Ignoring unparseable latest snapshot %s", self._name)
            return {}
        return normalize_snapshot(data)

    async def write(self, snapshot: Mapping[str, int]) -> None:
        await self._store.write(self._name, json.dumps(dict(snapshot), separators=(",", ":")))
