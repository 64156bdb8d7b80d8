"""High-level facade exposed to the scheduler and the reporting layer."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

import aiohttp
from pydantic import ValidationError

from gwuptime.config import UptimeConfig
from gwuptime.exceptions import UptimeConfigError, UptimeStorageError
from gwuptime.ingestion.recorder import TransitionRecorder
from gwuptime.models.events import PollResult
from gwuptime.models.series import Failure, TickResult, UptimeReport
from gwuptime.series.aggregate import aggregate
from gwuptime.series.raster import rasterize
from gwuptime.series.reconstruct import Reconstruction, SeriesReconstructor
from gwuptime.state.carry import CarryStore
from gwuptime.state.snapshot import LatestSnapshotStore
from gwuptime.state.transitions import TransitionLog
from gwuptime.storage.base import BlobStore
from gwuptime.storage.files import FileBlobStore
from gwuptime.storage.gist import GistBlobStore
from gwuptime.storage.memory import MemoryBlobStore
from gwuptime.timestamps import WallClockCodec, utcnow

_logger = logging.getLogger(__name__)


def build_blob_store(config: UptimeConfig, session: aiohttp.ClientSession | None = None) -> BlobStore:
    """Instantiate the storage adapter named by ``config.storage``."""
    config.validate()
    if config.storage == "memory":
        return MemoryBlobStore()
    if config.storage == "file":
        assert config.store_dir is not None  # noqa: S101
        return FileBlobStore(config.store_dir)
    if session is None:
        raise UptimeConfigError("Gist storage needs an aiohttp session; use 'async with UptimeMonitor(...)'")
    assert config.gist_id is not None and config.github_token is not None  # noqa: S101
    return GistBlobStore(config.gist_id, config.github_token, session, api_base=config.github_api_base)


@dataclass(slots=True)
class _Engine:
    codec: WallClockCodec
    recorder: TransitionRecorder
    reconstructor: SeriesReconstructor


class UptimeMonitor:
    """Record poll ticks and answer uptime queries.

    All state hangs off the instance: storage, codec and the engine
    components are built from the configuration on first use.  Configuration
    and storage failures are logged and returned as :class:`Failure`.

    Usage::

        async with UptimeMonitor(UptimeConfig.from_env()) as monitor:
            await monitor.record_tick(polls)
            report = await monitor.query_uptime("gw-01", start, end)
    """

    def __init__(
        self,
        config: UptimeConfig,
        *,
        store: BlobStore | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._store = store
        self._external_session = session is not None
        self._http_session = session
        self._engine: _Engine | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> UptimeMonitor:
        if self._store is None and self._config.storage == "gist" and self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._engine = None

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def _get_engine(self) -> _Engine:
        if self._engine is not None:
            return self._engine
        if self._store is None:
            self._store = build_blob_store(self._config, self._http_session)
        codec = WallClockCodec(self._config.time_zone)
        prefix = self._config.name_prefix
        carries = CarryStore(self._store, codec, name_prefix=prefix)
        log = TransitionLog(self._store, name_prefix=prefix)
        latest = LatestSnapshotStore(self._store, name_prefix=prefix)
        self._engine = _Engine(
            codec=codec,
            recorder=TransitionRecorder(
                codec,
                carries,
                log,
                latest,
                round_minutes=self._config.tick_round_minutes,
            ),
            reconstructor=SeriesReconstructor(codec, carries, log),
        )
        return self._engine

    @property
    def codec(self) -> WallClockCodec:
        """The civil timestamp codec (raises :class:`UptimeConfigError` if misconfigured)."""
        return self._get_engine().codec

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def record_tick(
        self,
        polls: Iterable[PollResult | Mapping[str, Any]],
        now: datetime | None = None,
    ) -> TickResult | Failure:
        """Diff one poll against the latest snapshot and persist the result."""
        results = _coerce_polls(polls)
        try:
            engine = self._get_engine()
            return await engine.recorder.record(results, now or utcnow())
        except UptimeConfigError as exc:
            _logger.exception("Cannot record tick: configuration error")
            return Failure(kind="config", operation="record tick", message=str(exc))
        except UptimeStorageError as exc:
            _logger.exception("Cannot record tick: storage error on %s", exc.resource or "?")
            return Failure(kind="storage", operation="record tick", message=str(exc))

    async def reconstruct(self, gateway_id: str, start: datetime, end: datetime) -> Reconstruction:
        """Raw reconstruction; raises instead of returning :class:`Failure`."""
        return await self._get_engine().reconstructor.reconstruct(gateway_id, start, end)

    async def query_uptime(
        self,
        gateway_id: str,
        start: datetime,
        end: datetime,
        step: timedelta | None = None,
    ) -> UptimeReport | Failure:
        """Reconstruct, rasterize and aggregate one gateway over ``[start, end]``.

        Raises
        ------
        ValueError
            If ``end <= start`` or ``step`` is not positive.
        """
        if step is None:
            step = timedelta(minutes=self._config.default_step_minutes)
        if step <= timedelta(0):
            raise ValueError(f"step must be positive, got {step}")

        try:
            series = await self.reconstruct(gateway_id, start, end)
        except UptimeConfigError as exc:
            _logger.exception("Cannot query %s: configuration error", gateway_id)
            return Failure(kind="config", operation="fetch series", message=str(exc))
        except UptimeStorageError as exc:
            _logger.exception("Cannot query %s: storage error on %s", gateway_id, exc.resource or "?")
            return Failure(kind="storage", operation="fetch series", message=str(exc))

        stats = aggregate(series.intervals, series.start, series.end)
        return UptimeReport(
            gateway_id=gateway_id,
            start=series.start,
            end=series.end,
            step=step,
            intervals=series.intervals,
            slots=rasterize(series.intervals, series.start, series.end, step),
            up_fraction=stats.up_fraction,
            up_duration=stats.up_duration,
            down_duration=stats.down_duration,
            transitions_in_window=series.transitions_in_window,
        )


def _coerce_polls(polls: Iterable[PollResult | Mapping[str, Any]]) -> list[PollResult]:
    results: list[PollResult] = []
    for poll in polls:
        if isinstance(poll, PollResult):
            results.append(poll)
            continue
        try:
            results.append(PollResult.model_validate(poll))
        except ValidationError as exc:
            _logger.warning("Skipping malformed poll result %r: %s", poll, exc.errors()[:1])
    return results
