from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from gwuptime import Failure, TickResult, UptimeConfig, UptimeMonitor, UptimeReport
from gwuptime.storage import MemoryBlobStore

_T0 = datetime(2025, 9, 10, 8, 0, tzinfo=UTC)  # 09:00 in Lisbon


def _monitor(store: MemoryBlobStore | None = None) -> UptimeMonitor:
    return UptimeMonitor(UptimeConfig(storage="memory"), store=store or MemoryBlobStore())


@pytest.mark.asyncio
async def test_record_then_query_round_trip() -> None:
    monitor = _monitor()
    # up at 09:00, down at 10:00, up again at 12:00
    for minutes, state in [(0, 1), (30, 1), (60, 0), (120, 0), (180, 1)]:
        result = await monitor.record_tick([{"gatewayId": "GW1", "state": state}], _T0 + timedelta(minutes=minutes))
        assert isinstance(result, TickResult)

    report = await monitor.query_uptime("GW1", _T0, _T0 + timedelta(hours=4), timedelta(hours=1))

    assert isinstance(report, UptimeReport)
    assert [i.state for i in report.intervals] == [1, 0, 1]
    assert report.up_duration == timedelta(hours=2)
    assert report.down_duration == timedelta(hours=2)
    assert report.up_fraction == 0.5
    assert report.slots == [True, False, False, True]
    assert [e.timestamp for e in report.transitions()] == ["2025-09-10T12:00:00", "2025-09-10T10:00:00"]


@pytest.mark.asyncio
async def test_first_tick_event_at_window_start_is_not_reported() -> None:
    monitor = _monitor()
    await monitor.record_tick([{"gatewayId": "GW1", "state": 1}], _T0)

    report = await monitor.query_uptime("GW1", _T0, _T0 + timedelta(hours=1))

    assert isinstance(report, UptimeReport)
    assert report.up_fraction == 1.0
    assert report.transitions_in_window == []


@pytest.mark.asyncio
async def test_malformed_polls_are_skipped() -> None:
    monitor = _monitor()
    result = await monitor.record_tick([{"state": 1}, {"gatewayId": "GW2", "state": "OK"}], _T0)
    assert isinstance(result, TickResult)
    assert result.updated_snapshot == {"GW2": 1}


@pytest.mark.asyncio
async def test_storage_failure_becomes_failure_result() -> None:
    store = MemoryBlobStore()
    store.fail_writes.add("uptime_last")
    result = await _monitor(store).record_tick([{"gatewayId": "GW1", "state": 1}], _T0)

    assert isinstance(result, Failure)
    assert result.kind == "storage"
    assert result.operation == "record tick"


@pytest.mark.asyncio
async def test_query_storage_failure_becomes_failure_result() -> None:
    store = MemoryBlobStore()
    store.fail_reads.add("uptime_transitions_2025-09")
    report = await _monitor(store).query_uptime("GW1", _T0, _T0 + timedelta(hours=1))

    assert isinstance(report, Failure)
    assert report.describe() == "failed to fetch series — see logs"


@pytest.mark.asyncio
async def test_missing_gist_credentials_is_config_failure() -> None:
    async with UptimeMonitor(UptimeConfig(storage="gist")) as monitor:
        tick = await monitor.record_tick([{"gatewayId": "GW1", "state": 1}], _T0)
        report = await monitor.query_uptime("GW1", _T0, _T0 + timedelta(hours=1))

    assert isinstance(tick, Failure) and tick.kind == "config"
    assert isinstance(report, Failure) and report.kind == "config"


@pytest.mark.asyncio
async def test_bad_time_zone_is_config_failure() -> None:
    monitor = UptimeMonitor(UptimeConfig(storage="memory", time_zone="Nowhere/Special"), store=MemoryBlobStore())
    result = await monitor.record_tick([], _T0)
    assert isinstance(result, Failure) and result.kind == "config"


@pytest.mark.asyncio
async def test_invalid_query_arguments_raise() -> None:
    monitor = _monitor()
    with pytest.raises(ValueError):
        await monitor.query_uptime("GW1", _T0, _T0 + timedelta(hours=1), timedelta(0))
    with pytest.raises(ValueError):
        await monitor.query_uptime("GW1", _T0, _T0)


@pytest.mark.asyncio
async def test_file_backend_from_config(tmp_path: Path) -> None:
    monitor = UptimeMonitor(UptimeConfig(storage="file", store_dir=tmp_path, name_prefix="gateways_"))
    result = await monitor.record_tick([{"gatewayId": "GW1", "state": 1}], _T0)

    assert isinstance(result, TickResult)
    assert (tmp_path / "gateways_uptime_last").read_text(encoding="utf-8") == '{"GW1":1}'
    assert (tmp_path / "gateways_uptime_carry_2025-09").exists()
    assert (tmp_path / "gateways_uptime_transitions_2025-09").exists()
